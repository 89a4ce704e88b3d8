"""
Authorization-code flow against a single OAuth provider.

``begin`` issues the anti-forgery state and the consent URL; ``complete``
validates the callback, exchanges the code, fetches the profile and only then
writes tokens and profile to the session. Any failure raises one of the
``app.core.errors`` types and leaves the session untouched.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from app.clients.oauth import OAuthProviderClient
from app.core.errors import ProviderError, StateMismatchError
from app.models.oauth import StoredTokens
from app.services.session_state import SessionContext
from app.services.token_cipher import TokenCipherService, TokenDecryptError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_REDIRECT = "/"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_state() -> str:
    return secrets.token_urlsafe(32)


def safe_next_path(value: Optional[str]) -> Optional[str]:
    """Return ``value`` if it is a same-site relative path, else None."""
    if not value or not value.startswith("/") or value.startswith("//"):
        return None
    if "\\" in value:
        return None
    return value


class OAuthFlowService:
    """Drive one provider's login flow for one browser session."""

    def __init__(
        self,
        oauth_client: OAuthProviderClient,
        token_cipher: TokenCipherService,
        *,
        clock: Clock = utc_now,
        state_factory: Callable[[], str] = generate_state,
    ) -> None:
        self._client = oauth_client
        self._cipher = token_cipher
        self._clock = clock
        self._state_factory = state_factory

    @property
    def provider(self) -> str:
        return self._client.name

    def begin(self, session: SessionContext, next_path: Optional[str] = None) -> str:
        """Store a fresh state in the session and return the consent URL."""
        state = self._state_factory()
        session.begin_flow(self.provider, state, safe_next_path(next_path))
        return self._client.build_authorization_url(state)

    async def complete(
        self,
        session: SessionContext,
        *,
        error: Optional[str],
        state: Optional[str],
        code: Optional[str],
    ) -> str:
        """Finish the flow and return the path to send the browser to."""
        if error:
            raise ProviderError(
                f"{self.provider} gave error after auth page: {error}",
                provider=self.provider,
            )

        expected = session.get_state(self.provider)
        if not state or not expected or not secrets.compare_digest(
            state.encode("utf-8"), expected.encode("utf-8")
        ):
            raise StateMismatchError(
                f"{self.provider} gave incorrect state after auth page",
                provider=self.provider,
            )

        if not code:
            raise ProviderError(
                f"{self.provider} callback carried no authorization code",
                provider=self.provider,
            )

        tokens = await self._client.exchange_authorization_code(code)
        expires_at = self._clock() + timedelta(seconds=tokens.expires_in)

        user_info = await self._client.fetch_user_info(tokens.access_token)

        stored = StoredTokens(
            access_token_encrypted=self._cipher.encrypt(tokens.access_token),
            refresh_token_encrypted=self._cipher.encrypt_optional(tokens.refresh_token),
            token_type=tokens.token_type,
            scope=tokens.scope,
            expires_at=expires_at,
        )
        next_path = session.store_connection(self.provider, stored, user_info)
        logger.info("Completed %s login for %s", self.provider, user_info.display_name)
        return next_path or DEFAULT_REDIRECT

    async def logout(self, session: SessionContext) -> None:
        """Forget this provider's identity, revoking the stored grant if possible."""
        stored = session.tokens(self.provider)
        session.clear(self.provider)
        if stored is None:
            return

        if stored.refresh_token_encrypted:
            encrypted, hint = stored.refresh_token_encrypted, "refresh_token"
        else:
            encrypted, hint = stored.access_token_encrypted, "access_token"
        try:
            token = self._cipher.decrypt(encrypted)
        except TokenDecryptError:
            logger.warning("Could not decrypt %s token for revocation", self.provider)
            return
        await self._client.revoke_token(token, hint)


__all__ = [
    "Clock",
    "OAuthFlowService",
    "generate_state",
    "safe_next_path",
    "utc_now",
]
