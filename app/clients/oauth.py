"""
Shared OAuth 2 authorization-code client.

Subclasses pin the provider endpoints and map the provider's profile payload;
building the consent URL, exchanging codes and fetching the profile follow the
same sequence for every provider.
"""

from __future__ import annotations

import logging
from typing import Any, Dict
from urllib.parse import urlencode

import httpx

from fastapi import status

from app.core.config import WebSettings
from app.core.errors import ProfileFetchError, TokenExchangeError
from app.schemas.auth import TokenSet, UserInfo

logger = logging.getLogger(__name__)


class OAuthProviderClient:
    """Build authorization URLs, exchange codes and fetch user profiles."""

    name: str = ""
    AUTH_BASE_URL: str = ""
    TOKEN_URL: str = ""
    PROFILE_URL: str = ""
    REVOKE_URL: str = ""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        scope: str,
        web_settings: WebSettings,
        timeout: float = 10.0,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._scope = scope
        self._web = web_settings
        self._timeout = timeout

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout, headers={"User-Agent": self._web.user_agent}
        )

    @property
    def redirect_uri(self) -> str:
        return f"{self._web.host}/auth/{self.name}/callback"

    def authorization_params(self) -> Dict[str, str]:
        """Fixed query parameters of the consent URL, without the state."""
        return {
            "client_id": self._client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "scope": self._scope,
        }

    def build_authorization_url(self, state: str) -> str:
        """Construct the provider consent URL for the given state."""
        base = f"{self.AUTH_BASE_URL}?{urlencode(self.authorization_params())}"
        return f"{base}&{urlencode({'state': state})}"

    async def exchange_authorization_code(self, code: str) -> TokenSet:
        """Exchange an authorization code for an access/refresh token pair."""
        payload = {
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_uri,
            "code": code,
        }

        try:
            async with self._http_client() as client:
                response = await client.post(
                    self.TOKEN_URL,
                    data=payload,
                    auth=(self._client_id, self._client_secret),
                )
        except httpx.HTTPError as exc:
            raise TokenExchangeError(
                f"{self.name} token request failed: {exc!r}", provider=self.name
            ) from exc

        if response.status_code != status.HTTP_200_OK:
            raise TokenExchangeError(
                f"{self.name} gave non-200 status when requesting tokens: "
                f"{response.status_code}",
                provider=self.name,
            )

        token_payload = self._json(response, TokenExchangeError)
        if token_payload.get("error"):
            raise TokenExchangeError(
                f"{self.name} gave an error when requesting tokens: "
                f"{token_payload['error']}",
                provider=self.name,
            )
        if not token_payload.get("access_token") or token_payload.get("expires_in") is None:
            raise TokenExchangeError(
                f"Incomplete token payload returned from {self.name}.",
                provider=self.name,
            )

        try:
            return TokenSet(
                access_token=token_payload["access_token"],
                refresh_token=token_payload.get("refresh_token"),
                token_type=token_payload.get("token_type") or "bearer",
                scope=token_payload.get("scope") or "",
                expires_in=int(token_payload["expires_in"]),
            )
        except (TypeError, ValueError) as exc:
            raise TokenExchangeError(
                f"Malformed token payload returned from {self.name}: {exc!r}",
                provider=self.name,
            ) from exc

    async def fetch_user_info(self, access_token: str) -> UserInfo:
        """Fetch the profile of the user owning ``access_token``."""
        try:
            async with self._http_client() as client:
                response = await client.get(
                    self.PROFILE_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as exc:
            raise ProfileFetchError(
                f"{self.name} profile request failed: {exc!r}", provider=self.name
            ) from exc

        if response.status_code != status.HTTP_200_OK:
            raise ProfileFetchError(
                f"{self.name} gave non-200 status when fetching user info: "
                f"{response.status_code}",
                provider=self.name,
            )

        data = self._json(response, ProfileFetchError)
        try:
            return self.parse_user_info(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ProfileFetchError(
                f"Unexpected {self.name} profile payload: {exc!r}", provider=self.name
            ) from exc

    async def revoke_token(self, token: str, token_type_hint: str = "refresh_token") -> bool:
        """Best-effort revocation used on logout; returns whether it succeeded."""
        try:
            async with self._http_client() as client:
                response = await client.post(
                    self.REVOKE_URL,
                    data={"token": token, "token_type_hint": token_type_hint},
                    auth=(self._client_id, self._client_secret),
                )
        except httpx.HTTPError as exc:
            logger.warning("%s token revocation failed: %r", self.name, exc)
            return False
        if not response.is_success:
            logger.warning(
                "%s gave status %s when revoking a token", self.name, response.status_code
            )
            return False
        return True

    def parse_user_info(self, data: Dict[str, Any]) -> UserInfo:
        raise NotImplementedError

    def _json(self, response: httpx.Response, error_cls: type) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise error_cls(
                f"{self.name} returned a non-JSON body", provider=self.name
            ) from exc
        if not isinstance(data, dict):
            raise error_cls(f"{self.name} returned a non-object body", provider=self.name)
        return data


__all__ = ["OAuthProviderClient"]
