"""
Typed access to the per-browser session.

The session middleware hands every request a mutable mapping that is persisted
in a signed cookie; handlers never touch that mapping directly but go through
``SessionContext`` so the stored shape stays in one place.
"""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional, Type

from pydantic import BaseModel, ValidationError

from app.models.oauth import StoredTokens
from app.schemas.auth import DiscordUserInfo, RedditUserInfo, UserInfo

logger = logging.getLogger(__name__)

USER_INFO_MODELS: dict[str, Type[BaseModel]] = {
    "reddit": RedditUserInfo,
    "discord": DiscordUserInfo,
}


class SessionContext:
    """Read and write OAuth state, tokens and profiles for each provider."""

    def __init__(self, data: MutableMapping[str, Any]) -> None:
        self._data = data

    @staticmethod
    def _key(provider: str, field: str) -> str:
        return f"{provider}_{field}"

    def get_state(self, provider: str) -> Optional[str]:
        return self._data.get(self._key(provider, "state"))

    def begin_flow(self, provider: str, state: str, next_path: Optional[str]) -> None:
        self._data[self._key(provider, "state")] = state
        if next_path:
            self._data[self._key(provider, "next")] = next_path
        else:
            self._data.pop(self._key(provider, "next"), None)

    def store_connection(self, provider: str, tokens: StoredTokens, user_info: UserInfo) -> Optional[str]:
        """Record a completed login and return the pending post-login path, if any.

        The state is consumed here so a replayed callback cannot pass the check.
        """
        self._data.pop(self._key(provider, "state"), None)
        self._data[self._key(provider, "tokens")] = tokens.model_dump(mode="json")
        self._data[self._key(provider, "user")] = user_info.model_dump(mode="json")
        return self._data.pop(self._key(provider, "next"), None)

    def tokens(self, provider: str) -> Optional[StoredTokens]:
        raw = self._data.get(self._key(provider, "tokens"))
        if raw is None:
            return None
        try:
            return StoredTokens.model_validate(raw)
        except ValidationError:
            logger.warning("Discarding malformed %s tokens in session", provider)
            self._data.pop(self._key(provider, "tokens"), None)
            return None

    def user_info(self, provider: str) -> Optional[UserInfo]:
        raw = self._data.get(self._key(provider, "user"))
        if raw is None:
            return None
        try:
            return USER_INFO_MODELS[provider].model_validate(raw)  # type: ignore[return-value]
        except ValidationError:
            logger.warning("Discarding malformed %s profile in session", provider)
            self._data.pop(self._key(provider, "user"), None)
            return None

    @property
    def reddit_user(self) -> Optional[RedditUserInfo]:
        return self.user_info("reddit")  # type: ignore[return-value]

    @property
    def discord_user(self) -> Optional[DiscordUserInfo]:
        return self.user_info("discord")  # type: ignore[return-value]

    def clear(self, provider: str) -> None:
        for field in ("state", "next", "tokens", "user"):
            self._data.pop(self._key(provider, field), None)


__all__ = ["SessionContext", "USER_INFO_MODELS"]
