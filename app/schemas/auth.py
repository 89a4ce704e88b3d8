"""Schemas describing OAuth provider payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field


class TokenSet(BaseModel):
    """Result of exchanging an authorization code at a token endpoint."""

    access_token: str = Field(..., description="Short-lived bearer credential.")
    refresh_token: Optional[str] = Field(
        None, description="Renewal credential; Reddit sends one for permanent grants."
    )
    token_type: str = Field("bearer")
    scope: str = Field("")
    expires_in: int = Field(..., description="Access token lifetime in seconds.")


class RedditUserInfo(BaseModel):
    """Snapshot of the Reddit account, fetched once per login."""

    name: str
    avatar_url: Optional[str] = None
    account_age: datetime = Field(
        ..., description="Account creation time (UTC), from created_utc."
    )

    @property
    def display_name(self) -> str:
        return f"/u/{self.name}"


class DiscordUserInfo(BaseModel):
    """Snapshot of the Discord account, fetched once per login."""

    id: str
    username: str
    discriminator: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        # Accounts migrated to unique usernames report discriminator "0".
        if self.discriminator and self.discriminator != "0":
            return f"{self.username}#{self.discriminator}"
        return self.username


UserInfo = Union[RedditUserInfo, DiscordUserInfo]


__all__ = ["DiscordUserInfo", "RedditUserInfo", "TokenSet", "UserInfo"]
