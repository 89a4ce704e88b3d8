"""
Application configuration models and helpers.

Settings are split per concern (web/session, each OAuth provider, storage,
security) and composed into a single ``AppSettings`` object shared by the
FastAPI app factory and the dependency providers.
"""

from functools import lru_cache
from pathlib import Path

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file into the environment.

    Nested settings objects are built through ``default_factory`` and only read
    the process environment, so values from ``.env`` are promoted up front.
    """
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        os.environ[key] = value.strip().strip('"').strip("'")


_load_env_file()


class _Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)


class WebSettings(_Settings):
    """Public URL and browser session configuration."""

    host: str = Field(
        "http://localhost:8000",
        validation_alias="WEB_HOST",
        description="Public base URL; provider redirect URIs are built from it.",
    )
    session_secret: str = Field(..., validation_alias="SESSION_SECRET")
    session_max_age: int = Field(
        14 * 24 * 60 * 60,
        validation_alias="SESSION_MAX_AGE",
        description="Lifetime of the session cookie in seconds.",
    )
    session_https_only: bool = Field(False, validation_alias="SESSION_HTTPS_ONLY")
    user_agent: str = Field(
        "web:reddit-discord-linker:v0.1.0",
        validation_alias="HTTP_USER_AGENT",
        description="User-Agent sent to OAuth providers; Reddit rejects generic ones.",
    )

    @field_validator("host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class RedditSettings(_Settings):
    """Reddit OAuth application credentials."""

    client_id: str = Field(..., validation_alias="REDDIT_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="REDDIT_CLIENT_SECRET")
    scope: str = Field("identity", validation_alias="REDDIT_SCOPE")


class DiscordSettings(_Settings):
    """Discord OAuth application credentials."""

    client_id: str = Field(..., validation_alias="DISCORD_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="DISCORD_CLIENT_SECRET")
    scope: str = Field("identify", validation_alias="DISCORD_SCOPE")


class StorageSettings(_Settings):
    """Location of the account link database."""

    db_path: str = Field("data/links.db", validation_alias="LINK_DB_PATH")


class SecuritySettings(_Settings):
    """Security-related configuration."""

    token_encryption_secret: str | None = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the key that encrypts provider tokens kept "
            "in the session. Defaults to the session secret."
        ),
    )


class AppSettings(_Settings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    http_timeout_seconds: float = Field(10.0, validation_alias="HTTP_TIMEOUT_SECONDS")
    web: WebSettings = Field(default_factory=WebSettings)
    reddit: RedditSettings = Field(default_factory=RedditSettings)
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "DiscordSettings",
    "RedditSettings",
    "SecuritySettings",
    "StorageSettings",
    "WebSettings",
    "get_settings",
]
