"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from fastapi import Request

from app.clients import DiscordOAuthClient, RedditOAuthClient, SQLiteLinkStore
from app.core.config import get_settings
from app.services import SessionContext, TokenCipherService
from app.services.oauth_flow import Clock, utc_now


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_reddit_oauth_client() -> RedditOAuthClient:
    """Create a singleton Reddit OAuth client."""
    settings = _settings()
    return RedditOAuthClient(
        settings.reddit, settings.web, timeout=settings.http_timeout_seconds
    )


@lru_cache()
def get_discord_oauth_client() -> DiscordOAuthClient:
    """Create a singleton Discord OAuth client."""
    settings = _settings()
    return DiscordOAuthClient(
        settings.discord, settings.web, timeout=settings.http_timeout_seconds
    )


@lru_cache()
def get_link_store() -> SQLiteLinkStore:
    """Provide the shared account link store."""
    return SQLiteLinkStore(_settings().storage.db_path)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for tokens kept in the session."""
    settings = _settings()
    secret = settings.security.token_encryption_secret or settings.web.session_secret
    return TokenCipherService(secret=secret)


def get_session_context(request: Request) -> SessionContext:
    """Wrap the middleware-managed session of the current request."""
    return SessionContext(request.session)


def get_clock() -> Clock:
    """Clock used to turn token lifetimes into absolute expiry times."""
    return utc_now


__all__ = [
    "get_clock",
    "get_discord_oauth_client",
    "get_link_store",
    "get_reddit_oauth_client",
    "get_session_context",
    "get_token_cipher_service",
]
