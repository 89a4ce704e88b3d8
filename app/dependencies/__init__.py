"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_clock,
    get_discord_oauth_client,
    get_link_store,
    get_reddit_oauth_client,
    get_session_context,
    get_token_cipher_service,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_app_settings",
    "get_clock",
    "get_discord_oauth_client",
    "get_link_store",
    "get_reddit_oauth_client",
    "get_session_context",
    "get_token_cipher_service",
]
