"""Expose constructed client wrappers."""

from .discord_auth import DiscordOAuthClient
from .link_store import LinkStoreError, SQLiteLinkStore
from .oauth import OAuthProviderClient
from .reddit_auth import RedditOAuthClient

__all__ = [
    "DiscordOAuthClient",
    "LinkStoreError",
    "OAuthProviderClient",
    "RedditOAuthClient",
    "SQLiteLinkStore",
]
