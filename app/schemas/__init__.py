"""Public schema exports."""

from .auth import DiscordUserInfo, RedditUserInfo, TokenSet, UserInfo

__all__ = [
    "DiscordUserInfo",
    "RedditUserInfo",
    "TokenSet",
    "UserInfo",
]
