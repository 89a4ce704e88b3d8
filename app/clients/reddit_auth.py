"""
Reddit OAuth client.

See https://github.com/reddit-archive/reddit/wiki/oauth2 for Reddit's flavour
of the authorization-code flow.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from app.clients.oauth import OAuthProviderClient
from app.core.config import RedditSettings, WebSettings
from app.schemas.auth import RedditUserInfo


class RedditOAuthClient(OAuthProviderClient):
    """Reddit endpoints and profile mapping."""

    name = "reddit"
    AUTH_BASE_URL = "https://old.reddit.com/api/v1/authorize"
    TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
    PROFILE_URL = "https://oauth.reddit.com/api/v1/me"
    REVOKE_URL = "https://www.reddit.com/api/v1/revoke_token"

    def __init__(
        self, reddit_settings: RedditSettings, web_settings: WebSettings, *, timeout: float = 10.0
    ) -> None:
        super().__init__(
            client_id=reddit_settings.client_id,
            client_secret=reddit_settings.client_secret,
            scope=reddit_settings.scope,
            web_settings=web_settings,
            timeout=timeout,
        )

    def authorization_params(self) -> Dict[str, str]:
        params = super().authorization_params()
        # Ask for a refresh token as well.
        params["duration"] = "permanent"
        return params

    def parse_user_info(self, data: Dict[str, Any]) -> RedditUserInfo:
        subreddit = data.get("subreddit") or {}
        return RedditUserInfo(
            name=data["name"],
            avatar_url=subreddit.get("icon_img") or None,
            account_age=datetime.fromtimestamp(float(data["created_utc"]), tz=timezone.utc),
        )


__all__ = ["RedditOAuthClient"]
