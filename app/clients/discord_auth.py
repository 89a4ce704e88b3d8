"""Discord OAuth client."""

from __future__ import annotations

from typing import Any, Dict

from app.clients.oauth import OAuthProviderClient
from app.core.config import DiscordSettings, WebSettings
from app.schemas.auth import DiscordUserInfo


class DiscordOAuthClient(OAuthProviderClient):
    """Discord endpoints and profile mapping."""

    name = "discord"
    AUTH_BASE_URL = "https://discord.com/oauth2/authorize"
    TOKEN_URL = "https://discord.com/api/oauth2/token"
    PROFILE_URL = "https://discord.com/api/users/@me"
    REVOKE_URL = "https://discord.com/api/oauth2/token/revoke"
    AVATAR_URL = "https://cdn.discordapp.com/avatars/{user_id}/{avatar}.png"

    def __init__(
        self, discord_settings: DiscordSettings, web_settings: WebSettings, *, timeout: float = 10.0
    ) -> None:
        super().__init__(
            client_id=discord_settings.client_id,
            client_secret=discord_settings.client_secret,
            scope=discord_settings.scope,
            web_settings=web_settings,
            timeout=timeout,
        )

    def parse_user_info(self, data: Dict[str, Any]) -> DiscordUserInfo:
        user_id = str(data["id"])
        avatar = data.get("avatar")
        return DiscordUserInfo(
            id=user_id,
            username=data["username"],
            discriminator=data.get("discriminator"),
            avatar_url=self.AVATAR_URL.format(user_id=user_id, avatar=avatar) if avatar else None,
        )


__all__ = ["DiscordOAuthClient"]
