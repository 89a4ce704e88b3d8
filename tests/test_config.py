try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest
from pydantic import ValidationError

from app.core.config import AppSettings, RedditSettings, WebSettings


def test_web_host_is_normalized_without_trailing_slash() -> None:
    web = WebSettings(WEB_HOST="https://linker.example.com/", SESSION_SECRET="s")

    assert web.host == "https://linker.example.com"


def test_reddit_settings_require_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REDDIT_CLIENT_ID", raising=False)
    monkeypatch.delenv("REDDIT_CLIENT_SECRET", raising=False)

    with pytest.raises(ValidationError):
        RedditSettings()  # type: ignore[call-arg]


def test_app_settings_read_nested_sections_from_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("REDDIT_SCOPE", "identity,read")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LINK_DB_PATH", "/tmp/other.db")

    settings = AppSettings()  # type: ignore[call-arg]

    assert settings.reddit.scope == "identity,read"
    assert settings.reddit.client_id == "reddit-client-id"
    assert settings.discord.scope == "identify"
    assert settings.http_timeout_seconds == 2.5
    assert settings.storage.db_path == "/tmp/other.db"
