try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from app.core.errors import TokenExchangeError
from app.main import app
from app.schemas.auth import RedditUserInfo, TokenSet
from app.services.session_state import SessionContext
from app.services.token_cipher import TokenCipherService

FIXED_NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


class DummyOAuthClient:
    name = "reddit"

    def __init__(self) -> None:
        self.states: list[str] = []
        self.codes: list[str] = []
        self.fail_exchange = False

    def build_authorization_url(self, state: str) -> str:
        self.states.append(state)
        return f"https://oauth.example.com/auth?state={state}"

    async def exchange_authorization_code(self, code: str) -> TokenSet:
        self.codes.append(code)
        if self.fail_exchange:
            raise TokenExchangeError("reddit gave non-200 status: 500", provider="reddit")
        return TokenSet(access_token="access-token", refresh_token="refresh-token", expires_in=3600)

    async def fetch_user_info(self, access_token: str) -> RedditUserInfo:
        return RedditUserInfo(name="alice", account_age=datetime(2015, 1, 1, tzinfo=timezone.utc))


@pytest.fixture()
def oauth_overrides():
    from app import dependencies

    dummy_client = DummyOAuthClient()
    session_data: dict = {}
    cipher = TokenCipherService(secret="route-secret")

    overrides = {
        dependencies.get_reddit_oauth_client: lambda: dummy_client,
        dependencies.get_session_context: lambda: SessionContext(session_data),
        dependencies.get_token_cipher_service: lambda: cipher,
        dependencies.get_clock: lambda: (lambda: FIXED_NOW),
    }

    app.dependency_overrides.update(overrides)

    yield dummy_client, session_data, cipher

    app.dependency_overrides.clear()


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    )


@pytest.mark.anyio
async def test_entry_redirects_to_consent_page_with_fresh_state(oauth_overrides):
    dummy_client, session_data, _ = oauth_overrides

    async with _client() as client:
        first = await client.get("/auth/reddit/", params={"next": "/verify"})
        first_state = session_data["reddit_state"]
        await client.get("/auth/reddit/")

    assert first.status_code == 307
    assert first.headers["location"] == f"https://oauth.example.com/auth?state={first_state}"
    assert len(first_state) >= 32
    assert dummy_client.states[0] == first_state
    assert session_data["reddit_state"] != first_state
    assert "reddit_next" not in session_data


@pytest.mark.anyio
async def test_callback_with_error_parameter_is_terminal(oauth_overrides):
    dummy_client, session_data, _ = oauth_overrides

    async with _client() as client:
        await client.get("/auth/reddit/")
        state = session_data["reddit_state"]
        response = await client.get(
            "/auth/reddit/callback", params={"error": "access_denied", "state": state}
        )

    assert response.status_code == 400
    assert "location" not in response.headers
    assert response.headers["content-type"].startswith("text/plain")
    assert dummy_client.codes == []


@pytest.mark.anyio
async def test_callback_with_wrong_state_never_exchanges(oauth_overrides):
    dummy_client, _, _ = oauth_overrides

    async with _client() as client:
        await client.get("/auth/reddit/")
        response = await client.get(
            "/auth/reddit/callback", params={"state": "forged", "code": "oauth-code"}
        )

    assert response.status_code == 400
    assert dummy_client.codes == []
    assert "reddit_user" not in oauth_overrides[1]


@pytest.mark.anyio
async def test_callback_exchange_failure_shows_generic_message(oauth_overrides):
    dummy_client, session_data, _ = oauth_overrides
    dummy_client.fail_exchange = True

    async with _client() as client:
        await client.get("/auth/reddit/")
        state = session_data["reddit_state"]
        response = await client.get(
            "/auth/reddit/callback", params={"state": state, "code": "oauth-code"}
        )

    assert response.status_code == 502
    assert response.text.startswith("Error requesting Reddit authorization.")
    assert "500" not in response.text
    assert "reddit_tokens" not in session_data


@pytest.mark.anyio
async def test_callback_success_stores_session_and_redirects(oauth_overrides):
    dummy_client, session_data, cipher = oauth_overrides

    async with _client() as client:
        await client.get("/auth/reddit/", params={"next": "/verify"})
        state = session_data["reddit_state"]
        response = await client.get(
            "/auth/reddit/callback", params={"state": state, "code": "oauth-code"}
        )

    assert response.status_code == 307
    assert response.headers["location"] == "/verify"
    assert dummy_client.codes == ["oauth-code"]

    session = SessionContext(session_data)
    assert session.reddit_user.name == "alice"
    tokens = session.tokens("reddit")
    assert tokens.expires_at == FIXED_NOW + timedelta(seconds=3600)
    assert cipher.decrypt(tokens.access_token_encrypted) == "access-token"


@pytest.mark.anyio
async def test_logout_forgets_identity(oauth_overrides):
    _, session_data, _ = oauth_overrides
    session_data["reddit_user"] = {"name": "alice", "account_age": "2015-01-01T00:00:00Z"}

    async with _client() as client:
        response = await client.get("/auth/reddit/logout", params={"next": "/verify"})

    assert response.status_code == 307
    assert response.headers["location"] == "/verify"
    assert session_data == {}


@pytest.mark.anyio
async def test_session_cookie_survives_provider_round_trip():
    """The real session middleware keeps the state between entry and callback."""
    from app import dependencies

    dummy_client = DummyOAuthClient()
    app.dependency_overrides[dependencies.get_reddit_oauth_client] = lambda: dummy_client
    try:
        async with _client() as client:
            entry = await client.get("/auth/reddit/")
            state = dummy_client.states[-1]
            callback = await client.get(
                "/auth/reddit/callback", params={"state": state, "code": "oauth-code"}
            )
            page = await client.get("/verify")
    finally:
        app.dependency_overrides.clear()

    assert entry.status_code == 307
    assert "session" in entry.cookies or "session" in client.cookies
    assert callback.status_code == 307
    assert callback.headers["location"] == "/"
    assert "/u/alice" in page.text
