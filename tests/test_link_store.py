try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import sqlite3

import pytest

from app.clients.link_store import LinkStoreError, SQLiteLinkStore
from app.core.errors import StorageError
from app.models.link import AccountLink
from app.services.account_links import AccountLinkService
from app.services.session_state import SessionContext


def test_insert_then_find(tmp_path) -> None:
    store = SQLiteLinkStore(str(tmp_path / "nested" / "links.db"))

    assert store.find_one(user_id="42", reddit_name="alice") is None
    assert store.insert_one(AccountLink(user_id="42", reddit_name="alice")) is True

    record = store.find_one(user_id="42", reddit_name="alice")
    assert record["user_id"] == "42"
    assert record["reddit_name"] == "alice"
    assert record["linked_at"]


def test_duplicate_insert_is_ignored(tmp_path) -> None:
    db_path = tmp_path / "links.db"
    store = SQLiteLinkStore(str(db_path))

    assert store.insert_one(AccountLink(user_id="42", reddit_name="alice")) is True
    assert store.insert_one(AccountLink(user_id="42", reddit_name="alice")) is False
    assert store.insert_one(AccountLink(user_id="42", reddit_name="bob")) is True

    with sqlite3.connect(db_path) as conn:
        (count,) = conn.execute("SELECT COUNT(*) FROM reddit_accounts").fetchone()
    assert count == 2


def test_database_failures_raise_link_store_error(tmp_path) -> None:
    db_path = tmp_path / "links.db"
    store = SQLiteLinkStore(str(db_path))
    with sqlite3.connect(db_path) as conn:
        conn.execute("DROP TABLE reddit_accounts")

    with pytest.raises(LinkStoreError):
        store.find_one(user_id="42", reddit_name="alice")
    with pytest.raises(LinkStoreError):
        store.insert_one(AccountLink(user_id="42", reddit_name="alice"))


def test_service_links_session_identities_once(tmp_path) -> None:
    store = SQLiteLinkStore(str(tmp_path / "links.db"))
    service = AccountLinkService(store)
    session = SessionContext(
        {
            "reddit_user": {"name": "alice", "account_age": "2015-01-01T00:00:00Z"},
            "discord_user": {"id": "42", "username": "carol"},
        }
    )

    assert service.link(session) is True
    assert service.link(session) is False


def test_service_maps_store_failures_to_storage_error(tmp_path) -> None:
    db_path = tmp_path / "links.db"
    store = SQLiteLinkStore(str(db_path))
    with sqlite3.connect(db_path) as conn:
        conn.execute("DROP TABLE reddit_accounts")
    session = SessionContext(
        {
            "reddit_user": {"name": "alice", "account_age": "2015-01-01T00:00:00Z"},
            "discord_user": {"id": "42", "username": "carol"},
        }
    )

    with pytest.raises(StorageError) as excinfo:
        AccountLinkService(store).link(session)

    assert isinstance(excinfo.value.__cause__, LinkStoreError)
