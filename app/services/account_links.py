"""
Records Discord-to-Reddit account links.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from app.clients.link_store import LinkStoreError
from app.core.errors import StorageError, Unauthenticated
from app.models.link import AccountLink
from app.services.session_state import SessionContext

logger = logging.getLogger(__name__)


class LinkStore(Protocol):
    def find_one(self, *, user_id: str, reddit_name: str) -> Optional[Dict[str, Any]]: ...

    def insert_one(self, link: AccountLink) -> bool: ...


class AccountLinkService:
    """Link the Reddit and Discord identities held in a session."""

    def __init__(self, store: LinkStore) -> None:
        self._store = store

    def link(self, session: SessionContext) -> bool:
        """Persist the link; returns True when a new record was written.

        An existing record for the same pair is left alone, so calling this
        repeatedly is harmless.
        """
        reddit = session.reddit_user
        if reddit is None:
            raise Unauthenticated("reddit")
        discord = session.discord_user
        if discord is None:
            raise Unauthenticated("discord")

        try:
            existing = self._store.find_one(user_id=discord.id, reddit_name=reddit.name)
            if existing:
                return False
            created = self._store.insert_one(
                AccountLink(user_id=discord.id, reddit_name=reddit.name)
            )
        except LinkStoreError as exc:
            raise StorageError(
                f"Database error while linking {discord.id} to /u/{reddit.name}"
            ) from exc

        if created:
            logger.info("Linked Discord user %s to /u/%s", discord.id, reddit.name)
        return created


__all__ = ["AccountLinkService", "LinkStore"]
