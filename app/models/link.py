"""
Domain model for a persisted Discord-to-Reddit association.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class AccountLink(BaseModel):
    """One row of the link table, keyed by (user_id, reddit_name)."""

    user_id: str = Field(..., description="Discord user id.")
    reddit_name: str = Field(..., description="Reddit username without the /u/ prefix.")
    linked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["AccountLink"]
