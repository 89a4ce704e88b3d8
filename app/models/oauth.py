"""
Domain models for OAuth tokens kept in the browser session.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class StoredTokens(BaseModel):
    """Encrypted provider tokens plus their absolute expiry."""

    access_token_encrypted: str
    refresh_token_encrypted: Optional[str] = None
    token_type: str = "bearer"
    scope: str = ""
    expires_at: datetime = Field(..., description="UTC instant the access token expires.")


__all__ = ["StoredTokens"]
