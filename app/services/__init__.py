"""Service layer exports."""

from .account_links import AccountLinkService
from .oauth_flow import OAuthFlowService
from .session_state import SessionContext
from .token_cipher import TokenCipherService

__all__ = [
    "AccountLinkService",
    "OAuthFlowService",
    "SessionContext",
    "TokenCipherService",
]
