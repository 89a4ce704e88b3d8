"""
Error taxonomy for the OAuth and linking flows.

Each error carries the HTTP status and the short message shown to the user.
Whatever detail is passed to the constructor is for the server log only.
"""

from __future__ import annotations

from http import HTTPStatus

PROVIDER_LABELS = {"reddit": "Reddit", "discord": "Discord"}


def provider_label(provider: str) -> str:
    return PROVIDER_LABELS.get(provider, provider.title())


class AccountLinkError(Exception):
    """Base class for failures that are reported to the browser."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    public_message: str = "An unexpected error occurred."

    def __init__(self, detail: str = "", *, provider: str | None = None) -> None:
        self.detail = detail
        self.provider = provider
        super().__init__(detail or self.public_message)


class ProviderError(AccountLinkError):
    """The provider redirected back with an error instead of a code."""

    status_code = HTTPStatus.BAD_REQUEST
    public_message = "Authorization was not completed. Please try again."


class StateMismatchError(AccountLinkError):
    """The returned state does not match the one stored in the session."""

    status_code = HTTPStatus.BAD_REQUEST
    public_message = "Authorization was not completed. Please try again."


class TokenExchangeError(AccountLinkError):
    """The provider token endpoint refused or failed the code exchange."""

    status_code = HTTPStatus.BAD_GATEWAY

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return (
            f"Error requesting {provider_label(self.provider or '')} authorization. "
            "Please try again. Contact a developer if the error persists."
        )


class ProfileFetchError(AccountLinkError):
    """The provider profile endpoint failed."""

    status_code = HTTPStatus.BAD_GATEWAY
    public_message = (
        "Error fetching your account details. Please try again. "
        "Contact a developer if the error persists."
    )


class Unauthenticated(AccountLinkError):
    """The session holds no identity for the named provider."""

    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, provider: str) -> None:
        super().__init__(f"No {provider} identity in session", provider=provider)

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return f"Not logged in with {provider_label(self.provider or '')}"


class StorageError(AccountLinkError):
    """The link store failed while reading or writing."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    public_message = "An unexpected error occurred. Get in touch with a bot developer."


__all__ = [
    "AccountLinkError",
    "ProfileFetchError",
    "ProviderError",
    "StateMismatchError",
    "StorageError",
    "TokenExchangeError",
    "Unauthenticated",
    "provider_label",
]
