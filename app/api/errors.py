"""
Maps flow and linking errors to plain-text responses.

Only the error's public message reaches the browser; the detail and the
chained cause go to the log.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.core.errors import AccountLinkError

logger = logging.getLogger(__name__)


async def account_link_error_handler(request: Request, exc: AccountLinkError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.detail or type(exc).__name__,
            exc_info=exc,
        )
    else:
        logger.warning(
            "%s %s rejected: %s",
            request.method,
            request.url.path,
            exc.detail or type(exc).__name__,
        )
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccountLinkError, account_link_error_handler)  # type: ignore[arg-type]


__all__ = ["account_link_error_handler", "register_exception_handlers"]
