"""
FastAPI application entrypoint for the Reddit/Discord account linker.
"""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from app.api.errors import register_exception_handlers
from app.api.routes import router
from app.core.config import get_settings
from app.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Reddit/Discord Account Linker",
        version="0.1.0",
        description="OAuth logins for Reddit and Discord and the link between them.",
    )
    # Lax keeps the cookie on the top-level redirect back from the provider.
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.web.session_secret,
        max_age=settings.web.session_max_age,
        same_site="lax",
        https_only=settings.web.session_https_only,
    )
    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
