"""
OAuth entry, callback and logout routes.

Reddit and Discord get the same three routes under ``/auth/<provider>``; only
the injected client differs.
"""

from http import HTTPStatus
from typing import Annotated, Any, Callable

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from app.dependencies import (
    get_clock,
    get_discord_oauth_client,
    get_reddit_oauth_client,
    get_session_context,
    get_token_cipher_service,
)
from app.services.oauth_flow import DEFAULT_REDIRECT, OAuthFlowService, safe_next_path
from app.services.session_state import SessionContext


def build_oauth_router(provider: str, client_dependency: Callable[..., Any]) -> APIRouter:
    """Create the login routes for one provider."""
    router = APIRouter(prefix=f"/auth/{provider}", tags=[f"{provider}-auth"])

    def get_flow(
        oauth_client: Annotated[Any, Depends(client_dependency)],
        token_cipher: Annotated[Any, Depends(get_token_cipher_service)],
        clock: Annotated[Any, Depends(get_clock)],
    ) -> OAuthFlowService:
        return OAuthFlowService(oauth_client, token_cipher, clock=clock)

    @router.get("/", name=f"{provider}_oauth_start")
    async def start_oauth_flow(
        session: Annotated[SessionContext, Depends(get_session_context)],
        flow: Annotated[OAuthFlowService, Depends(get_flow)],
        next_path: str | None = Query(
            default=None,
            alias="next",
            description="Relative path to return to once the login completes.",
        ),
    ) -> RedirectResponse:
        """Generate a state, remember it and send the browser to the consent page."""
        authorization_url = flow.begin(session, next_path)
        return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    @router.get("/callback", name=f"{provider}_oauth_callback")
    async def handle_oauth_callback(
        session: Annotated[SessionContext, Depends(get_session_context)],
        flow: Annotated[OAuthFlowService, Depends(get_flow)],
        error: str | None = Query(default=None),
        state: str | None = Query(default=None),
        code: str | None = Query(default=None),
    ) -> RedirectResponse:
        """Complete the exchange; failures are rendered by the error handler."""
        target = await flow.complete(session, error=error, state=state, code=code)
        return RedirectResponse(url=target, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    @router.get("/logout", name=f"{provider}_logout")
    async def logout(
        session: Annotated[SessionContext, Depends(get_session_context)],
        flow: Annotated[OAuthFlowService, Depends(get_flow)],
        next_path: str | None = Query(default=None, alias="next"),
    ) -> RedirectResponse:
        await flow.logout(session)
        return RedirectResponse(
            url=safe_next_path(next_path) or DEFAULT_REDIRECT,
            status_code=HTTPStatus.TEMPORARY_REDIRECT,
        )

    return router


reddit_router = build_oauth_router("reddit", get_reddit_oauth_client)
discord_router = build_oauth_router("discord", get_discord_oauth_client)

__all__ = ["build_oauth_router", "discord_router", "reddit_router"]
