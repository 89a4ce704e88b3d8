"""
Account linking routes.

``GET /verify`` shows which identities the session holds; ``POST /verify``
records the Discord-to-Reddit link.
"""

from __future__ import annotations

from http import HTTPStatus
from pathlib import Path
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader

from app.dependencies import get_link_store, get_session_context
from app.services.account_links import AccountLinkService
from app.services.session_state import SessionContext

router = APIRouter(tags=["verification"])

template_dir = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(
    env=Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
)


@router.get("/verify", response_class=HTMLResponse)
async def verification_page(
    request: Request,
    session: Annotated[SessionContext, Depends(get_session_context)],
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "verification.html",
        {"reddit": session.reddit_user, "discord": session.discord_user},
    )


@router.post("/verify", status_code=HTTPStatus.CREATED)
async def link_accounts(
    session: Annotated[SessionContext, Depends(get_session_context)],
    link_store: Annotated[Any, Depends(get_link_store)],
) -> Response:
    """Create the link; an already-linked pair is reported the same way."""
    AccountLinkService(link_store).link(session)
    return Response(status_code=HTTPStatus.CREATED)


__all__ = ["router", "templates"]
