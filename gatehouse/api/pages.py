"""Public pages and the members area."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from gatehouse.api.deps import get_identity, require_login
from gatehouse.core.templates import templates
from gatehouse.schemas.auth import Identity

router = APIRouter()

# Served from /static/images; the same three images on every visit.
MEMBER_IMAGES = ("react.png", "nextjs.png", "ejs.png")


@router.get("/", response_class=HTMLResponse)
def home(
    request: Request,
    identity: Annotated[Identity | None, Depends(get_identity)],
) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {"user": identity})


@router.get("/members", response_class=HTMLResponse)
def members(
    request: Request,
    identity: Annotated[Identity, Depends(require_login)],
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "members.html",
        {"name": identity.name, "images": MEMBER_IMAGES},
    )
