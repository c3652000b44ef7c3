"""Admin page (user list) and promote/demote actions."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from gatehouse.api.deps import get_user_store, require_admin, require_login
from gatehouse.core.templates import templates
from gatehouse.schemas.auth import ROLE_ADMIN, ROLE_USER, Identity, UserListItem
from gatehouse.services.users import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()

# users.id is a 32-bit INTEGER column; larger values cannot name a row.
MAX_USER_ID = 2**31 - 1


def _parse_user_id(raw: str) -> int | None:
    try:
        user_id = int(raw)
    except ValueError:
        return None
    if not 1 <= user_id <= MAX_USER_ID:
        return None
    return user_id


@router.get("/admin", response_class=HTMLResponse)
def admin_page(
    request: Request,
    identity: Annotated[Identity, Depends(require_login)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> HTMLResponse:
    """List all users. Logged-in non-admins get the 403 page rather than a redirect."""
    if not identity.is_admin:
        return templates.TemplateResponse(
            request, "403.html", {}, status_code=status.HTTP_403_FORBIDDEN
        )
    items = [UserListItem.model_validate(u) for u in users.list_all()]
    return templates.TemplateResponse(request, "admin.html", {"users": items})


def _change_role(raw_id: str, role: str, users: UserStore, actor: Identity) -> RedirectResponse:
    # Unparseable and unknown ids fall through to the same redirect.
    user_id = _parse_user_id(raw_id)
    if user_id is not None:
        users.set_role(user_id, role)
        logger.info("Admin %r set user_id=%s role=%s", actor.name, user_id, role)
    return RedirectResponse("/admin", status_code=status.HTTP_302_FOUND)


@router.get("/promote/{user_id}")
def promote(
    user_id: str,
    admin: Annotated[Identity, Depends(require_admin)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> RedirectResponse:
    return _change_role(user_id, ROLE_ADMIN, users, admin)


@router.get("/demote/{user_id}")
def demote(
    user_id: str,
    admin: Annotated[Identity, Depends(require_admin)],
    users: Annotated[UserStore, Depends(get_user_store)],
) -> RedirectResponse:
    return _change_role(user_id, ROLE_USER, users, admin)
