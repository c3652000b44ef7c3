"""Session resolution and access-control dependencies (login gate, admin gate)."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from gatehouse.core.config import Settings
from gatehouse.core.database import get_db
from gatehouse.core.security import unsign_session_id
from gatehouse.schemas.auth import Identity
from gatehouse.services.sessions import SessionManager
from gatehouse.services.users import UserStore

ADMIN_ONLY_DETAIL = "403 Forbidden: Admins only."


class LoginRequired(Exception):
    """Raised by the login gate; the app turns it into a redirect to the login page."""


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_session_manager(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings_from_app)],
) -> SessionManager:
    return SessionManager(
        db,
        ttl_seconds=settings.SESSION_TTL_SECONDS,
        rolling=settings.SESSION_ROLLING,
    )


def get_session_id(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings_from_app)],
) -> str | None:
    """Session id carried by the request cookie, or None when absent or not signed by us."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    return unsign_session_id(token, settings.SESSION_SECRET.get_secret_value())


def get_identity(
    session_id: Annotated[str | None, Depends(get_session_id)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
) -> Identity | None:
    """Dependency: identity snapshot of the current session, or None for anonymous requests."""
    return sessions.resolve(session_id)


def require_login(
    identity: Annotated[Identity | None, Depends(get_identity)],
) -> Identity:
    """Dependency: require a live session. Anonymous requests are redirected to /login."""
    if identity is None:
        raise LoginRequired()
    return identity


def require_admin(
    identity: Annotated[Identity | None, Depends(get_identity)],
) -> Identity:
    """
    Dependency for admin actions: 403 for anonymous and non-admin requests alike.

    Unlike the admin page, actions never redirect to login.
    """
    if identity is None or not identity.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=ADMIN_ONLY_DETAIL,
        )
    return identity
