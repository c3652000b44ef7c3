"""Signup, login and logout flows."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from gatehouse.api.deps import (
    get_session_id,
    get_session_manager,
    get_settings_from_app,
    get_user_store,
)
from gatehouse.core.config import Settings
from gatehouse.core.security import hash_password, sign_session_id, verify_password
from gatehouse.core.templates import templates
from gatehouse.schemas.auth import ROLE_USER, Identity, LoginForm, SignupForm
from gatehouse.services.errors import DuplicateEmailError
from gatehouse.services.sessions import SessionManager
from gatehouse.services.users import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS_MESSAGE = "Invalid email/password combination."
DUPLICATE_EMAIL_MESSAGE = "An account with that email already exists."

_FIELD_LABELS = {"name": "Name", "email": "Email", "password": "Password"}


def first_error_message(exc: ValidationError) -> str:
    """Human-readable message for the first failing form field."""
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error.get("loc") else ""
    label = _FIELD_LABELS.get(field, field.capitalize() or "Input")
    if error["type"] in ("missing", "string_too_short") or error.get("input") == "":
        return f"{label} is required"
    if field == "email":
        return "Email must be a valid email address"
    return f"{label} is invalid"


def _form_error(request: Request, message: str, retry_url: str) -> HTMLResponse:
    # Validation and credential failures are shown inline with a 200, never a 4xx.
    return templates.TemplateResponse(
        request,
        "form_error.html",
        {"message": message, "retry_url": retry_url},
        status_code=status.HTTP_200_OK,
    )


def _start_session(
    identity: Identity,
    sessions: SessionManager,
    settings: Settings,
    previous_session_id: str | None,
) -> RedirectResponse:
    """Replace any existing session with a new one and redirect to the members area."""
    sessions.destroy(previous_session_id)
    session_id = sessions.create(identity)
    response = RedirectResponse("/members", status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        sign_session_id(session_id, settings.SESSION_SECRET.get_secret_value()),
        httponly=True,
        samesite="lax",
        secure=settings.APP_ENV == "prod",
    )
    return response


@router.get("/signup", response_class=HTMLResponse)
def signup_page(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "signup.html", {})


@router.post("/signup")
def signup(
    request: Request,
    users: Annotated[UserStore, Depends(get_user_store)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_settings_from_app)],
    previous_session_id: Annotated[str | None, Depends(get_session_id)],
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Validate the form, create the user with role 'user', start a session."""
    try:
        form = SignupForm(name=name.strip(), email=email.strip(), password=password)
    except ValidationError as e:
        return _form_error(request, first_error_message(e), "/signup")

    try:
        users.create_user(
            name=form.name,
            email=form.email,
            password_hash=hash_password(form.password, rounds=settings.BCRYPT_ROUNDS),
            role=ROLE_USER,
        )
    except DuplicateEmailError:
        logger.info("Signup rejected: email already registered")
        return _form_error(request, DUPLICATE_EMAIL_MESSAGE, "/signup")

    identity = Identity(name=form.name, role=ROLE_USER)
    return _start_session(identity, sessions, settings, previous_session_id)


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "login.html", {})


@router.post("/login")
def login(
    request: Request,
    users: Annotated[UserStore, Depends(get_user_store)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_settings_from_app)],
    previous_session_id: Annotated[str | None, Depends(get_session_id)],
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """
    Check credentials and start a session.

    Unknown email and wrong password produce the same message so accounts cannot be enumerated.
    """
    try:
        form = LoginForm(email=email.strip(), password=password)
    except ValidationError as e:
        return _form_error(request, first_error_message(e), "/login")

    user = users.find_by_email(form.email)
    if user is None or not verify_password(form.password, user.password_hash):
        logger.info("Login failed")
        return _form_error(request, INVALID_CREDENTIALS_MESSAGE, "/login")

    logger.info("Login succeeded: user_id=%s", user.id)
    identity = Identity.model_validate(user)
    return _start_session(identity, sessions, settings, previous_session_id)


@router.get("/logout")
def logout(
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_settings_from_app)],
    session_id: Annotated[str | None, Depends(get_session_id)],
) -> RedirectResponse:
    """Destroy the session and clear its cookie. Safe to call without a session."""
    sessions.destroy(session_id)
    response = RedirectResponse("/", status_code=status.HTTP_302_FOUND)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
