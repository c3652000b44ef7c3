"""Pydantic form, identity and response schemas."""

from gatehouse.schemas.auth import (
    ROLE_ADMIN,
    ROLE_USER,
    ROLES,
    Identity,
    LoginForm,
    Role,
    SignupForm,
    UserListItem,
)
from gatehouse.schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "Identity",
    "LoginForm",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLES",
    "Role",
    "SignupForm",
    "UserListItem",
]
