"""Form and identity schemas for signup, login and the admin list."""

from typing import Literal

from pydantic import BaseModel, EmailStr, Field

Role = Literal["user", "admin"]

ROLE_USER: Role = "user"
ROLE_ADMIN: Role = "admin"
ROLES: frozenset[str] = frozenset({ROLE_USER, ROLE_ADMIN})


class SignupForm(BaseModel):
    """Fields posted by the signup form."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, description="Plain-text password")


class LoginForm(BaseModel):
    """Fields posted by the login form."""

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, description="Plain-text password")


class Identity(BaseModel):
    """Authenticated identity snapshot held by a session (name and role at login time)."""

    name: str
    role: Role

    class Config:
        from_attributes = True

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class UserListItem(BaseModel):
    """User entry for the admin list (no password hash)."""

    id: int
    name: str
    email: str
    role: Role

    class Config:
        from_attributes = True
