"""SQLAlchemy ORM models."""

from gatehouse.models.base import Base
from gatehouse.models.session import SessionRecord
from gatehouse.models.user import User

__all__ = ["Base", "SessionRecord", "User"]
