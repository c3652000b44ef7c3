"""ORM model for server-side login sessions."""

from sqlalchemy import Column, DateTime, String, func

from gatehouse.models.base import Base


class SessionRecord(Base):
    """
    One row per live browser session, keyed by the id carried in the session cookie.

    name and role are a snapshot taken at login; they are not updated when the user's role changes.
    """

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
