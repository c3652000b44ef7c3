"""ORM model for application users (signup, login and roles)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from gatehouse.models.base import Base


class User(Base):
    """
    User account created on signup.

    role: 'admin' or 'user'. Changed only by promote/demote; rows are never deleted by the app.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
