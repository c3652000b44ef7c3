"""User store: create, look up, list and re-role user records."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gatehouse.models import User
from gatehouse.schemas.auth import ROLE_USER, ROLES
from gatehouse.services.errors import DuplicateEmailError, StorageError

logger = logging.getLogger(__name__)


class UserStore:
    """Persistence of user records. The DB session is passed in, never looked up globally."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create_user(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: str = ROLE_USER,
    ) -> int:
        """Insert a user and return its id. Raises DuplicateEmailError or StorageError."""
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role!r}")
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        try:
            self._db.add(user)
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            raise DuplicateEmailError(email, e) from e
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StorageError("Failed to create user", e) from e
        logger.info("User created: id=%s role=%s", user.id, role)
        return user.id

    def find_by_email(self, email: str) -> User | None:
        try:
            return self._db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise StorageError("Failed to look up user by email", e) from e

    def list_all(self) -> list[User]:
        """Return every user ordered by id. No pagination."""
        try:
            return self._db.query(User).order_by(User.id).all()
        except SQLAlchemyError as e:
            raise StorageError("Failed to list users", e) from e

    def set_role(self, user_id: int, role: str) -> None:
        """
        Set a user's role. Idempotent; an unknown id is a silent no-op.

        Existing sessions of that user keep their old role until the next login.
        """
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role!r}")
        try:
            updated = (
                self._db.query(User)
                .filter(User.id == user_id)
                .update({User.role: role}, synchronize_session=False)
            )
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StorageError("Failed to update user role", e) from e
        logger.info("Role change: user_id=%s role=%s matched=%s", user_id, role, updated)
