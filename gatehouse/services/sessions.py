"""Server-side sessions: identity snapshots keyed by a random id with a fixed TTL."""

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gatehouse.models import SessionRecord
from gatehouse.schemas.auth import Identity
from gatehouse.services.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600
SESSION_ID_BYTES = 32


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    """
    Create, resolve and destroy session records.

    Expiry is compared in the database so stored timestamps never meet Python datetimes
    of a different awareness.
    """

    def __init__(
        self,
        db: Session,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        rolling: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._db = db
        self._ttl = timedelta(seconds=ttl_seconds)
        self._rolling = rolling
        self._clock = clock

    def create(self, identity: Identity) -> str:
        """Persist the identity snapshot under a new random id and return that id."""
        session_id = secrets.token_urlsafe(SESSION_ID_BYTES)
        record = SessionRecord(
            id=session_id,
            name=identity.name,
            role=identity.role,
            expires_at=self._clock() + self._ttl,
        )
        try:
            self._db.add(record)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StorageError("Failed to create session", e) from e
        return session_id

    def resolve(self, session_id: str | None) -> Identity | None:
        """Return the identity for a live session; None when missing, unknown or expired."""
        if not session_id:
            return None
        now = self._clock()
        try:
            record = (
                self._db.query(SessionRecord)
                .filter(SessionRecord.id == session_id, SessionRecord.expires_at > now)
                .first()
            )
            if record is None:
                return None
            identity = Identity(name=record.name, role=record.role)
            if self._rolling:
                record.expires_at = now + self._ttl
                self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StorageError("Failed to resolve session", e) from e
        return identity

    def destroy(self, session_id: str | None) -> None:
        """Delete the session record. Idempotent."""
        if not session_id:
            return
        try:
            self._db.query(SessionRecord).filter(SessionRecord.id == session_id).delete(
                synchronize_session=False
            )
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StorageError("Failed to destroy session", e) from e
