"""Session retention: delete session records whose expiry has passed."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from gatehouse.models import SessionRecord

logger = logging.getLogger(__name__)


def purge_expired_sessions(session: Session, now: datetime | None = None) -> int:
    """
    Delete sessions with expires_at at or before now and return how many were removed.

    Expired sessions already resolve as anonymous; this only reclaims rows. Idempotent.
    """
    cutoff = now or datetime.now(UTC)
    deleted_count = (
        session.query(SessionRecord)
        .filter(SessionRecord.expires_at <= cutoff)
        .delete(synchronize_session=False)
    )
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Retention run: cutoff=%s, sessions_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
