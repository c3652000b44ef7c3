"""
CLI entrypoint for the session retention job. Run from cron, e.g.:

  python -m gatehouse.retention

Or hourly: 0 * * * * cd /path/to/gatehouse && .venv/bin/python -m gatehouse.retention
"""

import logging
import sys

from gatehouse.core.config import get_settings
from gatehouse.core.database import build_engine, build_session_factory
from gatehouse.services.retention import purge_expired_sessions

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run retention: delete sessions whose expiry has passed."""
    settings = get_settings()
    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        sessions_deleted = purge_expired_sessions(db)
        logger.info("Retention completed: sessions_deleted=%s", sessions_deleted)
        return 0
    except Exception as e:
        logger.exception("Retention job failed: %s", e)
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
