"""
CLI entrypoint for the expired-session reaper. Run from cron, e.g.:

  python -m cms_auth.reaper

Or hourly: 0 * * * * cd /path/to/cms-auth && .venv/bin/python -m cms_auth.reaper
"""

import logging
import sys

from cms_auth.core.config import get_settings
from cms_auth.core.database import SessionLocal
from cms_auth.services.session_reaper import run_session_reaper

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Delete sessions that expired before now minus SESSION_REAPER_GRACE_HOURS."""
    settings = get_settings()
    db = SessionLocal()
    try:
        sessions_deleted = run_session_reaper(db, settings)
        logger.info("Session reaper completed: sessions_deleted=%s", sessions_deleted)
        return 0
    except Exception as e:
        logger.exception("Session reaper failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
