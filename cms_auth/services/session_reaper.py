"""Session reaper: prune ledger rows that expired more than SESSION_REAPER_GRACE_HOURS ago."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from cms_auth.services.session_ledger import SessionLedger, utcnow

if TYPE_CHECKING:
    from cms_auth.core.config import Settings

logger = logging.getLogger(__name__)


def run_session_reaper(
    session: Session,
    settings: "Settings",
    clock: Callable[[], datetime] = utcnow,
) -> int:
    """
    Delete expired sessions and return how many were removed.

    Housekeeping only: verification already ignores expired rows. Idempotent.
    """
    if not settings.SESSION_REAPER_ENABLED:
        logger.info("Session reaper is disabled (SESSION_REAPER_ENABLED=false); skipping.")
        return 0

    cutoff = clock() - timedelta(hours=settings.SESSION_REAPER_GRACE_HOURS)
    deleted_count = SessionLedger(session, clock=clock).prune_expired(cutoff)
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Session reaper run: cutoff=%s, sessions_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
