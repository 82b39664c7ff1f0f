"""Session ledger: server-side record of issued sessions, revocable independently of token expiry."""

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from cms_auth.models import CmsSession

# 32 random bytes, base64url-encoded (43 chars).
SESSION_ID_BYTES = 32
DEFAULT_SESSION_TTL = timedelta(hours=24)


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from backends that drop the offset."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class SessionLedger:
    """Create, revoke and check sessions. Writes are flushed; the caller commits."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow) -> None:
        self.db = db
        self.clock = clock

    def create(self, user_id: str, ttl: timedelta = DEFAULT_SESSION_TTL) -> CmsSession:
        """Persist a new session for user_id expiring ttl from now."""
        now = self.clock()
        session = CmsSession(
            id=secrets.token_urlsafe(SESSION_ID_BYTES),
            user_id=user_id,
            created_at=now,
            expires_at=now + ttl,
        )
        self.db.add(session)
        self.db.flush()
        return session

    def revoke(self, session_id: str) -> int:
        """Delete the session row. Idempotent: returns 0 when nothing matched."""
        return (
            self.db.query(CmsSession)
            .filter(CmsSession.id == session_id)
            .delete(synchronize_session=False)
        )

    def get_live(self, session_id: str) -> CmsSession | None:
        """Return the session if it exists and has not expired."""
        return (
            self.db.query(CmsSession)
            .filter(CmsSession.id == session_id, CmsSession.expires_at > self.clock())
            .first()
        )

    def is_live(self, session_id: str) -> bool:
        return self.get_live(session_id) is not None

    def prune_expired(self, cutoff: datetime) -> int:
        """Delete sessions that expired before cutoff. Returns the number of rows removed."""
        return (
            self.db.query(CmsSession)
            .filter(CmsSession.expires_at < cutoff)
            .delete(synchronize_session=False)
        )
