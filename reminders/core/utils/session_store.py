"""Server-side login session storage.

The client only ever holds an opaque random token (inside the signed
session cookie). Rows in the `sessionrecord` table are keyed by the SHA-256
digest of that token, so a leaked database does not yield usable cookies.
"""
from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from reminders.db.models.session_store import SessionRecord

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionStore:
    def __init__(self, db: Session, lifetime: timedelta = timedelta(minutes=30)):
        self.db = db
        self.lifetime = lifetime

    def create(self, user_id: int) -> str:
        """Persist a new session for `user_id` and return its token."""
        token = secrets.token_urlsafe(32)
        record = SessionRecord(
            key=hash_token(token),
            user_id=user_id,
            expires_at=utcnow() + self.lifetime,
        )
        try:
            self.db.add(record)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to persist session: {type(e).__name__}")
            raise
        logger.debug("Session created", extra={"user_id": user_id})
        return token

    def get_user_id(self, token: Optional[str]) -> Optional[int]:
        """Return the user id bound to a live session, or None.

        Read-only: expired rows are ignored here and removed by
        `purge_expired`.
        """
        if not token or not isinstance(token, str):
            return None
        record = self.db.scalar(
            select(SessionRecord).where(SessionRecord.key == hash_token(token))
        )
        if record is None:
            return None
        if record.expires_at <= utcnow():
            return None
        return record.user_id

    def delete(self, token: Optional[str]) -> bool:
        """Remove the session for `token`. Returns True if one existed."""
        if not token or not isinstance(token, str):
            return False
        try:
            result = self.db.execute(
                delete(SessionRecord).where(SessionRecord.key == hash_token(token))
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return bool(result.rowcount)

    def purge_expired(self) -> int:
        """Delete every expired session. Returns the number removed."""
        try:
            result = self.db.execute(
                delete(SessionRecord).where(SessionRecord.expires_at <= utcnow())
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if result.rowcount:
            logger.info("Purged expired sessions", extra={"count": result.rowcount})
        return result.rowcount or 0
