from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reminders.db.base import Base

if TYPE_CHECKING:
    from reminders.db.models.user import User


class SessionRecord(Base):
    """Server-side login session, keyed by the SHA-256 of the client token."""

    # Base provides: id, created_at, updated_at
    key: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="sessions")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<SessionRecord(user_id={self.user_id}, expires_at={self.expires_at})>"
