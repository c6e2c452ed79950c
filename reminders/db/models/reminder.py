from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reminders.db.base import Base


class Reminder(Base):
    """A titled note. Rows are never updated after insert."""

    # Base provides: id, created_at, updated_at
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Reminder(id={self.id}, title='{self.title}')>"
