"""Task model."""

import enum
from datetime import datetime, timezone

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from todo_app.extensions import db


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed to be UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TaskStatus(str, enum.Enum):
    """Completion state of a task, persisted by name."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class Task(db.Model):
    """A single to-do entry."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, index=True, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(default=None, index=True)
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, native_enum=False, length=16),
        default=TaskStatus.PENDING,
        nullable=False,
    )

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def mark_completed(self, at: datetime) -> None:
        """Mark the task completed at the given time."""
        self.status = TaskStatus.COMPLETED
        self.completed_at = at

    def mark_pending(self) -> None:
        """Return the task to pending and clear its completion time."""
        self.status = TaskStatus.PENDING
        self.completed_at = None

    def toggle(self, now: datetime) -> None:
        """Flip between pending and completed.

        Args:
            now: Completion time recorded when moving to completed.
        """
        if self.is_completed:
            self.mark_pending()
        else:
            self.mark_completed(now)

    def __repr__(self) -> str:
        return f"<Task {self.id} {self.status.value if self.status else None}>"
