"""Task lifecycle and analytics."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from flask import current_app

from todo_app.errors import InvalidTaskName
from todo_app.models import Task, TaskStatus, to_naive_utc, utcnow
from todo_app.repositories import TaskRepository
from todo_app.telemetry import get_meter


logger = logging.getLogger(__name__)
meter = get_meter(__name__)

tasks_created = meter.create_counter(
    name="tasks.created",
    description="Tasks created",
    unit="1",
)

tasks_toggled = meter.create_counter(
    name="tasks.toggled",
    description="Task status changes",
    unit="1",
)

tasks_deleted = meter.create_counter(
    name="tasks.deleted",
    description="Tasks deleted",
    unit="1",
)

MAX_NAME_LENGTH = 255
DEFAULT_WINDOW_DAYS = 7

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class TaskAnalytics:
    """Creation and completion counts over an inclusive window."""

    start: datetime
    end: datetime
    created_count: int
    completed_count: int


def default_analytics_window(now: datetime, days: int = DEFAULT_WINDOW_DAYS) -> tuple[datetime, datetime]:
    """Return (start, end) covering the last `days` days.

    The start is floored to midnight, the end is `now` itself.
    """
    start = (now - timedelta(days=days)).replace(hour=0, minute=0, second=0, microsecond=0)
    return start, now


class TaskService:
    """Owns the task state machine and the read/aggregate views.

    Args:
        repository: Task storage.
        clock: Returns the current time as a naive UTC datetime.
        window_days: Length of the default analytics window.
    """

    def __init__(
        self,
        repository: TaskRepository,
        clock: Clock = utcnow,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ) -> None:
        self.repository = repository
        self.clock = clock
        self.window_days = window_days

    def list_all(self) -> Sequence[Task]:
        return self.repository.find_all()

    def create(self, name: str) -> Task:
        """Create a pending task.

        Args:
            name: Task label; surrounding whitespace is stripped.

        Returns:
            The stored task with its assigned id.

        Raises:
            InvalidTaskName: If the name is blank or too long.
        """
        name = (name or "").strip()
        if not name:
            raise InvalidTaskName("Task name must not be empty")
        if len(name) > MAX_NAME_LENGTH:
            raise InvalidTaskName(f"Task name must be at most {MAX_NAME_LENGTH} characters")

        task = Task(
            name=name,
            created_at=self.clock(),
            completed_at=None,
            status=TaskStatus.PENDING,
        )
        task = self.repository.save(task)

        tasks_created.add(1)
        logger.info(f"Task created: {task.id}", extra={"task_id": task.id})
        return task

    def delete(self, task_id: int) -> bool:
        """Delete a task. Deleting a missing id does nothing.

        Returns:
            True if a task was removed.
        """
        deleted = self.repository.delete_by_id(task_id)
        if deleted:
            tasks_deleted.add(1)
            logger.info(f"Task deleted: {task_id}", extra={"task_id": task_id})
        else:
            logger.debug(f"Delete skipped, no task {task_id}")
        return deleted

    def toggle(self, task_id: int) -> Task | None:
        """Flip a task between pending and completed.

        Returns:
            The updated task, or None when no task has this id.
        """
        task = self.repository.find_by_id(task_id)
        if task is None:
            logger.debug(f"Toggle skipped, no task {task_id}")
            return None

        task.toggle(self.clock())
        task = self.repository.save(task)

        tasks_toggled.add(1, {"status": task.status.value})
        logger.info(f"Task {task_id} is now {task.status.value}", extra={"task_id": task_id})
        return task

    def count_created_in_range(self, start: datetime, end: datetime) -> int:
        return len(self.repository.find_by_created_between(to_naive_utc(start), to_naive_utc(end)))

    def count_completed_in_range(self, start: datetime, end: datetime) -> int:
        return len(self.repository.find_by_completed_between(to_naive_utc(start), to_naive_utc(end)))

    def analytics(self, start: datetime | None = None, end: datetime | None = None) -> TaskAnalytics:
        """Count creations and completions, defaulting to the recent window."""
        default_start, default_end = default_analytics_window(self.clock(), self.window_days)
        start = to_naive_utc(start) if start is not None else default_start
        end = to_naive_utc(end) if end is not None else default_end

        return TaskAnalytics(
            start=start,
            end=end,
            created_count=self.count_created_in_range(start, end),
            completed_count=self.count_completed_in_range(start, end),
        )


def get_task_service() -> TaskService:
    """Return the service built by the application factory."""
    return current_app.extensions["task_service"]
