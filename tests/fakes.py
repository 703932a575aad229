"""Test doubles for the task service."""

from datetime import datetime, timedelta

from todo_app.models import Task


class FakeClock:
    """Settable clock returning naive UTC datetimes."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class InMemoryTaskRepository:
    """Dict-backed storage that assigns ids in insertion order."""

    def __init__(self) -> None:
        self.tasks: dict[int, Task] = {}
        self._next_id = 1
        self.saves = 0

    def save(self, task: Task) -> Task:
        if task.id is None:
            task.id = self._next_id
            self._next_id += 1
        self.tasks[task.id] = task
        self.saves += 1
        return task

    def find_by_id(self, task_id: int) -> Task | None:
        return self.tasks.get(task_id)

    def find_all(self) -> list[Task]:
        return list(self.tasks.values())

    def delete_by_id(self, task_id: int) -> bool:
        return self.tasks.pop(task_id, None) is not None

    def find_by_created_between(self, start: datetime, end: datetime) -> list[Task]:
        return [t for t in self.tasks.values() if start <= t.created_at <= end]

    def find_by_completed_between(self, start: datetime, end: datetime) -> list[Task]:
        return [
            t for t in self.tasks.values() if t.completed_at is not None and start <= t.completed_at <= end
        ]
