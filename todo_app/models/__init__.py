"""Database models."""

from todo_app.models.task import Task, TaskStatus, to_naive_utc, utcnow


__all__ = ["Task", "TaskStatus", "to_naive_utc", "utcnow"]
