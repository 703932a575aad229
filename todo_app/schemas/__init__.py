"""Marshmallow schemas for serialization and validation."""

from todo_app.schemas.task import (
    AnalyticsQuerySchema,
    AnalyticsSchema,
    TaskCreateSchema,
    TaskSchema,
    TasksResponseSchema,
)


__all__ = [
    "TaskSchema",
    "TaskCreateSchema",
    "TasksResponseSchema",
    "AnalyticsQuerySchema",
    "AnalyticsSchema",
]
