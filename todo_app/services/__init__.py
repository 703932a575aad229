"""Service modules."""

from todo_app.services.tasks import (
    TaskAnalytics,
    TaskService,
    default_analytics_window,
    get_task_service,
)


__all__ = ["TaskService", "TaskAnalytics", "default_analytics_window", "get_task_service"]
