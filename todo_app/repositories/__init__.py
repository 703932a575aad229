"""Task storage."""

from todo_app.repositories.tasks import SQLAlchemyTaskRepository, TaskRepository


__all__ = ["TaskRepository", "SQLAlchemyTaskRepository"]
