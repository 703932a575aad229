"""Task repository backed by Flask-SQLAlchemy."""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from functools import wraps
from typing import ParamSpec, Protocol, TypeVar

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from todo_app.errors import StorageUnavailable
from todo_app.models import Task


logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


class TaskRepository(Protocol):
    """Storage operations the task service depends on."""

    def save(self, task: Task) -> Task: ...

    def find_by_id(self, task_id: int) -> Task | None: ...

    def find_all(self) -> Sequence[Task]: ...

    def delete_by_id(self, task_id: int) -> bool: ...

    def find_by_created_between(self, start: datetime, end: datetime) -> Sequence[Task]: ...

    def find_by_completed_between(self, start: datetime, end: datetime) -> Sequence[Task]: ...


def _storage_call(f: Callable[P, T]) -> Callable[P, T]:
    """Roll back and re-raise database errors as StorageUnavailable."""

    @wraps(f)
    def decorated(*args: P.args, **kwargs: P.kwargs) -> T:
        self = args[0]
        try:
            return f(*args, **kwargs)
        except SQLAlchemyError as exc:
            self.db.session.rollback()  # type: ignore[attr-defined]
            logger.warning(f"Task storage error in {f.__name__}: {exc}")
            raise StorageUnavailable(str(exc)) from exc

    return decorated


class SQLAlchemyTaskRepository:
    """Stores tasks in the `tasks` table.

    Each write commits immediately, so every operation is atomic on its own.
    Range queries are inclusive at both ends.
    """

    def __init__(self, db: SQLAlchemy) -> None:
        self.db = db

    @_storage_call
    def save(self, task: Task) -> Task:
        self.db.session.add(task)
        self.db.session.commit()
        return task

    @_storage_call
    def find_by_id(self, task_id: int) -> Task | None:
        return self.db.session.get(Task, task_id)

    @_storage_call
    def find_all(self) -> Sequence[Task]:
        return self.db.session.scalars(select(Task).order_by(Task.id)).all()

    @_storage_call
    def delete_by_id(self, task_id: int) -> bool:
        result = self.db.session.execute(delete(Task).where(Task.id == task_id))
        self.db.session.commit()
        return bool(result.rowcount)

    @_storage_call
    def find_by_created_between(self, start: datetime, end: datetime) -> Sequence[Task]:
        query = select(Task).where(Task.created_at.between(start, end)).order_by(Task.id)
        return self.db.session.scalars(query).all()

    @_storage_call
    def find_by_completed_between(self, start: datetime, end: datetime) -> Sequence[Task]:
        query = select(Task).where(Task.completed_at.between(start, end)).order_by(Task.id)
        return self.db.session.scalars(query).all()
