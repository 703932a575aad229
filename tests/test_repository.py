"""Tests for the SQLAlchemy task repository."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from todo_app.errors import StorageUnavailable
from todo_app.models import Task, TaskStatus
from todo_app.repositories import SQLAlchemyTaskRepository


def _task(name, created_at, completed_at=None):
    status = TaskStatus.COMPLETED if completed_at else TaskStatus.PENDING
    return Task(name=name, created_at=created_at, completed_at=completed_at, status=status)


@pytest.fixture
def repo(db):
    return SQLAlchemyTaskRepository(db)


class TestSave:
    def test_save_assigns_id(self, repo):
        task = repo.save(_task("a", datetime(2025, 6, 1)))
        assert task.id is not None
        assert repo.find_by_id(task.id).name == "a"

    def test_status_is_stored_as_text(self, repo, db):
        task = repo.save(_task("a", datetime(2025, 6, 1)))
        stored = db.session.execute(text("SELECT status FROM tasks WHERE id = :id"), {"id": task.id}).scalar()
        assert stored == "PENDING"

    def test_find_missing_returns_none(self, repo):
        assert repo.find_by_id(42) is None


class TestFindAll:
    def test_find_all_in_insertion_order(self, repo):
        for name in ("first", "second", "third"):
            repo.save(_task(name, datetime(2025, 6, 1)))
        assert [t.name for t in repo.find_all()] == ["first", "second", "third"]


class TestDelete:
    def test_delete_by_id(self, repo):
        task = repo.save(_task("a", datetime(2025, 6, 1)))
        assert repo.delete_by_id(task.id) is True
        assert repo.find_by_id(task.id) is None

    def test_delete_missing_is_idempotent(self, repo):
        assert repo.delete_by_id(42) is False
        assert repo.delete_by_id(42) is False


class TestRangeQueries:
    @pytest.fixture(autouse=True)
    def fixture_tasks(self, repo):
        repo.save(_task("early", datetime(2025, 6, 1, 8, 0)))
        repo.save(_task("done", datetime(2025, 6, 5, 8, 0), completed_at=datetime(2025, 6, 6, 10, 0)))
        repo.save(_task("late", datetime(2025, 6, 10, 8, 0)))

    def test_created_between(self, repo):
        found = repo.find_by_created_between(datetime(2025, 6, 2), datetime(2025, 6, 10, 8, 0))
        assert [t.name for t in found] == ["done", "late"]

    def test_created_between_is_inclusive(self, repo):
        at = datetime(2025, 6, 1, 8, 0)
        assert [t.name for t in repo.find_by_created_between(at, at)] == ["early"]

    def test_completed_between_skips_pending(self, repo):
        found = repo.find_by_completed_between(datetime(2025, 6, 1), datetime(2025, 6, 30))
        assert [t.name for t in found] == ["done"]

    def test_completed_between_outside_range(self, repo):
        assert repo.find_by_completed_between(datetime(2025, 6, 7), datetime(2025, 6, 30)) == []


class TestStorageErrors:
    def test_database_error_becomes_storage_unavailable(self):
        fake_db = MagicMock()
        fake_db.session.scalars.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        repo = SQLAlchemyTaskRepository(fake_db)

        with pytest.raises(StorageUnavailable) as excinfo:
            repo.find_all()

        assert isinstance(excinfo.value.__cause__, OperationalError)
        fake_db.session.rollback.assert_called_once()
