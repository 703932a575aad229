"""Tests for the `flask tasks` CLI."""

from todo_app.models import Task


class TestTasksCli:
    def test_list_empty(self, runner, db):
        result = runner.invoke(args=["tasks", "list"])
        assert result.exit_code == 0
        assert "No tasks." in result.output

    def test_add_and_list(self, runner, db):
        result = runner.invoke(args=["tasks", "add", "Buy milk"])
        assert result.exit_code == 0
        assert "Added task 1: Buy milk" in result.output

        result = runner.invoke(args=["tasks", "list"])
        assert "[ ] Buy milk" in result.output

    def test_add_blank_name_fails(self, runner, db):
        result = runner.invoke(args=["tasks", "add", " "])
        assert result.exit_code != 0
        assert db.session.query(Task).count() == 0

    def test_toggle(self, runner, db):
        runner.invoke(args=["tasks", "add", "Buy milk"])

        result = runner.invoke(args=["tasks", "toggle", "1"])
        assert "Task 1 is now COMPLETED" in result.output

        result = runner.invoke(args=["tasks", "list"])
        assert "[x] Buy milk" in result.output

    def test_toggle_missing(self, runner, db):
        result = runner.invoke(args=["tasks", "toggle", "7"])
        assert result.exit_code == 0
        assert "No task 7" in result.output

    def test_delete(self, runner, db):
        runner.invoke(args=["tasks", "add", "Buy milk"])
        assert "Deleted task 1" in runner.invoke(args=["tasks", "delete", "1"]).output
        assert "No task 1" in runner.invoke(args=["tasks", "delete", "1"]).output

    def test_analytics(self, runner, db, app_clock):
        runner.invoke(args=["tasks", "add", "Buy milk"])
        runner.invoke(args=["tasks", "toggle", "1"])

        result = runner.invoke(args=["tasks", "analytics"])
        assert result.exit_code == 0
        assert "Range: 2025-06-08 00:00:00 .. 2025-06-15 12:30:00" in result.output
        assert "Created: 1" in result.output
        assert "Completed: 1" in result.output

    def test_analytics_explicit_range(self, runner, db, app_clock):
        runner.invoke(args=["tasks", "add", "Buy milk"])
        result = runner.invoke(args=["tasks", "analytics", "--start", "2025-07-01", "--end", "2025-07-02"])
        assert "Created: 0" in result.output
