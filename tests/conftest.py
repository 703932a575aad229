"""Pytest fixtures for Flask application testing."""

import os
from datetime import datetime

import pytest


# Disable OpenTelemetry for tests
os.environ["OTEL_SDK_DISABLED"] = "true"

from tests.fakes import FakeClock, InMemoryTaskRepository  # noqa: E402


@pytest.fixture
def app():
    """Create test application."""
    from todo_app import create_app
    from todo_app.config import TestConfig

    app = create_app(TestConfig)
    app.config["TESTING"] = True

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def db(app):
    """Create test database."""
    from todo_app.extensions import db as _db

    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def clock():
    """Clock pinned to a fixed instant."""
    return FakeClock(datetime(2025, 6, 15, 12, 30, 0))


@pytest.fixture
def app_clock(app, clock):
    """Make the application's service use the fixed clock."""
    app.extensions["task_service"].clock = clock
    return clock


@pytest.fixture
def repository():
    return InMemoryTaskRepository()


@pytest.fixture
def service(repository, clock):
    """Task service over in-memory storage."""
    from todo_app.services import TaskService

    return TaskService(repository, clock=clock)
