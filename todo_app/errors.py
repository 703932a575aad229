"""Domain exceptions and error handlers with OpenTelemetry trace context."""

import logging

from flask import Flask, jsonify
from opentelemetry import trace


logger = logging.getLogger(__name__)


class TodoError(Exception):
    """Base class for task errors."""


class TaskNotFound(TodoError):
    """No task is stored under the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class InvalidTaskName(TodoError):
    """Task name is empty or too long."""


class StorageUnavailable(TodoError):
    """The task store could not be reached or rejected the operation."""


def error_response(message: str, status_code: int) -> tuple:
    """Create error response with trace context.

    Use this function in routes instead of returning jsonify directly.

    Args:
        message: Error message.
        status_code: HTTP status code.

    Returns:
        Tuple of (response, status_code).
    """
    response = {
        "error": message,
        "status": status_code,
    }

    # Add trace ID for debugging
    span = trace.get_current_span()
    span_context = span.get_span_context()
    if span_context.is_valid:
        response["trace_id"] = format(span_context.trace_id, "032x")

    return jsonify(response), status_code


def register_error_handlers(app: Flask) -> None:
    """Register error handlers on Flask app.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(400)
    def bad_request(error):
        return error_response("Bad request", 400)

    @app.errorhandler(404)
    def not_found(error):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response("Method not allowed", 405)

    @app.errorhandler(500)
    def internal_error(error):
        return error_response("Internal server error", 500)

    @app.errorhandler(TaskNotFound)
    def task_not_found(error: TaskNotFound):
        return error_response(str(error), 404)

    @app.errorhandler(InvalidTaskName)
    def invalid_task_name(error: InvalidTaskName):
        return error_response(str(error), 400)

    @app.errorhandler(StorageUnavailable)
    def storage_unavailable(error: StorageUnavailable):
        span = trace.get_current_span()
        if span.is_recording():
            span.record_exception(error)
            span.set_attribute("error.type", "storage_unavailable")
        logger.error(f"Storage unavailable: {error}", exc_info=error)
        return error_response("Storage unavailable", 503)
