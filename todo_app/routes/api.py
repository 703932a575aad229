"""Task JSON endpoints."""

import logging

from flask import Blueprint, jsonify, request
from marshmallow import ValidationError

from todo_app.errors import TaskNotFound
from todo_app.schemas import (
    AnalyticsQuerySchema,
    AnalyticsSchema,
    TaskCreateSchema,
    TaskSchema,
    TasksResponseSchema,
)
from todo_app.services import get_task_service
from todo_app.telemetry import get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.route("/tasks", methods=["GET"])
def list_tasks():
    """List every task in insertion order.

    Returns:
        JSON response with tasks and total.
    """
    tasks = get_task_service().list_all()
    return jsonify(TasksResponseSchema().dump({"tasks": tasks, "total": len(tasks)}))


@api_bp.route("/tasks", methods=["POST"])
def create_task():
    """Create a new task.

    Returns:
        JSON response with created task.
    """
    with tracer.start_as_current_span("task.create") as span:
        try:
            data = TaskCreateSchema().load(request.get_json(silent=True) or {})
        except ValidationError as err:
            return jsonify(err.messages), 400

        # InvalidTaskName is answered by the registered error handler
        task = get_task_service().create(data["name"])
        span.set_attribute("task.id", task.id)

        return jsonify(TaskSchema().dump(task)), 201


@api_bp.route("/tasks/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int):
    """Delete a task. Missing ids are not an error.

    Returns:
        Empty response with 204 status.
    """
    with tracer.start_as_current_span("task.delete") as span:
        span.set_attribute("task.id", task_id)
        deleted = get_task_service().delete(task_id)
        span.set_attribute("task.deleted", deleted)
        return "", 204


@api_bp.route("/tasks/<int:task_id>/toggle", methods=["POST"])
def toggle_task(task_id: int):
    """Flip a task between pending and completed.

    Returns:
        JSON response with the updated task, or 404.
    """
    with tracer.start_as_current_span("task.toggle") as span:
        span.set_attribute("task.id", task_id)
        task = get_task_service().toggle(task_id)
        if task is None:
            raise TaskNotFound(task_id)

        span.set_attribute("task.status", task.status.value)
        return jsonify(TaskSchema().dump(task))


@api_bp.route("/analytics", methods=["GET"])
def analytics():
    """Count tasks created and completed in a range.

    Query params:
        start: ISO datetime, default midnight seven days ago
        end: ISO datetime, default now

    Returns:
        JSON response with the resolved range and both counts.
    """
    query = {key: value for key, value in request.args.items() if key in ("start", "end") and value}
    try:
        params = AnalyticsQuerySchema().load(query)
    except ValidationError as err:
        return jsonify(err.messages), 400

    result = get_task_service().analytics(params["start"], params["end"])
    return jsonify(AnalyticsSchema().dump(result))
