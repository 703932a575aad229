"""HTML pages for the task list and analytics."""

import logging

from flask import Blueprint, abort, redirect, render_template, request, url_for
from marshmallow import ValidationError

from todo_app.errors import InvalidTaskName
from todo_app.schemas import AnalyticsQuerySchema
from todo_app.services import get_task_service


logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)


def _back_to_index():
    return redirect(url_for("views.index"))


@views_bp.route("/", methods=["GET"])
def index():
    """Render the task list."""
    tasks = get_task_service().list_all()
    return render_template("index.html", tasks=tasks)


@views_bp.route("/add", methods=["POST"])
def add_task():
    """Create a task from the submitted form, then return to the list.

    A rejected name is logged only; the page shows no error.
    """
    try:
        get_task_service().create(request.form.get("name", ""))
    except InvalidTaskName as err:
        logger.warning(f"Task not added: {err}")
    return _back_to_index()


@views_bp.route("/delete/<int:task_id>", methods=["POST"])
def delete_task(task_id: int):
    get_task_service().delete(task_id)
    return _back_to_index()


@views_bp.route("/toggle/<int:task_id>", methods=["POST"])
def toggle_task(task_id: int):
    get_task_service().toggle(task_id)
    return _back_to_index()


@views_bp.route("/analytics", methods=["GET"])
def analytics():
    """Render creation and completion counts.

    Query params:
        start: ISO datetime, default midnight seven days ago
        end: ISO datetime, default now
    """
    query = {key: value for key, value in request.args.items() if key in ("start", "end") and value}
    try:
        params = AnalyticsQuerySchema().load(query)
    except ValidationError as err:
        logger.info(f"Rejected analytics range: {err.messages}")
        abort(400)

    result = get_task_service().analytics(params["start"], params["end"])
    return render_template(
        "analytics.html",
        created_count=result.created_count,
        completed_count=result.completed_count,
        start=result.start,
        end=result.end,
    )
