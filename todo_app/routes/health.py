"""Health check endpoint."""

from typing import Any

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from todo_app.extensions import db


health_bp = Blueprint("health", __name__, url_prefix="/api")


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint for monitoring.

    Returns:
        JSON response with health status of the database.
    """
    health_status: dict[str, Any] = {
        "status": "healthy",
        "components": {
            "database": "healthy",
        },
        "service": {
            "name": current_app.config["SERVICE_NAME"],
            "version": current_app.config["SERVICE_VERSION"],
        },
    }

    try:
        db.session.execute(text("SELECT 1"))
    except Exception:
        db.session.rollback()
        health_status["status"] = "unhealthy"
        health_status["components"]["database"] = "unhealthy"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return jsonify(health_status), status_code
