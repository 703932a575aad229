"""Flask application factory with OpenTelemetry instrumentation."""

import logging
import os

from flask import Flask

from todo_app.extensions import db, ma


def create_app(config_class: type | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use. Defaults to Config.

    Returns:
        Configured Flask application instance.
    """
    # Initialize telemetry BEFORE creating Flask app
    if not os.getenv("OTEL_SDK_DISABLED"):
        from todo_app.telemetry import get_otel_log_handler, instrument_flask_app, setup_telemetry

        setup_telemetry()

    app = Flask(__name__)

    # Instrument Flask app (needed for Gunicorn worker forks)
    if not os.getenv("OTEL_SDK_DISABLED"):
        instrument_flask_app(app)

    # Load configuration
    if config_class is None:
        from todo_app.config import Config

        config_class = Config
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    ma.init_app(app)

    # One service for the lifetime of the process
    from todo_app.repositories import SQLAlchemyTaskRepository
    from todo_app.services import TaskService

    app.extensions["task_service"] = TaskService(
        SQLAlchemyTaskRepository(db),
        window_days=app.config["ANALYTICS_DEFAULT_DAYS"],
    )

    # Register blueprints
    from todo_app.routes import api_bp, health_bp, views_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(views_bp)

    # Register error handlers
    from todo_app.errors import register_error_handlers

    register_error_handlers(app)

    # Register CLI commands
    from todo_app.commands import register_commands

    register_commands(app)

    # Register metrics middleware
    if not os.getenv("OTEL_SDK_DISABLED"):
        from todo_app.middleware import register_metrics_middleware

        register_metrics_middleware(app)

    # Attach OTel log handler after app setup
    if not os.getenv("OTEL_SDK_DISABLED"):
        handler = get_otel_log_handler()
        if handler:
            root_logger = logging.getLogger()
            if handler not in root_logger.handlers:
                root_logger.addHandler(handler)

    _configure_logging()

    # Create database tables
    with app.app_context():
        db.create_all()

    return app


def _configure_logging() -> None:
    """Configure logging for the application."""
    # App loggers - propagate to root (where OTel handler is)
    logging.getLogger("todo_app").setLevel(logging.DEBUG)
    logging.getLogger("todo_app").propagate = True

    # Reduce noise from framework loggers
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").propagate = False

    # SQLAlchemy engine logs can be noisy
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
