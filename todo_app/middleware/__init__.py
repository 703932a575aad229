"""Middleware modules."""

from todo_app.middleware.metrics import register_metrics_middleware


__all__ = ["register_metrics_middleware"]
