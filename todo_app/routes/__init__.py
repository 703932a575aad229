"""Route blueprints."""

from todo_app.routes.api import api_bp
from todo_app.routes.health import health_bp
from todo_app.routes.views import views_bp


__all__ = ["health_bp", "api_bp", "views_bp"]
