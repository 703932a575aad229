"""WSGI entry point: `gunicorn todo_app.wsgi:app`."""

from todo_app import create_app


app = create_app()
