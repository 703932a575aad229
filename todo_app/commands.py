"""`flask tasks` command group."""

from datetime import datetime

import click
from flask import Flask
from flask.cli import AppGroup

from todo_app.errors import InvalidTaskName
from todo_app.services import get_task_service


tasks_cli = AppGroup("tasks", help="Manage to-do tasks.")


def _format_time(value: datetime | None) -> str:
    return value.isoformat(sep=" ", timespec="seconds") if value else "-"


@tasks_cli.command("list")
def list_command() -> None:
    """Print every task."""
    tasks = get_task_service().list_all()
    if not tasks:
        click.echo("No tasks.")
        return
    for task in tasks:
        mark = "x" if task.is_completed else " "
        click.echo(f"{task.id:>4} [{mark}] {task.name}  (created {_format_time(task.created_at)})")


@tasks_cli.command("add")
@click.argument("name")
def add_command(name: str) -> None:
    """Create a pending task."""
    try:
        task = get_task_service().create(name)
    except InvalidTaskName as err:
        raise click.BadParameter(str(err), param_hint="NAME") from err
    click.echo(f"Added task {task.id}: {task.name}")


@tasks_cli.command("delete")
@click.argument("task_id", type=int)
def delete_command(task_id: int) -> None:
    """Delete a task; missing ids are ignored."""
    if get_task_service().delete(task_id):
        click.echo(f"Deleted task {task_id}")
    else:
        click.echo(f"No task {task_id}")


@tasks_cli.command("toggle")
@click.argument("task_id", type=int)
def toggle_command(task_id: int) -> None:
    """Flip a task between pending and completed."""
    task = get_task_service().toggle(task_id)
    if task is None:
        click.echo(f"No task {task_id}")
        return
    click.echo(f"Task {task.id} is now {task.status.value}")


@tasks_cli.command("analytics")
@click.option("--start", type=click.DateTime(), default=None, help="Range start (UTC).")
@click.option("--end", type=click.DateTime(), default=None, help="Range end (UTC).")
def analytics_command(start: datetime | None, end: datetime | None) -> None:
    """Count tasks created and completed in a range."""
    result = get_task_service().analytics(start, end)
    click.echo(f"Range: {_format_time(result.start)} .. {_format_time(result.end)}")
    click.echo(f"Created: {result.created_count}")
    click.echo(f"Completed: {result.completed_count}")


def register_commands(app: Flask) -> None:
    app.cli.add_command(tasks_cli)
