"""Command 'clear' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.models import TodoFilter
from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("clear")
@command_wrapper
def clear_command(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation")
    ] = False,
) -> None:
    """Remove all completed todos."""
    service = get_todo_service()
    completed = service.list_todos(TodoFilter.COMPLETED)
    if not completed:
        format_info("No completed todos to clear")
        return

    if not force and not typer.confirm(f"Remove {len(completed)} completed todo(s)?"):
        format_info("Cancelled")
        return

    removed = service.clear_completed()
    format_success(f"Cleared {removed} completed todo(s)")
