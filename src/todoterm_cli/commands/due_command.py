"""Command 'due' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.formatters import format_success, format_timestamp

from .decorators import command_wrapper

app = typer.Typer()


@app.command("due")
@command_wrapper
def due_command(
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
    when: Annotated[
        str,
        typer.Argument(help="YYYY-MM-DD, today, tomorrow, or none to clear"),
    ] = "none",
) -> None:
    """
    Set or clear the due date of a todo.

    Examples:
      todoterm due 3 2025-04-15
      todoterm due 3 tomorrow
      todoterm due 3 none
    """
    todo = get_todo_service().set_due_date(todo_id, when)
    if todo.due_date is None:
        format_success(f"Cleared due date of todo #{todo.id}")
    else:
        format_success(f"Todo #{todo.id} is due {format_timestamp(todo.due_date)}")
