"""Command 'details' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("details")
@command_wrapper
def details_command(
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
    text: Annotated[str, typer.Argument(help="Notes; leave out to clear them")] = "",
) -> None:
    """Set or clear the free-form notes of a todo."""
    todo = get_todo_service().set_details(todo_id, text)
    if todo.details is None:
        format_success(f"Cleared details of todo #{todo.id}")
    else:
        format_success(f"Updated details of todo #{todo.id}")
