"""Command 'edit' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("edit")
@command_wrapper
def edit_command(
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
    description: Annotated[str, typer.Argument(help="New description")],
) -> None:
    """Replace the description of a todo."""
    todo = get_todo_service().edit_todo(todo_id, description)
    format_success(f"Updated todo #{todo.id}: {todo.description}")
