"""Command 'reopen' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.formatters import format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer()


@app.command("reopen")
@command_wrapper
def reopen_command(
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
) -> None:
    """Mark a completed todo as pending again."""
    todo, already = get_todo_service().reopen_todo(todo_id)
    if already:
        format_warning(f"Todo #{todo.id} is not completed")
        return
    format_success(f"Reopened todo #{todo.id}: {todo.description}")
