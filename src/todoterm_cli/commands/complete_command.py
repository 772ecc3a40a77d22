"""Command 'complete' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.console import get_console
from todoterm_cli.utils.ui.formatters import format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("complete")
@command_wrapper
def complete_command(
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
) -> None:
    """Mark a todo as completed."""
    todo, already = get_todo_service().complete_todo(todo_id)
    if already:
        format_warning(f"Todo #{todo.id} is already completed")
        return
    format_success(f"Completed todo #{todo.id}: {todo.description}")
    console.print(f"[dim]To undo: todoterm reopen {todo.id}[/dim]")
