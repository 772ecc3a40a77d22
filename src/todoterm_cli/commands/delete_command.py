"""Command 'delete' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.config import get_config_manager
from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("delete")
@command_wrapper
def delete_command(
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation")
    ] = False,
) -> None:
    """Delete a todo. Its ID is never reused."""
    service = get_todo_service()
    todo = service.get_todo(todo_id)

    if not force and get_config_manager().config.ui.confirm_delete:
        if not typer.confirm(f"Delete todo #{todo.id} '{todo.description}'?"):
            format_info("Cancelled")
            return

    service.delete_todo(todo_id)
    format_success(f"Deleted todo #{todo.id}: {todo.description}")
