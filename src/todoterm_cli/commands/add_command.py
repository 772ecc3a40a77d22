"""Command 'add' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.console import get_console
from todoterm_cli.utils.ui.formatters import (
    format_output,
    format_success,
    format_timestamp,
)

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("add")
@command_wrapper
def add_command(
    description: Annotated[str, typer.Argument(help="What needs doing")],
    priority: Annotated[
        int | None,
        typer.Option("--priority", "-p", help="Priority 1 (Low) to 5 (Critical)"),
    ] = None,
    due: Annotated[
        str | None,
        typer.Option("--due", help="Due date: YYYY-MM-DD, today or tomorrow"),
    ] = None,
    details: Annotated[
        str | None, typer.Option("--details", help="Longer free-form notes")
    ] = None,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json/yaml)")
    ] = "pretty",
) -> None:
    """
    Add a new todo.

    Examples:
      todoterm add "Buy milk"
      todoterm add "Fix login bug" --priority 5
      todoterm add "File taxes" --due 2025-04-15 --details "Receipts in the blue folder"
    """
    todo = get_todo_service().add_todo(description, priority, details=details, due=due)

    if output in ("json", "yaml"):
        format_output(todo.model_dump(mode="json"), output)
        return

    format_success(f"Added todo #{todo.id}: {todo.description}")
    if todo.priority is not None:
        console.print(f"[dim]Priority: {todo.priority} ({todo.priority_name})[/dim]")
    if todo.due_date is not None:
        console.print(f"[dim]Due: {format_timestamp(todo.due_date)}[/dim]")
