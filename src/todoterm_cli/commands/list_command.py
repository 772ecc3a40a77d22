"""Command 'list' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.config import get_config_manager
from todoterm_cli.core import engine
from todoterm_cli.models import TodoFilter
from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.console import get_console
from todoterm_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("list")
@command_wrapper
def list_command(
    todo_filter: Annotated[
        TodoFilter,
        typer.Option(
            "--filter",
            "-f",
            help="Which todos to show (status, priority band or due date)",
            case_sensitive=False,
        ),
    ] = TodoFilter.ALL,
    detailed: Annotated[
        bool, typer.Option("--detailed", "-d", help="Show details, due dates and timestamps")
    ] = False,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format (pretty/table/json/yaml/quiet)"),
    ] = None,
    json_opt: Annotated[
        bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
    ] = False,
) -> None:
    """List todos, optionally filtered by status, priority or due date."""
    if json_opt:
        output = "json"
    if output is None:
        output = get_config_manager().config.output.format

    all_todos = get_todo_service().load()
    todos = list(engine.list_todos(all_todos, todo_filter))
    format_output([todo.model_dump(mode="json") for todo in todos], output, detailed=detailed)

    if output == "pretty":
        total = len(all_todos)
        done = sum(1 for todo in all_todos.todos if todo.completed)
        console.print()
        console.print(
            f"[dim]Showing {len(todos)} of {total} | "
            f"Completed: {done} | Pending: {total - done}[/dim]"
        )
