"""Command 'priority' of todoterm-cli"""

from typing import Annotated

import typer

from todoterm_cli.models import ValidationError
from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()

_CLEAR_VALUES = ("0", "none", "clear")


def parse_priority_value(value: str) -> int | None:
    """'0', 'none' or 'clear' remove the priority; otherwise expect an integer."""
    value = value.strip().lower()
    if value in _CLEAR_VALUES:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(
            f"Priority must be 1-5, or 0/none to clear, got '{value}'"
        ) from None


@app.command("priority")
@command_wrapper
def priority_command(
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
    value: Annotated[str, typer.Argument(help="1 (Low) to 5 (Critical), or 0/none to clear")],
) -> None:
    """Set or clear the priority of a todo."""
    todo = get_todo_service().set_priority(todo_id, parse_priority_value(value))
    if todo.priority is None:
        format_success(f"Cleared priority of todo #{todo.id}")
    else:
        format_success(
            f"Set priority of todo #{todo.id} to {todo.priority} ({todo.priority_name})"
        )
