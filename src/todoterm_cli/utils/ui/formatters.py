"""Output formatters for different formats."""

import json
from datetime import datetime, timezone
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table

from todoterm_cli.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty", detailed: bool = False) -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False), end="")
    elif output_format == "table":
        format_table(data)
    elif output_format == "quiet":
        format_quiet(data)
    else:
        # Default to pretty
        format_pretty(data, detailed=detailed)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if value is None:
        return "-"
    return escape(str(value))


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    # Determine columns based on first item
    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_COLORS = {
    5: "bold red",
    4: "bold orange3",
    3: "bold yellow",
    2: "cyan",
    1: "green",
}

PRIORITY_LABELS = {
    5: "Critical",
    4: "High",
    3: "Medium",
    2: "Normal",
    1: "Low",
}

STATUS_ICONS = {
    "pending": "⬜",
    "completed": "✅",
}


def format_pretty(data: Any, detailed: bool = False) -> None:
    """Format data in pretty format with colors and icons."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No todos found[/yellow]")
            return
        for item in data:
            if isinstance(item, dict) and "description" in item:
                format_todo_item(item, detailed=detailed)
            else:
                console.print(f"• {item}")
    elif isinstance(data, dict):
        if "description" in data:
            format_todo_item(data, detailed=True)
        else:
            for key, value in data.items():
                console.print(f"[cyan]{key.replace('_', ' ').title()}:[/cyan] {_cell(value)}")
    else:
        console.print(data)


def format_priority(priority: int | None) -> str:
    """Rich markup for a priority badge, empty when unset."""
    if priority is None:
        return ""
    color = PRIORITY_COLORS.get(priority, "white")
    return f"[{color}]\\[P{priority} {PRIORITY_LABELS.get(priority, '?')}][/{color}]"


def format_due_date(value: str | datetime | None, completed: bool = False) -> str:
    """Rich markup for a due-date badge, red once the date has passed."""
    moment = _parse_timestamp(value)
    if moment is None:
        return ""
    if not completed and moment < datetime.now(timezone.utc):
        return f"[bold red]\\[overdue {moment.astimezone():%Y-%m-%d}][/bold red]"
    return f"[yellow]\\[due {moment.astimezone():%Y-%m-%d}][/yellow]"


def format_todo_item(todo: dict, detailed: bool = False) -> None:
    """Format a single todo line, plus details and timestamps when detailed."""
    completed = todo.get("completed", False)
    icon = STATUS_ICONS["completed" if completed else "pending"]
    description = escape(str(todo.get("description", "")))
    if completed:
        description = f"[dim strike]{description}[/dim strike]"

    line = f"{icon} [bold cyan]#{todo.get('id')}[/bold cyan] {description}"
    badge = format_priority(todo.get("priority"))
    if badge:
        line += f" {badge}"
    due = format_due_date(todo.get("due_date"), completed)
    if due:
        line += f" {due}"
    console.print(line)

    if detailed:
        if todo.get("details"):
            console.print(f"    [dim]Details:[/dim] {escape(str(todo['details']))}")
        if todo.get("due_date"):
            console.print(f"    [dim]Due:[/dim] {format_timestamp(todo.get('due_date'))}")
        console.print(f"    [dim]Created:[/dim] {format_timestamp(todo.get('created_at'))}")
        if todo.get("completed_at"):
            console.print(
                f"    [dim]Completed:[/dim] {format_timestamp(todo.get('completed_at'))}"
            )


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "id" in item:
                print(item["id"])
    elif isinstance(data, dict) and "id" in data:
        print(data["id"])


# ============================================================================
# Helper Functions
# ============================================================================


def _parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Aware datetime from a stored timestamp, or None if absent or unparseable."""
    if not value:
        return None
    try:
        if isinstance(value, datetime):
            moment = value
        else:
            moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def format_timestamp(value: str | datetime | None) -> str:
    """Render a stored UTC timestamp in local time, e.g. 2024-06-01 12:00."""
    if not value:
        return "-"
    moment = _parse_timestamp(value)
    if moment is None:
        return str(value)
    return moment.astimezone().strftime("%Y-%m-%d %H:%M")


def format_relative_time(value: str | datetime | None) -> str:
    """Format timestamp as relative time."""
    moment = _parse_timestamp(value)
    if moment is None:
        return ""
    seconds = (datetime.now(timezone.utc) - moment).total_seconds()

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{int(seconds / 60)}m ago"
    if seconds < 86400:
        return f"{int(seconds / 3600)}h ago"
    return f"{int(seconds / 86400)}d ago"


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"
