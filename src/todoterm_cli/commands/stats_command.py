"""Command 'stats' of todoterm-cli"""

from typing import Annotated

import typer
from rich.markup import escape

from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.console import get_console
from todoterm_cli.utils.ui.formatters import (
    format_output,
    format_relative_time,
    get_completion_color,
    get_progress_bar,
)

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("stats")
@command_wrapper
def stats_command(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json/yaml)")
    ] = "pretty",
) -> None:
    """Show totals, completion rate and priority breakdown."""
    stats = get_todo_service().stats()

    if output in ("json", "yaml"):
        format_output(stats.model_dump(mode="json"), output)
        return

    console.print("\n[bold cyan]📊 Todo Statistics[/bold cyan]\n")
    console.print(f"Total:     [bold]{stats.total}[/bold]")
    console.print(f"Completed: [green]{stats.completed}[/green]")
    console.print(f"Pending:   [yellow]{stats.pending}[/yellow]")
    if stats.overdue:
        console.print(f"Overdue:   [bold red]{stats.overdue}[/bold red]")

    color = get_completion_color(stats.completion_rate)
    console.print(
        f"Progress:  [{color}]{get_progress_bar(stats.completion_rate)} "
        f"{stats.completion_rate:.1f}%[/{color}]"
    )

    if stats.by_priority:
        console.print("\n[bold]By priority:[/bold]")
        for name, count in stats.by_priority.items():
            console.print(f"  {name:<9} {count}")

    if stats.oldest_pending is not None:
        oldest = stats.oldest_pending
        console.print(
            f"\n[bold]Oldest pending:[/bold] #{oldest.id} {escape(oldest.description)} "
            f"[dim]({format_relative_time(oldest.created_at)})[/dim]"
        )
    console.print()
