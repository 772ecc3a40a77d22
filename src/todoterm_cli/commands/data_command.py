"""Data management commands (export, import, purge)."""

from pathlib import Path
from typing import Annotated

import typer

from todoterm_cli.models import StorageError
from todoterm_cli.services.export_service import (
    EXPORT_FORMATS,
    export_todos,
    parse_import,
)
from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.ui.console import get_console
from todoterm_cli.utils.ui.formatters import (
    format_info,
    format_success,
    format_warning,
)

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("export")
@command_wrapper
def export_command(
    export_format: Annotated[
        str,
        typer.Option(
            "--format", "-F", help=f"Export format ({'/'.join(EXPORT_FORMATS)})"
        ),
    ] = "json",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
) -> None:
    """
    Export all todos.

    Examples:
        todoterm export
        todoterm export --format markdown --output todos.md
        todoterm export --format csv -o todos.csv
    """
    todos = get_todo_service().load()
    content = export_todos(todos, export_format)

    if output is None:
        typer.echo(content, nl=False)
        return

    try:
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Cannot write {output}: {e}") from e
    format_success(f"Exported {len(todos)} todo(s) to {output}")


@app.command("import")
@command_wrapper
def import_command(
    file: Annotated[Path, typer.Argument(help="JSON file produced by 'export'")],
    merge: Annotated[
        bool,
        typer.Option("--merge", "-m", help="Append to existing todos instead of replacing them"),
    ] = False,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation")
    ] = False,
) -> None:
    """Import todos from a JSON export, replacing or merging."""
    try:
        content = file.read_bytes()
    except OSError as e:
        raise StorageError(f"Cannot read {file}: {e}") from e

    imported = parse_import(content)
    service = get_todo_service()

    if not merge and not yes:
        current = len(service.load())
        if current and not typer.confirm(
            f"Replace {current} existing todo(s) with {len(imported)} imported?"
        ):
            format_info("Cancelled")
            return

    count = service.import_todos(imported, merge=merge)
    verb = "Merged" if merge else "Imported"
    format_success(f"{verb} {count} todo(s) from {file}")


@app.command("purge")
@command_wrapper
def purge_command(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip confirmation")
    ] = False,
) -> None:
    """Delete the data file and every todo in it."""
    service = get_todo_service()
    info = service.storage_info()
    if info is None:
        format_info("Nothing to purge")
        return

    if info.todo_count is None:
        format_warning(f"This will permanently delete the unreadable data file {info.path}")
    else:
        format_warning(
            f"This will permanently delete {info.todo_count} todo(s) in {info.path}"
        )
    if not yes and not typer.confirm("Are you absolutely sure?", default=False):
        format_info("Cancelled")
        return

    service.purge()
    format_success("All todos purged")
