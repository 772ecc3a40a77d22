"""Main entry point for todoterm."""

import os
from pathlib import Path
from typing import Annotated

import typer

from todoterm_cli import __version__
from todoterm_cli.commands import (
    add_command,
    clear_command,
    complete_command,
    config,
    data_command,
    delete_command,
    details_command,
    due_command,
    edit_command,
    list_command,
    priority_command,
    reopen_command,
    stats_command,
    tui_command,
)
from todoterm_cli.config import get_config_manager
from todoterm_cli.services.todo_service import set_data_file_override
from todoterm_cli.utils.logger import LOG_LEVEL_ENV, get_logger, set_log_level
from todoterm_cli.utils.typer_helpers import SuggestingGroup
from todoterm_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="todoterm",
    cls=SuggestingGroup,
    help="A todo list for the command line, with a vim-style terminal UI",
    no_args_is_help=True,
)

console = get_console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]todoterm[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


@app.callback()
def main_callback(
    file: Annotated[
        Path | None,
        typer.Option("--file", help="Data file to use instead of the default"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """A todo list for the command line, with a vim-style terminal UI."""
    if verbose:
        set_log_level("DEBUG")
    elif not os.environ.get(LOG_LEVEL_ENV):
        set_log_level(get_config_manager().config.logging.level)
    set_data_file_override(file)
    get_logger().debug("todoterm %s starting (file=%s)", __version__, file)


# Todo commands
app.command("add")(add_command.add_command)
app.command("list")(list_command.list_command)
app.command("complete")(complete_command.complete_command)
app.command("reopen")(reopen_command.reopen_command)
app.command("delete")(delete_command.delete_command)
app.command("edit")(edit_command.edit_command)
app.command("priority")(priority_command.priority_command)
app.command("due")(due_command.due_command)
app.command("details")(details_command.details_command)
app.command("clear")(clear_command.clear_command)
app.command("stats")(stats_command.stats_command)

# Data management
app.command("export")(data_command.export_command)
app.command("import")(data_command.import_command)
app.command("purge")(data_command.purge_command)

# Interactive UI
app.command("tui")(tui_command.tui_command)
app.command("interactive", hidden=True)(tui_command.tui_command)

# Subcommands
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todoterm[/bold] version [cyan]{__version__}[/cyan]")


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
