"""Command 'tui' of todoterm-cli"""

import typer

from todoterm_cli.core.session import Session
from todoterm_cli.models import StorageError
from todoterm_cli.services.todo_service import get_todo_service
from todoterm_cli.utils.logger import get_logger

from .decorators import command_wrapper

app = typer.Typer()


@app.command("tui")
@command_wrapper
def tui_command() -> None:
    """Open the interactive terminal UI (vim-style keys, ? for help)."""
    # Lazy import keeps Textual off the path of one-shot commands
    from todoterm_cli.utils.ui.todo_app import run_todo_app

    session = Session(get_todo_service().store)
    run_todo_app(session)

    if session.save_error:
        get_logger().error("tui exited with unsaved changes: %s", session.save_error)
        raise StorageError(f"Changes could not be saved: {session.save_error}")
