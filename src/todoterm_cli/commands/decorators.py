"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from todoterm_cli.models import TodoTermError
from todoterm_cli.utils.exit_codes import get_exit_code_name
from todoterm_cli.utils.logger import get_logger
from todoterm_cli.utils.ui.formatters import format_error


def command_wrapper(func: Callable) -> Callable:
    """Log timing and turn todoterm errors into a message plus exit code."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except TodoTermError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                get_exit_code_name(e.exit_code),
                str(e),
            )
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except (typer.Exit, typer.Abort):
            # Re-raise Typer's own exits (like --help, explicit Exit(0) or a declined prompt)
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=1) from e

    return wrapper
