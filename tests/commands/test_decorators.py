"""Unit tests for command decorators."""

from __future__ import annotations

import pytest
import typer
from typer.testing import CliRunner

from todoterm_cli.commands.decorators import command_wrapper
from todoterm_cli.models import NotFoundError, StorageError, ValidationError

runner = CliRunner()


def _app_raising(exc: BaseException) -> typer.Typer:
    app = typer.Typer()

    @app.command()
    @command_wrapper
    def boom() -> None:
        raise exc

    return app


class TestCommandWrapper:
    """Tests for error translation and logging in command_wrapper."""

    def test_returns_value(self):
        @command_wrapper
        def ok():
            return 42

        assert ok() == 42

    def test_preserves_name(self):
        @command_wrapper
        def my_command():
            pass

        assert my_command.__name__ == "my_command"

    @pytest.mark.parametrize(
        "exc,code",
        [
            (ValidationError("bad input"), 2),
            (NotFoundError(3), 5),
            (StorageError("disk"), 7),
        ],
    )
    def test_app_errors_map_to_exit_codes(self, exc, code):
        result = runner.invoke(_app_raising(exc), [])
        assert result.exit_code == code
        assert "Error:" in result.output

    def test_unexpected_error_exits_1(self):
        result = runner.invoke(_app_raising(RuntimeError("kaboom")), [])
        assert result.exit_code == 1
        assert "An unexpected error occurred: kaboom" in result.output

    def test_typer_exit_passes_through(self):
        result = runner.invoke(_app_raising(typer.Exit(code=3)), [])
        assert result.exit_code == 3

    def test_failures_are_logged(self, app_log):
        runner.invoke(_app_raising(StorageError("disk on fire")), [])
        log = app_log()
        assert "command failed: boom" in log
        assert "disk on fire" in log
