"""Unit tests for SuggestingGroup (typer_helpers.py)."""

from __future__ import annotations

import typer
from typer.testing import CliRunner

from todoterm_cli.utils.typer_helpers import SuggestingGroup

runner = CliRunner()


def _make_app() -> typer.Typer:
    app = typer.Typer(cls=SuggestingGroup)

    @app.command("add")
    def add() -> None:
        print("added")

    @app.command("delete")
    def delete() -> None:
        print("deleted")

    @app.command("list")
    def list_() -> None:
        print("listed")

    @app.command("lists", hidden=True)
    def lists() -> None:
        print("listed many")

    return app


class TestSuggestingGroup:
    """Tests for the SuggestingGroup Typer group."""

    def test_valid_command_passes_through(self):
        result = runner.invoke(_make_app(), ["add"])
        assert result.exit_code == 0
        assert "added" in result.output

    def test_single_suggestion(self):
        result = runner.invoke(_make_app(), ["ad"])
        assert result.exit_code == 1
        assert 'unknown command "ad"' in result.output
        assert "Did you mean this?" in result.output
        assert "add" in result.output

    def test_suggests_closest_command(self):
        result = runner.invoke(_make_app(), ["dele"])
        assert result.exit_code == 1
        assert "delete" in result.output

    def test_hidden_commands_not_suggested(self):
        # "lis" is close to both "list" and the hidden "lists"
        result = runner.invoke(_make_app(), ["lis"])
        assert result.exit_code == 1
        assert "Did you mean this?" in result.output
        assert "lists" not in result.output

    def test_no_close_match_keeps_usage_error(self):
        result = runner.invoke(_make_app(), ["zzzzzz"])
        assert result.exit_code == 2
        assert "Did you mean this?" not in result.output
