"""Unit tests for the data commands (export, import, purge)."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from todoterm_cli.commands.data_command import app

runner = CliRunner()


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


class TestExport:
    """Tests for 'export'."""

    def test_json_to_stdout(self, seeded_store):
        result = runner.invoke(app, ["export"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["next_id"] == 4

    def test_markdown_to_file(self, seeded_store, tmp_path):
        target = tmp_path / "todos.md"
        result = runner.invoke(app, ["export", "--format", "markdown", "-o", str(target)])
        assert result.exit_code == 0, result.output
        assert "Exported 3 todo(s)" in result.output
        assert target.read_text().startswith("# Todo List")

    def test_unknown_format_exits_2(self, seeded_store):
        result = runner.invoke(app, ["export", "--format", "xml"])
        assert result.exit_code == 2

    def test_unwritable_target_exits_7(self, seeded_store, tmp_path):
        target = tmp_path / "missing-dir" / "out.json"
        result = runner.invoke(app, ["export", "-o", str(target)])
        assert result.exit_code == 7


# ---------------------------------------------------------------------------
# import
# ---------------------------------------------------------------------------


def _write_export(tmp_path, descriptions):
    records = [
        {"id": index, "description": text}
        for index, text in enumerate(descriptions, start=1)
    ]
    path = tmp_path / "import.json"
    path.write_text(json.dumps({"todos": records, "next_id": len(records) + 1}))
    return path


class TestImport:
    """Tests for 'import'."""

    def test_merge(self, seeded_store, tmp_path):
        source = _write_export(tmp_path, ["One", "Two"])
        result = runner.invoke(app, ["import", str(source), "--merge"])
        assert result.exit_code == 0, result.output
        assert [t.id for t in seeded_store.load().todos] == [1, 2, 3, 4, 5]

    def test_replace_with_yes(self, seeded_store, tmp_path):
        source = _write_export(tmp_path, ["Only"])
        result = runner.invoke(app, ["import", str(source), "--yes"])
        assert result.exit_code == 0, result.output
        loaded = seeded_store.load()
        assert [t.description for t in loaded.todos] == ["Only"]
        assert loaded.next_id == 4

    def test_replace_declined(self, seeded_store, tmp_path):
        source = _write_export(tmp_path, ["Only"])
        result = runner.invoke(app, ["import", str(source)], input="n\n")
        assert result.exit_code == 0
        assert len(seeded_store.load()) == 3

    def test_missing_file_exits_7(self, store, tmp_path):
        result = runner.invoke(app, ["import", str(tmp_path / "nope.json")])
        assert result.exit_code == 7

    def test_invalid_content_exits_2(self, store, tmp_path):
        source = tmp_path / "bad.json"
        source.write_text("[1, 2")
        result = runner.invoke(app, ["import", str(source), "-y"])
        assert result.exit_code == 2


    def test_binary_content_exits_2(self, store, tmp_path):
        source = tmp_path / "bad.json"
        source.write_bytes(b"\xff\xfe\x00garbage")
        result = runner.invoke(app, ["import", str(source), "-y"])
        assert result.exit_code == 2, result.output
        assert "not valid JSON" in result.output

# ---------------------------------------------------------------------------
# purge
# ---------------------------------------------------------------------------


class TestPurge:
    """Tests for 'purge'."""

    def test_purge_yes(self, seeded_store):
        result = runner.invoke(app, ["purge", "--yes"])
        assert result.exit_code == 0, result.output
        assert not seeded_store.path.exists()

    def test_purge_declined(self, seeded_store):
        result = runner.invoke(app, ["purge"], input="n\n")
        assert result.exit_code == 0
        assert seeded_store.path.exists()

    def test_nothing_to_purge(self, store):
        result = runner.invoke(app, ["purge", "-y"])
        assert "Nothing to purge" in result.output

    def test_purge_corrupted_file(self, data_file):
        data_file.parent.mkdir(parents=True, exist_ok=True)
        data_file.write_text("{not json")
        result = runner.invoke(app, ["purge", "-y"])
        assert result.exit_code == 0, result.output
        assert "unreadable data file" in result.output
        assert not data_file.exists()

    def test_purge_binary_file(self, data_file):
        data_file.parent.mkdir(parents=True, exist_ok=True)
        data_file.write_bytes(b"\xff\xfe\x00garbage")
        result = runner.invoke(app, ["purge", "-y"])
        assert result.exit_code == 0, result.output
        assert not data_file.exists()
