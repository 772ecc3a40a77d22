"""JSON file store for the todo collection."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from todoterm_cli.models import StorageError, TodoList
from todoterm_cli.utils.logger import get_logger


class StorageInfo(BaseModel):
    """Where the data file lives and how large it is."""

    path: str
    size_bytes: int
    todo_count: int | None


class TodoStore:
    """Loads and saves a ``TodoList`` as a single JSON document.

    Writes go to a temporary sibling file which is then renamed over the
    target, so a crash mid-write never leaves a truncated data file.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self.logger = get_logger()

    @property
    def _tmp_path(self) -> Path:
        return self.path.with_name(f".{self.path.name}.tmp")

    def load(self) -> TodoList:
        """Read the collection from disk.

        A missing file is an empty collection. A file that exists but cannot
        be read or parsed raises StorageError.
        """
        if not self.path.exists():
            self.logger.debug("data file %s missing, starting empty", self.path)
            return TodoList()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error("failed to read %s: %s", self.path, e)
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        try:
            todos = TodoList.model_validate_json(raw)
        except PydanticValidationError as e:
            self.logger.error("invalid data file %s: %s", self.path, e)
            raise StorageError(
                f"Data file {self.path} is corrupted: {e.error_count()} error(s)"
            ) from e

        self.logger.debug("loaded %d todo(s) from %s", len(todos), self.path)
        return todos

    def save(self, todos: TodoList) -> None:
        """Atomically replace the data file with ``todos``."""
        payload = todos.model_dump_json(indent=2)
        tmp_path = self._tmp_path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            self.logger.error("failed to save %s: %s", self.path, e)
            raise StorageError(f"Cannot write {self.path}: {e}") from e

        self.logger.info("saved %d todo(s) to %s", len(todos), self.path)

    @staticmethod
    def next_identifier(todos: TodoList) -> int:
        """Identifier the next added todo will receive."""
        return todos.next_identifier()

    def info(self) -> StorageInfo | None:
        """Describe the data file, or None if it does not exist yet.

        ``todo_count`` is None when the file exists but cannot be loaded.
        """
        if not self.path.exists():
            return None
        try:
            size = self.path.stat().st_size
        except OSError as e:
            raise StorageError(f"Cannot stat {self.path}: {e}") from e
        try:
            todo_count: int | None = len(self.load())
        except StorageError:
            todo_count = None
        return StorageInfo(path=str(self.path), size_bytes=size, todo_count=todo_count)

    def purge(self) -> bool:
        """Delete the data file. Returns False if there was nothing to delete."""
        if not self.path.exists():
            return False
        try:
            self.path.unlink()
        except OSError as e:
            raise StorageError(f"Cannot delete {self.path}: {e}") from e
        self.logger.warning("purged data file %s", self.path)
        return True
