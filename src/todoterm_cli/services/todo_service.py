"""Todo service - one-shot operations for the CLI.

Each call loads the collection from the store, applies one engine
operation and saves the result. The interactive UI talks to the engine
through a Session instead and keeps the collection in memory.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from todoterm_cli.config import get_config_manager
from todoterm_cli.core import engine
from todoterm_cli.models import Todo, TodoFilter, TodoList, TodoStats
from todoterm_cli.repositories import StorageInfo, TodoStore
from todoterm_cli.utils.logger import get_logger

DATA_FILE_ENV = "TODOTERM_FILE"
DEFAULT_DATA_FILE = "todos.json"

_data_file_override: Path | None = None


def set_data_file_override(path: Path | str | None) -> None:
    """Use ``path`` as the data file for the rest of the process (``--file``)."""
    global _data_file_override
    _data_file_override = Path(path).expanduser() if path else None
    get_todo_service.cache_clear()


def resolve_data_file() -> Path:
    """Pick the data file: --file, then $TODOTERM_FILE, then config, then default."""
    if _data_file_override is not None:
        return _data_file_override
    env_path = os.environ.get(DATA_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser()
    config_manager = get_config_manager()
    configured = config_manager.get("storage.path")
    if configured:
        return Path(configured).expanduser()
    return config_manager.data_dir / DEFAULT_DATA_FILE


class TodoService:
    """Service for todo business logic.

    Wraps the pure engine with load/save so every mutating command is a
    single read-modify-write of the data file.
    """

    def __init__(self, store: TodoStore):
        """Initialize the todo service.

        Args:
            store: TodoStore the collection is read from and written to
        """
        self.store = store
        self.logger = get_logger()

    def load(self) -> TodoList:
        return self.store.load()

    def list_todos(self, todo_filter: TodoFilter = TodoFilter.ALL) -> list[Todo]:
        """List todos matching the filter in insertion order."""
        return list(engine.list_todos(self.store.load(), todo_filter))

    def get_todo(self, todo_id: int) -> Todo:
        return engine.find_todo(self.store.load(), todo_id)

    def add_todo(
        self,
        description: str,
        priority: int | None = None,
        details: str | None = None,
        due: str | None = None,
    ) -> Todo:
        """Add a new todo.

        Args:
            description: Task text (trimmed, must not be empty)
            priority: Optional priority in [1, 5]
            details: Optional free-form notes
            due: Optional due date text (YYYY-MM-DD, today, tomorrow)

        Returns:
            The created Todo
        """
        due_date = engine.parse_due_date(due) if due else None
        updated, todo = engine.add_todo(
            self.store.load(), description, priority, details=details, due_date=due_date
        )
        self.store.save(updated)
        self.logger.info("added todo #%d", todo.id)
        return todo

    def complete_todo(self, todo_id: int) -> tuple[Todo, bool]:
        """Complete a todo.

        Returns:
            The todo and whether it was already completed before the call
        """
        todos = self.store.load()
        already = engine.find_todo(todos, todo_id).completed
        updated = engine.complete_todo(todos, todo_id)
        if not already:
            self.store.save(updated)
            self.logger.info("completed todo #%d", todo_id)
        return engine.find_todo(updated, todo_id), already

    def reopen_todo(self, todo_id: int) -> tuple[Todo, bool]:
        """Reopen a todo. The flag is True if it was already pending."""
        todos = self.store.load()
        already = not engine.find_todo(todos, todo_id).completed
        updated = engine.reopen_todo(todos, todo_id)
        if not already:
            self.store.save(updated)
            self.logger.info("reopened todo #%d", todo_id)
        return engine.find_todo(updated, todo_id), already

    def delete_todo(self, todo_id: int) -> Todo:
        todos = self.store.load()
        removed = engine.find_todo(todos, todo_id)
        self.store.save(engine.delete_todo(todos, todo_id))
        self.logger.info("deleted todo #%d", todo_id)
        return removed

    def edit_todo(self, todo_id: int, description: str) -> Todo:
        updated = engine.edit_todo(self.store.load(), todo_id, description)
        self.store.save(updated)
        self.logger.info("edited todo #%d", todo_id)
        return engine.find_todo(updated, todo_id)

    def set_priority(self, todo_id: int, priority: int | None) -> Todo:
        updated = engine.set_priority(self.store.load(), todo_id, priority)
        self.store.save(updated)
        self.logger.info("set priority of todo #%d to %s", todo_id, priority)
        return engine.find_todo(updated, todo_id)

    def set_details(self, todo_id: int, details: str | None) -> Todo:
        updated = engine.set_details(self.store.load(), todo_id, details)
        self.store.save(updated)
        self.logger.info("set details of todo #%d", todo_id)
        return engine.find_todo(updated, todo_id)

    def set_due_date(self, todo_id: int, due: str) -> Todo:
        """Set the due date from user text; '', 'none' or 'clear' removes it."""
        due_date = engine.parse_due_date(due)
        updated = engine.set_due_date(self.store.load(), todo_id, due_date)
        self.store.save(updated)
        self.logger.info("set due date of todo #%d to %s", todo_id, due_date)
        return engine.find_todo(updated, todo_id)

    def clear_completed(self) -> int:
        updated, removed = engine.clear_completed(self.store.load())
        if removed:
            self.store.save(updated)
        self.logger.info("cleared %d completed todo(s)", removed)
        return removed

    def import_todos(self, imported: TodoList, merge: bool = True) -> int:
        """Merge or replace the collection with ``imported``.

        Returns:
            Number of todos taken from the import
        """
        todos = self.store.load()
        if merge:
            updated, count = engine.merge_todos(todos, imported)
        else:
            updated, count = engine.replace_todos(todos, imported), len(imported)
        self.store.save(updated)
        self.logger.info("imported %d todo(s) (merge=%s)", count, merge)
        return count

    def stats(self) -> TodoStats:
        return engine.compute_stats(self.store.load())

    def storage_info(self) -> StorageInfo | None:
        return self.store.info()

    def purge(self) -> bool:
        return self.store.purge()


@lru_cache(maxsize=1)
def get_todo_service() -> TodoService:
    """Get a cached TodoService bound to the resolved data file."""
    return TodoService(TodoStore(resolve_data_file()))
