"""todoterm domain models.

Pydantic models for the todo records and the collection that owns them,
plus the exception taxonomy shared by the store, the engine and the UI.
"""

from .exceptions import NotFoundError, StorageError, TodoTermError, ValidationError
from .todo import (
    MAX_PRIORITY,
    MIN_PRIORITY,
    DUE_SOON_WINDOW,
    PRIORITY_NAMES,
    Todo,
    TodoFilter,
    TodoList,
    TodoStats,
    TodoView,
    utc_now,
)

__all__ = [
    # Todo models
    "Todo",
    "TodoList",
    "TodoFilter",
    "TodoView",
    "TodoStats",
    "PRIORITY_NAMES",
    "MIN_PRIORITY",
    "MAX_PRIORITY",
    "DUE_SOON_WINDOW",
    "utc_now",
    # Errors
    "TodoTermError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
]
