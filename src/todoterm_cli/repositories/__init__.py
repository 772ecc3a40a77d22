"""Persistence layer for todoterm.

The store owns the on-disk JSON document; everything above it works on
in-memory ``TodoList`` values.
"""

from .todo_store import StorageInfo, TodoStore

__all__ = [
    "TodoStore",
    "StorageInfo",
]
