"""Services module for todoterm - Business logic layer."""

from .export_service import EXPORT_FORMATS, export_todos, parse_import
from .todo_service import TodoService, get_todo_service, resolve_data_file

__all__ = [
    "TodoService",
    "get_todo_service",
    "resolve_data_file",
    "EXPORT_FORMATS",
    "export_todos",
    "parse_import",
]
