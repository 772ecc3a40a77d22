"""Custom exceptions for todoterm."""

from todoterm_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
)


class TodoTermError(Exception):
    """Base exception for all todoterm errors."""

    exit_code = ERROR_GENERAL


class ValidationError(TodoTermError):
    """Raised when user input is rejected (empty description, bad priority)."""

    exit_code = ERROR_INVALID_ARGS


class NotFoundError(TodoTermError):
    """Raised when no todo has the requested identifier."""

    exit_code = ERROR_NOT_FOUND

    def __init__(self, todo_id: int):
        super().__init__(f"Todo with ID {todo_id} not found")
        self.todo_id = todo_id


class StorageError(TodoTermError):
    """Raised when the data file cannot be read, parsed or written."""

    exit_code = ERROR_STORAGE
