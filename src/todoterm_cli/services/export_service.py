"""Export and import of todo collections."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Callable

import yaml
from pydantic import ValidationError as PydanticValidationError

from todoterm_cli.models import Todo, TodoList, ValidationError

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _priority_suffix(todo: Todo) -> str:
    return f" _{todo.priority_name}_" if todo.priority is not None else ""


def _due_suffix(todo: Todo) -> str:
    return f" (due {todo.due_date:%Y-%m-%d})" if todo.due_date is not None else ""


def _markdown_item(todo: Todo) -> list[str]:
    mark = "x" if todo.completed else " "
    suffix = "" if todo.completed else _priority_suffix(todo)
    lines = [f"- [{mark}] [#{todo.id}] {todo.description}{suffix}{_due_suffix(todo)}"]
    if todo.details:
        lines += [f"  > {line}" for line in todo.details.splitlines()]
    return lines


def to_json(todos: TodoList) -> str:
    """Same document layout as the data file, so it can be imported back."""
    return todos.model_dump_json(indent=2) + "\n"


def to_yaml(todos: TodoList) -> str:
    return yaml.dump(
        todos.model_dump(mode="json"), default_flow_style=False, sort_keys=False
    )


def to_markdown(todos: TodoList) -> str:
    lines = ["# Todo List", ""]
    if not todos.todos:
        lines.append("No todos.")
        return "\n".join(lines) + "\n"

    lines += ["## Pending", ""]
    for todo in todos.todos:
        if not todo.completed:
            lines += _markdown_item(todo)
    lines += ["", "## Completed", ""]
    for todo in todos.todos:
        if todo.completed:
            lines += _markdown_item(todo)
    return "\n".join(lines) + "\n"


def to_csv(todos: TodoList) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(
        ["ID", "Description", "Priority", "Completed", "Created", "Completed At", "Due", "Details"]
    )
    for todo in todos.todos:
        writer.writerow(
            [
                todo.id,
                todo.description,
                "" if todo.priority is None else todo.priority,
                str(todo.completed).lower(),
                todo.created_at.strftime(_TIMESTAMP_FORMAT),
                todo.completed_at.strftime(_TIMESTAMP_FORMAT) if todo.completed_at else "",
                todo.due_date.strftime(_TIMESTAMP_FORMAT) if todo.due_date else "",
                todo.details or "",
            ]
        )
    return buffer.getvalue()


def to_text(todos: TodoList) -> str:
    return "".join(
        f"{'[DONE]' if todo.completed else '[TODO]'} #{todo.id}: {todo.description}"
        f"{_due_suffix(todo)}\n"
        for todo in todos.todos
    )


EXPORT_FORMATS: dict[str, Callable[[TodoList], str]] = {
    "json": to_json,
    "yaml": to_yaml,
    "markdown": to_markdown,
    "csv": to_csv,
    "text": to_text,
}


def export_todos(todos: TodoList, export_format: str) -> str:
    """Render ``todos`` in one of EXPORT_FORMATS."""
    try:
        renderer = EXPORT_FORMATS[export_format.lower()]
    except KeyError:
        raise ValidationError(
            f"Unknown export format '{export_format}'. "
            f"Choose from: {', '.join(EXPORT_FORMATS)}"
        ) from None
    return renderer(todos)


def parse_import(content: str | bytes) -> TodoList:
    """Parse a JSON export (or a bare JSON list of todos) into a TodoList."""
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"Import file is not valid JSON: {e}") from e

    if isinstance(data, list):
        data = {"todos": data}
    try:
        return TodoList.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Import file does not contain valid todos: {e.error_count()} error(s)"
        ) from e
