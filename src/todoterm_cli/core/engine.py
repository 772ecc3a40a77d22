"""Command engine: pure operations over a ``TodoList``.

Every mutating function takes the current collection and returns a new one.
The input is never modified, so a failed operation leaves the caller's
collection exactly as it was. Errors are raised, not returned.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, time, timedelta, timezone

from todoterm_cli.models import (
    MAX_PRIORITY,
    MIN_PRIORITY,
    PRIORITY_NAMES,
    NotFoundError,
    Todo,
    TodoFilter,
    TodoList,
    TodoStats,
    TodoView,
    ValidationError,
    utc_now,
)


def validate_description(description: str) -> str:
    """Return the trimmed description or raise ValidationError if empty."""
    if not isinstance(description, str):
        raise ValidationError("Description must be text")
    cleaned = description.strip()
    if not cleaned:
        raise ValidationError("Description cannot be empty")
    return cleaned


def validate_priority(priority: int | None) -> int | None:
    """Accept None or an integer in [1, 5]."""
    if priority is None:
        return None
    # bool is an int subclass; True would otherwise pass as priority 1
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise ValidationError(f"Priority must be an integer, got {priority!r}")
    if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise ValidationError(
            f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}, got {priority}"
        )
    return priority


def validate_details(details: str | None) -> str | None:
    """Trimmed notes, or None when blank."""
    if details is None:
        return None
    if not isinstance(details, str):
        raise ValidationError("Details must be text")
    return details.strip() or None


def validate_due_date(due_date: datetime | None) -> datetime | None:
    """Accept None or a datetime, normalised to UTC (naive means UTC)."""
    if due_date is None:
        return None
    if not isinstance(due_date, datetime):
        raise ValidationError(f"Due date must be a datetime, got {due_date!r}")
    if due_date.tzinfo is None:
        return due_date.replace(tzinfo=timezone.utc)
    return due_date.astimezone(timezone.utc)


def parse_due_date(text: str, now: datetime | None = None) -> datetime | None:
    """Turn user input into a due date.

    Accepts "today", "tomorrow" or YYYY-MM-DD (due at 23:59:59 UTC that day).
    Blank input, "none" and "clear" mean no due date.
    """
    value = text.strip().lower()
    if value in ("", "none", "clear"):
        return None
    now = now or utc_now()
    if value == "today":
        return now
    if value == "tomorrow":
        return now + timedelta(days=1)
    try:
        day = date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD") from None
    return datetime.combine(day, time(23, 59, 59), tzinfo=timezone.utc)


def find_todo(todos: TodoList, todo_id: int) -> Todo:
    """Return the todo with ``todo_id`` or raise NotFoundError."""
    todo = todos.get(todo_id)
    if todo is None:
        raise NotFoundError(todo_id)
    return todo


def _index_of(todos: TodoList, todo_id: int) -> int:
    for index, todo in enumerate(todos.todos):
        if todo.id == todo_id:
            return index
    raise NotFoundError(todo_id)


def _replace_at(todos: TodoList, index: int, **changes) -> TodoList:
    result = todos.model_copy(deep=True)
    result.todos[index] = result.todos[index].model_copy(update=changes)
    return result


def add_todo(
    todos: TodoList,
    description: str,
    priority: int | None = None,
    details: str | None = None,
    due_date: datetime | None = None,
) -> tuple[TodoList, Todo]:
    """Append a new pending todo and advance the identifier counter."""
    cleaned = validate_description(description)
    priority = validate_priority(priority)
    details = validate_details(details)
    due_date = validate_due_date(due_date)

    new_id = todos.next_identifier()
    todo = Todo(
        id=new_id,
        description=cleaned,
        details=details,
        priority=priority,
        due_date=due_date,
        created_at=utc_now(),
    )

    result = todos.model_copy(deep=True)
    result.todos.append(todo)
    result.next_id = new_id + 1
    return result, todo


def list_todos(todos: TodoList, todo_filter: TodoFilter = TodoFilter.ALL) -> TodoView:
    """Lazy view of the todos matching ``todo_filter``, in collection order."""
    return TodoView(todos.todos, TodoFilter(todo_filter))


def complete_todo(todos: TodoList, todo_id: int) -> TodoList:
    """Mark a todo completed. Completing twice changes nothing."""
    index = _index_of(todos, todo_id)
    if todos.todos[index].completed:
        return todos.model_copy(deep=True)
    return _replace_at(todos, index, completed=True, completed_at=utc_now())


def reopen_todo(todos: TodoList, todo_id: int) -> TodoList:
    """Mark a todo pending again. Reopening a pending todo changes nothing."""
    index = _index_of(todos, todo_id)
    if not todos.todos[index].completed:
        return todos.model_copy(deep=True)
    return _replace_at(todos, index, completed=False, completed_at=None)


def delete_todo(todos: TodoList, todo_id: int) -> TodoList:
    """Remove a todo. Its identifier stays retired."""
    index = _index_of(todos, todo_id)
    result = todos.model_copy(deep=True)
    del result.todos[index]
    return result


def edit_todo(todos: TodoList, todo_id: int, description: str) -> TodoList:
    """Replace the description, keeping id, completion and priority."""
    index = _index_of(todos, todo_id)
    cleaned = validate_description(description)
    return _replace_at(todos, index, description=cleaned)


def set_priority(todos: TodoList, todo_id: int, priority: int | None) -> TodoList:
    """Set or clear (``None``) the priority of a todo."""
    index = _index_of(todos, todo_id)
    priority = validate_priority(priority)
    return _replace_at(todos, index, priority=priority)


def set_details(todos: TodoList, todo_id: int, details: str | None) -> TodoList:
    """Set the notes of a todo. Blank or ``None`` clears them."""
    index = _index_of(todos, todo_id)
    details = validate_details(details)
    return _replace_at(todos, index, details=details)


def set_due_date(todos: TodoList, todo_id: int, due_date: datetime | None) -> TodoList:
    """Set or clear (``None``) the due date of a todo."""
    index = _index_of(todos, todo_id)
    due_date = validate_due_date(due_date)
    return _replace_at(todos, index, due_date=due_date)


def clear_completed(todos: TodoList) -> tuple[TodoList, int]:
    """Drop every completed todo. Returns the new list and how many were removed."""
    result = todos.model_copy(deep=True)
    result.todos = [todo for todo in result.todos if not todo.completed]
    return result, len(todos.todos) - len(result.todos)


def merge_todos(todos: TodoList, imported: TodoList) -> tuple[TodoList, int]:
    """Append imported todos under fresh identifiers."""
    result = todos.model_copy(deep=True)
    next_id = result.next_identifier()
    for todo in imported.todos:
        result.todos.append(todo.model_copy(update={"id": next_id}))
        next_id += 1
    result.next_id = next_id
    return result, len(imported.todos)


def replace_todos(todos: TodoList, imported: TodoList) -> TodoList:
    """Take the imported todos wholesale.

    The counter never moves backwards, so ids used before the import are
    still not handed out again.
    """
    return TodoList(
        todos=[todo.model_copy(deep=True) for todo in imported.todos],
        next_id=max(todos.next_identifier(), imported.next_identifier()),
    )


def compute_stats(todos: TodoList) -> TodoStats:
    """Summary figures: counts, completion rate, priority breakdown, oldest pending."""
    total = len(todos.todos)
    completed = sum(1 for todo in todos.todos if todo.completed)
    pending = [todo for todo in todos.todos if not todo.completed]
    now = utc_now()

    counts = Counter(todo.priority for todo in todos.todos)
    by_priority = {
        PRIORITY_NAMES[level]: counts[level]
        for level in range(MAX_PRIORITY, MIN_PRIORITY - 1, -1)
        if counts[level]
    }
    if counts[None]:
        by_priority["None"] = counts[None]

    return TodoStats(
        total=total,
        completed=completed,
        pending=len(pending),
        overdue=sum(1 for todo in pending if todo.is_overdue(now)),
        completion_rate=(completed / total * 100.0) if total else 0.0,
        by_priority=by_priority,
        oldest_pending=min(pending, key=lambda todo: todo.created_at, default=None),
    )
