"""Todo data models."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from datetime import datetime, timedelta, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

PRIORITY_NAMES: dict[int, str] = {
    1: "Low",
    2: "Normal",
    3: "Medium",
    4: "High",
    5: "Critical",
}

MIN_PRIORITY = 1
MAX_PRIORITY = 5

DUE_SOON_WINDOW = timedelta(hours=24)
DUE_SOON_FILTER_WINDOW = timedelta(days=7)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class TodoFilter(str, Enum):
    """Which todos a listing shows."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    HIGH_PRIORITY = "high-priority"
    MEDIUM_PRIORITY = "medium-priority"
    LOW_PRIORITY = "low-priority"
    NO_PRIORITY = "no-priority"
    OVERDUE = "overdue"
    DUE_TODAY = "due-today"
    DUE_SOON = "due-soon"
    HAS_DUE_DATE = "has-due-date"

    def matches(self, todo: Todo, now: datetime | None = None) -> bool:
        if self is TodoFilter.COMPLETED:
            return todo.completed
        if self is TodoFilter.PENDING:
            return not todo.completed
        if self is TodoFilter.HIGH_PRIORITY:
            return todo.priority is not None and todo.priority >= 4
        if self is TodoFilter.MEDIUM_PRIORITY:
            return todo.priority in (2, 3)
        if self is TodoFilter.LOW_PRIORITY:
            return todo.priority == 1
        if self is TodoFilter.NO_PRIORITY:
            return todo.priority is None
        if self is TodoFilter.OVERDUE:
            return todo.is_overdue(now)
        if self is TodoFilter.DUE_TODAY:
            return todo.is_due_today(now)
        if self is TodoFilter.DUE_SOON:
            return todo.is_due_soon(now, within=DUE_SOON_FILTER_WINDOW)
        if self is TodoFilter.HAS_DUE_DATE:
            return todo.due_date is not None
        return True

    def next(self) -> TodoFilter:
        """Return the following filter in the All -> Completed -> Pending cycle.

        Priority and due-date filters are only reached directly; cycling
        from one of them starts over at All.
        """
        if self not in _CYCLE:
            return TodoFilter.ALL
        return _CYCLE[(_CYCLE.index(self) + 1) % len(_CYCLE)]

    @property
    def label(self) -> str:
        return _FILTER_LABELS[self]


_CYCLE = [TodoFilter.ALL, TodoFilter.COMPLETED, TodoFilter.PENDING]

_FILTER_LABELS = {
    TodoFilter.ALL: "All Tasks",
    TodoFilter.COMPLETED: "Completed",
    TodoFilter.PENDING: "Pending",
    TodoFilter.HIGH_PRIORITY: "High Priority (4-5)",
    TodoFilter.MEDIUM_PRIORITY: "Medium Priority (2-3)",
    TodoFilter.LOW_PRIORITY: "Low Priority (1)",
    TodoFilter.NO_PRIORITY: "No Priority",
    TodoFilter.OVERDUE: "Overdue",
    TodoFilter.DUE_TODAY: "Due Today",
    TodoFilter.DUE_SOON: "Due Soon (7 days)",
    TodoFilter.HAS_DUE_DATE: "Has Due Date",
}


class Todo(BaseModel):
    """A single todo record.

    Attributes:
        id: Unique identifier, never reused after deletion
        description: Task text, stored trimmed and never empty
        details: Optional free-form notes, None when blank
        completed: Completion status
        priority: Optional priority level (1=Low ... 5=Critical)
        due_date: Optional deadline (UTC)
        created_at: Creation timestamp (UTC), immutable
        completed_at: Completion timestamp (UTC), None while pending
    """

    id: int = Field(ge=1)
    description: str
    details: str | None = None
    completed: bool = False
    priority: int | None = Field(default=None, ge=MIN_PRIORITY, le=MAX_PRIORITY)
    due_date: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = None

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("description cannot be empty")
        return value

    @field_validator("details")
    @classmethod
    def _blank_details_to_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("due_date")
    @classmethod
    def _due_date_as_utc(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def priority_name(self) -> str | None:
        if self.priority is None:
            return None
        return PRIORITY_NAMES[self.priority]

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Pending and past its due date."""
        if self.completed or self.due_date is None:
            return False
        return self.due_date < (now or utc_now())

    def is_due_soon(
        self, now: datetime | None = None, within: timedelta = DUE_SOON_WINDOW
    ) -> bool:
        """Pending, not yet overdue, and due within ``within`` from now."""
        if self.completed or self.due_date is None:
            return False
        now = now or utc_now()
        return now <= self.due_date <= now + within

    def is_due_today(self, now: datetime | None = None) -> bool:
        """Due on the current local calendar day."""
        if self.due_date is None:
            return False
        now = now or utc_now()
        return self.due_date.astimezone().date() == now.astimezone().date()


class TodoList(BaseModel):
    """The ordered collection of todos plus the identifier counter.

    ``next_id`` is persisted alongside the records so identifiers of deleted
    todos are never handed out again.
    """

    todos: list[Todo] = Field(default_factory=list)
    next_id: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _check_identifiers(self) -> TodoList:
        seen: set[int] = set()
        for todo in self.todos:
            if todo.id in seen:
                raise ValueError(f"duplicate todo id {todo.id}")
            seen.add(todo.id)
        if seen and self.next_id <= max(seen):
            self.next_id = max(seen) + 1
        return self

    def __len__(self) -> int:
        return len(self.todos)

    def next_identifier(self) -> int:
        """Identifier the next added todo will receive."""
        highest = max((todo.id for todo in self.todos), default=0)
        return max(self.next_id, highest + 1)

    def get(self, todo_id: int) -> Todo | None:
        """Return the todo with the given id, or None."""
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None


class TodoView:
    """Lazy, restartable view over the todos matching a filter.

    Each iteration re-scans the underlying sequence in collection order.
    """

    def __init__(self, todos: Sequence[Todo], todo_filter: TodoFilter = TodoFilter.ALL):
        self._todos = todos
        self.todo_filter = todo_filter

    def __iter__(self) -> Iterator[Todo]:
        now = utc_now()
        return (todo for todo in self._todos if self.todo_filter.matches(todo, now))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"TodoView(filter={self.todo_filter.value}, count={len(self)})"


class TodoStats(BaseModel):
    """Summary figures for a todo list."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    completion_rate: float = 0.0
    by_priority: dict[str, int] = Field(default_factory=dict)
    oldest_pending: Todo | None = None
