"""Interactive session: the modal state machine behind the terminal UI.

The session knows nothing about terminals. A front end feeds it key tokens
through ``handle_key`` and reads back ``mode``, ``visible()``, ``selected``,
``buffer`` and ``status_message`` to draw the screen. Each mode has its own
binding table so every transition can be exercised directly in tests.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum
from functools import partial

from todoterm_cli.core import engine
from todoterm_cli.models import (
    MAX_PRIORITY,
    MIN_PRIORITY,
    StorageError,
    Todo,
    TodoFilter,
    TodoList,
    TodoTermError,
)
from todoterm_cli.repositories import TodoStore
from todoterm_cli.utils.logger import get_logger

# A trailing ":N" sets the priority unless the colon follows a digit
# ("10:3") or a backslash ("\:3", which keeps a literal ":3").
_PRIORITY_SUFFIX = re.compile(r"(?<![0-9\\]):([1-5])\s*$")
_ESCAPED_SUFFIX = re.compile(r"\\(:[1-5]\s*)$")
_OUT_OF_RANGE_SUFFIX = re.compile(r"(?<![0-9\\]):[06-9]\s*$")


def parse_priority_suffix(text: str) -> tuple[str, int | None]:
    """Split an insert-mode buffer into (description, priority).

    >>> parse_priority_suffix("Buy milk :3")
    ('Buy milk', 3)
    >>> parse_priority_suffix("Meet at 10:3")
    ('Meet at 10:3', None)
    >>> parse_priority_suffix("Ratio \\\\:3")
    ('Ratio :3', None)
    """
    match = _PRIORITY_SUFFIX.search(text)
    if match:
        return text[: match.start()].strip(), int(match.group(1))
    escaped = _ESCAPED_SUFFIX.search(text)
    if escaped:
        return (text[: escaped.start()] + escaped.group(1)).strip(), None
    return text.strip(), None


def has_out_of_range_suffix(text: str) -> bool:
    """True if ``text`` ends in ":N" with N a digit outside 1..5."""
    return bool(_OUT_OF_RANGE_SUFFIX.search(text))


class Mode(str, Enum):
    """Interaction state of the terminal UI."""

    NORMAL = "normal"
    INSERT = "insert"
    EDITING = "editing"
    EDITING_DETAILS = "details"
    EDITING_DUE = "due"
    PRIORITY_SELECT = "priority"
    HELP = "help"


# Modes whose keys go into the text buffer
TEXT_MODES = (Mode.INSERT, Mode.EDITING, Mode.EDITING_DETAILS, Mode.EDITING_DUE)

FILTER_KEYS: dict[str, TodoFilter] = {
    "1": TodoFilter.ALL,
    "2": TodoFilter.COMPLETED,
    "3": TodoFilter.PENDING,
    "4": TodoFilter.HIGH_PRIORITY,
    "5": TodoFilter.MEDIUM_PRIORITY,
    "6": TodoFilter.LOW_PRIORITY,
    "7": TodoFilter.OVERDUE,
    "8": TodoFilter.DUE_TODAY,
    "9": TodoFilter.DUE_SOON,
    "0": TodoFilter.HAS_DUE_DATE,
}


def _is_printable(character: str | None) -> bool:
    return bool(character) and len(character) == 1 and character.isprintable()


class Session:
    """State and transitions of one interactive run."""

    def __init__(self, store: TodoStore, todos: TodoList | None = None):
        self.store = store
        self.logger = get_logger()
        self.todos = todos if todos is not None else store.load()

        self.mode = Mode.NORMAL
        self.todo_filter = TodoFilter.ALL
        self.selected = 0
        self.buffer = ""
        self.editing_id: int | None = None
        self.status_message = ""
        self.should_quit = False
        self.dirty = False
        self.save_error: str | None = None
        self.show_details = False

        self._bindings: dict[Mode, dict[str, Callable[[], None]]] = {
            Mode.NORMAL: {
                "j": self.move_down,
                "down": self.move_down,
                "k": self.move_up,
                "up": self.move_up,
                "g": self.move_first,
                "home": self.move_first,
                "G": self.move_last,
                "end": self.move_last,
                "i": self.start_insert,
                "enter": self.complete_selected,
                " ": self.complete_selected,
                "space": self.complete_selected,
                "d": self.delete_selected,
                "e": self.start_edit,
                "D": self.start_edit_details,
                "u": self.start_due_date,
                "v": self.toggle_details,
                "p": self.start_priority_select,
                "f": self.cycle_filter,
                **{
                    key: partial(self.set_filter, todo_filter)
                    for key, todo_filter in FILTER_KEYS.items()
                },
                "?": self.show_help,
                "h": self.show_help,
                "q": self.quit,
            },
            Mode.INSERT: {
                "enter": self.submit_insert,
                "space": partial(self.append, " "),
                "escape": self.cancel,
                "backspace": self.backspace,
            },
            Mode.EDITING: {
                "enter": self.submit_edit,
                "space": partial(self.append, " "),
                "escape": self.cancel,
                "backspace": self.backspace,
            },
            Mode.EDITING_DETAILS: {
                "enter": self.submit_details,
                "space": partial(self.append, " "),
                "escape": self.cancel,
                "backspace": self.backspace,
            },
            Mode.EDITING_DUE: {
                "enter": self.submit_due_date,
                "space": partial(self.append, " "),
                "escape": self.cancel,
                "backspace": self.backspace,
            },
            Mode.PRIORITY_SELECT: {
                "escape": self.cancel,
                "0": partial(self.choose_priority, None),
                **{
                    str(level): partial(self.choose_priority, level)
                    for level in range(MIN_PRIORITY, MAX_PRIORITY + 1)
                },
            },
            Mode.HELP: {
                "?": self.close_help,
                "h": self.close_help,
                "escape": self.close_help,
                "q": self.quit,
            },
        }
        self._fallbacks: dict[Mode, Callable[[str], None]] = {
            **{mode: self.append for mode in TEXT_MODES},
            Mode.PRIORITY_SELECT: self._priority_hint,
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle_key(self, key: str, character: str | None = None) -> None:
        """Apply one key press.

        A printable ``character`` takes precedence over the key name, so
        "G" and "?" are matched by what was typed while "enter" or "up"
        are matched by name.
        """
        token = character if _is_printable(character) else key
        table = self._bindings[self.mode]
        handler = table.get(token) or table.get(key)
        if handler is not None:
            handler()
            return
        fallback = self._fallbacks.get(self.mode)
        if fallback is not None:
            fallback(token)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def visible(self) -> list[Todo]:
        """Todos shown under the current filter."""
        return list(engine.list_todos(self.todos, self.todo_filter))

    def selected_todo(self) -> Todo | None:
        visible = self.visible()
        if not visible:
            return None
        return visible[min(self.selected, len(visible) - 1)]

    # ------------------------------------------------------------------
    # Normal mode
    # ------------------------------------------------------------------

    def _clamp(self) -> None:
        count = len(self.visible())
        self.selected = 0 if count == 0 else max(0, min(self.selected, count - 1))

    def move_down(self) -> None:
        count = len(self.visible())
        if count:
            self.selected = min(self.selected + 1, count - 1)

    def move_up(self) -> None:
        if self.visible():
            self.selected = max(self.selected - 1, 0)

    def move_first(self) -> None:
        self.selected = 0

    def move_last(self) -> None:
        self.selected = max(len(self.visible()) - 1, 0)

    def start_insert(self) -> None:
        self.mode = Mode.INSERT
        self.buffer = ""
        self.status_message = "Add todo (suffix :1-:5 sets priority)"

    def complete_selected(self) -> None:
        todo = self._require_selection()
        if todo is None:
            return
        if todo.completed:
            self.status_message = f"Todo #{todo.id} is already completed"
            return
        self._apply(
            partial(engine.complete_todo, todo_id=todo.id),
            f"Completed #{todo.id}",
        )

    def delete_selected(self) -> None:
        todo = self._require_selection()
        if todo is None:
            return
        self._apply(partial(engine.delete_todo, todo_id=todo.id), f"Deleted #{todo.id}")

    def start_edit(self) -> None:
        todo = self._require_selection()
        if todo is None:
            return
        self.mode = Mode.EDITING
        self.editing_id = todo.id
        self.buffer = todo.description
        self.status_message = f"Editing #{todo.id}"

    def start_edit_details(self) -> None:
        todo = self._require_selection()
        if todo is None:
            return
        self.mode = Mode.EDITING_DETAILS
        self.editing_id = todo.id
        self.buffer = todo.details or ""
        self.status_message = f"Details of #{todo.id} (empty clears)"

    def start_due_date(self) -> None:
        todo = self._require_selection()
        if todo is None:
            return
        self.mode = Mode.EDITING_DUE
        self.editing_id = todo.id
        self.buffer = todo.due_date.strftime("%Y-%m-%d") if todo.due_date else ""
        self.status_message = "Due date: YYYY-MM-DD, today, tomorrow (empty clears)"

    def toggle_details(self) -> None:
        self.show_details = not self.show_details
        self.status_message = (
            "Showing detailed descriptions"
            if self.show_details
            else "Hiding detailed descriptions"
        )

    def start_priority_select(self) -> None:
        todo = self._require_selection()
        if todo is None:
            return
        self.mode = Mode.PRIORITY_SELECT
        self.editing_id = todo.id
        self.status_message = "Priority: 1-5 to set, 0 to clear, Esc to cancel"

    def cycle_filter(self) -> None:
        self.set_filter(self.todo_filter.next())

    def set_filter(self, todo_filter: TodoFilter) -> None:
        self.todo_filter = todo_filter
        self._clamp()
        self.status_message = f"Showing: {todo_filter.label}"

    def show_help(self) -> None:
        self.mode = Mode.HELP

    def close_help(self) -> None:
        self.mode = Mode.NORMAL

    def quit(self) -> None:
        """Persist one last time and ask the front end to stop."""
        self.persist()
        self.should_quit = True

    # ------------------------------------------------------------------
    # Insert / Editing
    # ------------------------------------------------------------------

    def append(self, token: str) -> None:
        if _is_printable(token):
            self.buffer += token

    def backspace(self) -> None:
        self.buffer = self.buffer[:-1]

    def cancel(self) -> None:
        self.mode = Mode.NORMAL
        self.buffer = ""
        self.editing_id = None
        self.status_message = "Cancelled"

    def submit_insert(self) -> None:
        description, priority = parse_priority_suffix(self.buffer)
        try:
            updated, todo = engine.add_todo(self.todos, description, priority)
        except TodoTermError as e:
            self.status_message = str(e)
            return
        message = f"Added #{todo.id}"
        if has_out_of_range_suffix(self.buffer):
            message += " (priority suffix must be :1-:5, kept as text)"
        self._commit(updated, message)
        self._reset_to_normal()
        ids = [visible.id for visible in self.visible()]
        if todo.id in ids:
            self.selected = ids.index(todo.id)

    def submit_edit(self) -> None:
        if self.editing_id is None:
            self._reset_to_normal()
            return
        try:
            updated = engine.edit_todo(self.todos, self.editing_id, self.buffer)
        except TodoTermError as e:
            self.status_message = str(e)
            return
        self._commit(updated, f"Updated #{self.editing_id}")
        self._reset_to_normal()

    def submit_details(self) -> None:
        todo_id = self.editing_id
        if todo_id is None:
            self._reset_to_normal()
            return
        details = self.buffer.strip() or None
        message = f"Details of #{todo_id} updated" if details else f"Details of #{todo_id} cleared"
        if self._apply(partial(engine.set_details, todo_id=todo_id, details=details), message):
            self._reset_to_normal()

    def submit_due_date(self) -> None:
        """Parse the buffer as a due date; on bad input stay in the mode."""
        todo_id = self.editing_id
        if todo_id is None:
            self._reset_to_normal()
            return
        try:
            due_date = engine.parse_due_date(self.buffer)
        except TodoTermError as e:
            self.status_message = str(e)
            return
        message = (
            f"Cleared due date of #{todo_id}"
            if due_date is None
            else f"Due date of #{todo_id} set to {due_date:%Y-%m-%d}"
        )
        if self._apply(partial(engine.set_due_date, todo_id=todo_id, due_date=due_date), message):
            self._reset_to_normal()

    # ------------------------------------------------------------------
    # PrioritySelect
    # ------------------------------------------------------------------

    def choose_priority(self, priority: int | None) -> None:
        todo_id = self.editing_id
        self._reset_to_normal()
        if todo_id is None:
            return
        message = (
            f"Cleared priority of #{todo_id}"
            if priority is None
            else f"Priority of #{todo_id} set to {priority}"
        )
        self._apply(partial(engine.set_priority, todo_id=todo_id, priority=priority), message)

    def _priority_hint(self, token: str) -> None:
        self.status_message = "Press 1-5 to set priority, 0 to clear, Esc to cancel"

    # ------------------------------------------------------------------
    # Mutation and persistence
    # ------------------------------------------------------------------

    def _require_selection(self) -> Todo | None:
        todo = self.selected_todo()
        if todo is None:
            self.status_message = "No todo selected"
        return todo

    def _reset_to_normal(self) -> None:
        self.mode = Mode.NORMAL
        self.buffer = ""
        self.editing_id = None

    def _apply(self, operation: Callable[[TodoList], TodoList], message: str) -> bool:
        try:
            updated = operation(self.todos)
        except TodoTermError as e:
            self.status_message = str(e)
            return False
        self._commit(updated, message)
        return True

    def _commit(self, updated: TodoList, message: str) -> None:
        self.todos = updated
        self.dirty = True
        self._clamp()
        if self.persist():
            self.status_message = message

    def persist(self) -> bool:
        """Save the collection. On failure keep the change in memory and flag it."""
        try:
            self.store.save(self.todos)
        except StorageError as e:
            self.logger.error("session save failed: %s", e)
            self.dirty = True
            self.save_error = str(e)
            self.status_message = f"Save failed: {e}"
            return False
        self.dirty = False
        self.save_error = None
        return True
