"""Textual TUI for managing todos interactively.

All state lives in a ``Session``; this module only turns key events into
``Session.handle_key`` calls and draws the session with the ``render_*``
functions below, which are plain functions of session data.
"""

import signal
import threading
from datetime import datetime

from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Header, Static

from todoterm_cli.core.session import Mode, Session
from todoterm_cli.models import Todo, TodoFilter
from todoterm_cli.utils.logger import get_logger
from todoterm_cli.utils.ui.formatters import PRIORITY_COLORS

HELP_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Navigation",
        [
            ("j / ↓", "Move down"),
            ("k / ↑", "Move up"),
            ("g / Home", "First todo"),
            ("G / End", "Last todo"),
        ],
    ),
    (
        "Actions",
        [
            ("i", "Add a todo (end with :1-:5 for priority, \\:N keeps the text)"),
            ("", "Other suffixes such as :7 stay part of the text"),
            ("Enter / Space", "Complete selected"),
            ("e", "Edit selected"),
            ("D", "Edit details of selected"),
            ("u", "Set due date (YYYY-MM-DD, today, tomorrow)"),
            ("p", "Set priority of selected"),
            ("d", "Delete selected"),
        ],
    ),
    (
        "View",
        [
            ("f", "Cycle filter: All, Completed, Pending"),
            ("1 / 2 / 3", "Show all, completed or pending"),
            ("4 / 5 / 6", "High (4-5), medium (2-3) or low (1) priority"),
            ("7 / 8 / 9", "Overdue, due today or due within 7 days"),
            ("0", "Todos with a due date"),
            ("v", "Show or hide details"),
            ("? / h", "Toggle this help"),
            ("q / Ctrl+C", "Save and quit"),
        ],
    ),
]

MODE_STYLES = {
    Mode.NORMAL: "bold white on blue",
    Mode.INSERT: "bold black on green",
    Mode.EDITING: "bold black on yellow",
    Mode.EDITING_DETAILS: "bold black on yellow",
    Mode.EDITING_DUE: "bold white on red",
    Mode.PRIORITY_SELECT: "bold white on magenta",
    Mode.HELP: "bold black on cyan",
}


def render_todo_item(
    todo: Todo, is_selected: bool, show_details: bool = False, now: datetime | None = None
) -> Text:
    """One list row: marker, checkbox, id, description, priority and due date.

    With ``show_details`` the notes follow on an indented second line.
    """
    line = Text()
    line.append("▶ " if is_selected else "  ", style="bold cyan")
    line.append("[x] " if todo.completed else "[ ] ", style="green" if todo.completed else "")
    line.append(f"#{todo.id} ", style="bold cyan")
    line.append(todo.description, style="dim strike" if todo.completed else "")
    if todo.priority is not None:
        line.append(
            f"  P{todo.priority} {todo.priority_name}",
            style=PRIORITY_COLORS.get(todo.priority, ""),
        )
    if todo.due_date is not None:
        if todo.is_overdue(now):
            line.append(f"  overdue {todo.due_date:%Y-%m-%d}", style="bold red")
        elif todo.is_due_soon(now):
            line.append(f"  due {todo.due_date:%Y-%m-%d}", style="bold yellow")
        else:
            line.append(f"  due {todo.due_date:%Y-%m-%d}", style="dim")
    if show_details and todo.details:
        line.append("\n      ")
        line.append(todo.details, style="italic dim")
    if is_selected:
        line.stylize("reverse")
    return line


def render_todo_list(
    visible: list[Todo],
    selected: int,
    mode: Mode,
    todo_filter: TodoFilter,
    show_details: bool = False,
) -> RenderableType:
    """The todo list panel, or the help overlay while in HELP mode."""
    if mode is Mode.HELP:
        return render_help()

    title = f"{todo_filter.label} ({len(visible)})"
    if not visible:
        body: RenderableType = Text(
            "No todos here. Press i to add one.", style="dim italic", justify="center"
        )
    else:
        body = Group(
            *(
                render_todo_item(todo, index == selected, show_details)
                for index, todo in enumerate(visible)
            )
        )
    return Panel(body, title=title, title_align="left", border_style="blue")


def render_input_line(mode: Mode, buffer: str) -> Text:
    """Prompt line showing the insert/edit buffer or a short key hint."""
    if mode is Mode.INSERT:
        return Text.assemble(("Add: ", "bold green"), buffer, ("█", "blink"))
    if mode is Mode.EDITING:
        return Text.assemble(("Edit: ", "bold yellow"), buffer, ("█", "blink"))
    if mode is Mode.EDITING_DETAILS:
        return Text.assemble(("Details: ", "bold yellow"), buffer, ("█", "blink"))
    if mode is Mode.EDITING_DUE:
        return Text.assemble(("Due: ", "bold red"), buffer, ("█", "blink"))
    if mode is Mode.PRIORITY_SELECT:
        return Text("Priority: 1 Low  2 Normal  3 Medium  4 High  5 Critical  0 clear", style="bold magenta")
    return Text("i add  e edit  D details  u due  p priority  d delete  f filter  ? help  q quit", style="dim")


def render_status_bar(
    mode: Mode, status_message: str, total: int, completed: int, dirty: bool = False
) -> Text:
    """Mode badge, last status message and counts."""
    bar = Text()
    bar.append(f" {mode.value.upper()} ", style=MODE_STYLES[mode])
    bar.append(" ")
    if status_message:
        bar.append(status_message, style="bold red" if dirty else "")
        bar.append("  ")
    bar.append(f"{completed}/{total} done", style="dim")
    if dirty:
        bar.append("  [unsaved]", style="bold red")
    return bar


def render_help() -> Panel:
    """Key binding reference shown in place of the list."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Action")
    for index, (section, rows) in enumerate(HELP_SECTIONS):
        if index:
            table.add_row("", "")
        table.add_row(Text(section, style="bold underline"), "")
        for key, action in rows:
            table.add_row(escape(key), action)
    return Panel(table, title="Help (? / Esc to close)", border_style="cyan")


class TodoListScroll(VerticalScroll):
    """Scrollable list area that never takes focus, so keys reach the app."""

    can_focus = False


class TodoApp(App):
    """A Textual app that drives a todo Session from the keyboard."""

    TITLE = "todoterm"
    CSS = """
    #list-scroll {
        height: 1fr;
    }
    #input-line {
        height: 1;
        padding: 0 1;
    }
    #status-bar {
        height: 1;
        background: $panel;
    }
    """
    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, session: Session):
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        yield Header()
        with TodoListScroll(id="list-scroll"):
            yield Static(id="todo-list")
        yield Static(id="input-line")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        """Called when app starts."""
        self.refresh_view()

    def refresh_view(self) -> None:
        session = self.session
        visible = session.visible()
        self.sub_title = session.todo_filter.label
        self.query_one("#todo-list", Static).update(
            render_todo_list(
                visible,
                session.selected,
                session.mode,
                session.todo_filter,
                session.show_details,
            )
        )
        self.query_one("#input-line", Static).update(
            render_input_line(session.mode, session.buffer)
        )
        completed = sum(1 for todo in session.todos.todos if todo.completed)
        self.query_one("#status-bar", Static).update(
            render_status_bar(
                session.mode,
                session.status_message,
                len(session.todos),
                completed,
                session.dirty,
            )
        )

    def on_key(self, event: events.Key) -> None:
        """Forward every key to the session."""
        self.session.handle_key(event.key, event.character)
        event.stop()
        event.prevent_default()
        if self.session.should_quit:
            self.exit()
            return
        self.refresh_view()

    async def action_quit(self) -> None:
        """Save and quit."""
        self.session.quit()
        self.exit()


def run_todo_app(session: Session) -> None:
    """Run the TUI until the user quits, saving on every way out."""
    logger = get_logger()
    app = TodoApp(session)

    previous_handler = None
    if threading.current_thread() is threading.main_thread():

        def _on_sigterm(signum, frame):
            logger.warning("received SIGTERM, saving and exiting")
            session.quit()
            app.exit()

        previous_handler = signal.signal(signal.SIGTERM, _on_sigterm)

    try:
        app.run()
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)
        if not session.should_quit or session.dirty:
            session.persist()
