"""Tests for the pure command engine."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from todoterm_cli.core import engine
from todoterm_cli.models import NotFoundError, TodoFilter, TodoList, ValidationError


def _build(*descriptions: str) -> TodoList:
    todos = TodoList()
    for description in descriptions:
        todos, _ = engine.add_todo(todos, description)
    return todos


# ---------------------------------------------------------------------------
# Add
# ---------------------------------------------------------------------------


class TestAdd:
    """Tests for add_todo()."""

    def test_add_trims_and_appends(self):
        todos, todo = engine.add_todo(TodoList(), "  Buy milk  ")
        assert todo.description == "Buy milk"
        assert todo.completed is False
        assert [t.description for t in engine.list_todos(todos)] == ["Buy milk"]

    @pytest.mark.parametrize("description", ["", "   ", "\t\n"])
    def test_empty_description_rejected(self, description):
        original = _build("keep")
        snapshot = original.model_copy(deep=True)
        with pytest.raises(ValidationError):
            engine.add_todo(original, description)
        assert original == snapshot

    @pytest.mark.parametrize("priority", [0, 6, True, "3", 2.5])
    def test_invalid_priority_rejected(self, priority):
        with pytest.raises(ValidationError):
            engine.add_todo(TodoList(), "x", priority)

    def test_input_not_mutated(self):
        original = TodoList()
        engine.add_todo(original, "x")
        assert original.todos == []
        assert original.next_id == 1


# ---------------------------------------------------------------------------
# Not-found behaviour
# ---------------------------------------------------------------------------


class TestNotFound:
    """Every id-based operation raises NotFoundError and leaves input alone."""

    @pytest.mark.parametrize(
        "operation",
        [
            lambda t: engine.complete_todo(t, 99),
            lambda t: engine.reopen_todo(t, 99),
            lambda t: engine.delete_todo(t, 99),
            lambda t: engine.edit_todo(t, 99, "new"),
            lambda t: engine.set_priority(t, 99, 3),
            lambda t: engine.set_details(t, 99, "notes"),
            lambda t: engine.set_due_date(t, 99, None),
            lambda t: engine.find_todo(t, 99),
        ],
    )
    def test_missing_id(self, operation):
        todos = _build("a", "b")
        snapshot = todos.model_copy(deep=True)
        with pytest.raises(NotFoundError) as exc:
            operation(todos)
        assert exc.value.todo_id == 99
        assert todos == snapshot


# ---------------------------------------------------------------------------
# Complete / Reopen
# ---------------------------------------------------------------------------


class TestComplete:
    """Tests for complete_todo() and reopen_todo()."""

    def test_complete_sets_timestamp(self):
        todos = engine.complete_todo(_build("a"), 1)
        todo = engine.find_todo(todos, 1)
        assert todo.completed is True
        assert todo.completed_at is not None

    def test_complete_is_idempotent(self):
        once = engine.complete_todo(_build("a", "b"), 1)
        twice = engine.complete_todo(once, 1)
        assert twice == once

    def test_reopen_clears_completion(self):
        todos = engine.reopen_todo(engine.complete_todo(_build("a"), 1), 1)
        todo = engine.find_todo(todos, 1)
        assert todo.completed is False
        assert todo.completed_at is None

    def test_reopen_pending_is_noop(self):
        todos = _build("a")
        assert engine.reopen_todo(todos, 1) == todos


# ---------------------------------------------------------------------------
# Delete / Edit / Priority
# ---------------------------------------------------------------------------


class TestMutations:
    """Tests for delete_todo(), edit_todo() and set_priority()."""

    def test_identifier_never_reused(self):
        todos, first = engine.add_todo(TodoList(), "a")
        todos = engine.delete_todo(todos, first.id)
        todos, second = engine.add_todo(todos, "b")
        assert second.id > first.id

    def test_delete_preserves_order(self):
        todos = engine.delete_todo(_build("a", "b", "c"), 2)
        assert [t.id for t in todos.todos] == [1, 3]

    def test_edit_preserves_other_fields(self):
        todos, _ = engine.add_todo(TodoList(), "old", priority=4)
        todos = engine.complete_todo(todos, 1)
        before = engine.find_todo(todos, 1)
        after = engine.find_todo(engine.edit_todo(todos, 1, "  new  "), 1)
        assert after.description == "new"
        assert after.id == before.id
        assert after.completed is True
        assert after.priority == 4
        assert after.created_at == before.created_at

    def test_edit_rejects_empty(self):
        todos = _build("a")
        with pytest.raises(ValidationError):
            engine.edit_todo(todos, 1, "  ")
        assert engine.find_todo(todos, 1).description == "a"

    def test_set_and_clear_priority(self):
        todos = engine.set_priority(_build("a"), 1, 5)
        assert engine.find_todo(todos, 1).priority == 5
        todos = engine.set_priority(todos, 1, None)
        assert engine.find_todo(todos, 1).priority is None

    def test_set_and_clear_details(self):
        todos = engine.set_details(_build("a"), 1, "  Ask Sam first ")
        assert engine.find_todo(todos, 1).details == "Ask Sam first"
        todos = engine.set_details(todos, 1, "   ")
        assert engine.find_todo(todos, 1).details is None

    def test_set_and_clear_due_date(self):
        due = datetime(2030, 1, 2, 23, 59, 59, tzinfo=timezone.utc)
        original = _build("a")
        todos = engine.set_due_date(original, 1, due)
        assert engine.find_todo(todos, 1).due_date == due
        assert engine.find_todo(original, 1).due_date is None
        todos = engine.set_due_date(todos, 1, None)
        assert engine.find_todo(todos, 1).due_date is None

    def test_due_date_must_be_datetime(self):
        with pytest.raises(ValidationError):
            engine.set_due_date(_build("a"), 1, "2030-01-02")

    def test_add_with_details_and_due_date(self):
        due = datetime(2030, 1, 2, tzinfo=timezone.utc)
        _, todo = engine.add_todo(TodoList(), "a", details="notes", due_date=due)
        assert todo.details == "notes"
        assert todo.due_date == due


class TestParseDueDate:
    """Tests for parse_due_date()."""

    _NOW = datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("text", ["", "  ", "none", "Clear"])
    def test_clearing_words(self, text):
        assert engine.parse_due_date(text, self._NOW) is None

    def test_relative_words(self):
        assert engine.parse_due_date("today", self._NOW) == self._NOW
        assert engine.parse_due_date("Tomorrow", self._NOW) == self._NOW + timedelta(days=1)

    def test_iso_date_is_end_of_day_utc(self):
        assert engine.parse_due_date("2024-12-25", self._NOW) == datetime(
            2024, 12, 25, 23, 59, 59, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("text", ["next week", "2024-13-01", "25/12/2024"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            engine.parse_due_date(text, self._NOW)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class TestList:
    """Tests for list_todos()."""

    def test_filters_partition_all(self):
        todos = engine.complete_todo(engine.complete_todo(_build("a", "b", "c", "d"), 2), 4)
        everything = {t.id for t in engine.list_todos(todos, TodoFilter.ALL)}
        done = {t.id for t in engine.list_todos(todos, TodoFilter.COMPLETED)}
        pending = {t.id for t in engine.list_todos(todos, TodoFilter.PENDING)}
        assert done | pending == everything
        assert done & pending == set()

    def test_accepts_filter_value_string(self):
        todos = engine.complete_todo(_build("a", "b"), 1)
        assert [t.id for t in engine.list_todos(todos, "pending")] == [2]

    def test_empty_collection_yields_nothing(self):
        assert list(engine.list_todos(TodoList(), TodoFilter.COMPLETED)) == []


# ---------------------------------------------------------------------------
# Bulk operations
# ---------------------------------------------------------------------------


class TestBulk:
    """Tests for clear_completed(), merge_todos(), replace_todos()."""

    def test_clear_completed(self):
        todos = engine.complete_todo(_build("a", "b", "c"), 2)
        cleared, removed = engine.clear_completed(todos)
        assert removed == 1
        assert [t.id for t in cleared.todos] == [1, 3]
        assert cleared.next_id == todos.next_id

    def test_merge_assigns_fresh_ids(self):
        current = _build("a", "b")
        imported = _build("x", "y")
        merged, count = engine.merge_todos(current, imported)
        assert count == 2
        assert [t.id for t in merged.todos] == [1, 2, 3, 4]
        assert [t.description for t in merged.todos] == ["a", "b", "x", "y"]
        assert merged.next_id == 5

    def test_replace_never_lowers_counter(self):
        current = engine.delete_todo(_build("a", "b", "c", "d", "e"), 5)
        imported = _build("x")
        replaced = engine.replace_todos(current, imported)
        assert [t.description for t in replaced.todos] == ["x"]
        assert replaced.next_id == 6

    def test_stats(self):
        todos, _ = engine.add_todo(TodoList(), "a", priority=5)
        todos, _ = engine.add_todo(todos, "b")
        todos, _ = engine.add_todo(todos, "c", priority=5)
        todos = engine.complete_todo(todos, 1)
        stats = engine.compute_stats(todos)
        assert stats.total == 3
        assert stats.completed == 1
        assert stats.pending == 2
        assert stats.completion_rate == pytest.approx(100 / 3)
        assert stats.by_priority == {"Critical": 2, "None": 1}
        assert stats.oldest_pending.id == 2

    def test_stats_empty(self):
        stats = engine.compute_stats(TodoList())
        assert stats.completion_rate == 0.0
        assert stats.oldest_pending is None

    def test_stats_counts_overdue_pending_only(self):
        past = datetime(2000, 1, 1, tzinfo=timezone.utc)
        todos = _build("a", "b", "c")
        todos = engine.set_due_date(todos, 1, past)
        todos = engine.set_due_date(todos, 2, past)
        todos = engine.complete_todo(todos, 2)
        assert engine.compute_stats(todos).overdue == 1


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


def test_scenario_add_complete_delete_add():
    todos, milk = engine.add_todo(TodoList(), "Buy milk")
    assert milk.id == 1 and milk.completed is False

    todos, bug = engine.add_todo(todos, "Fix bug", priority=5)
    assert bug.id == 2 and bug.priority == 5

    todos = engine.complete_todo(todos, 1)
    assert engine.find_todo(todos, 1).completed is True
    assert [t.id for t in engine.list_todos(todos, TodoFilter.PENDING)] == [2]

    todos = engine.delete_todo(todos, 1)
    todos, docs = engine.add_todo(todos, "Write docs")
    assert docs.id == 3


def test_scenario_out_of_range_priority_leaves_record():
    todos = _build("a", "b")
    with pytest.raises(ValidationError):
        engine.set_priority(todos, 2, 7)
    assert engine.find_todo(todos, 2).priority is None
