"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories of the machine running them.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from todoterm_cli.models import TodoList
from todoterm_cli.repositories import TodoStore


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point every platformdirs location at *tmp_path* and reset singletons.

    Also clears the cached TodoService, the --file override and the config
    manager so each test starts from a clean slate.
    """
    import todoterm_cli.config as config_mod
    import todoterm_cli.utils.logger as logger_mod
    from todoterm_cli.services import todo_service as service_mod

    monkeypatch.delenv("TODOTERM_FILE", raising=False)
    monkeypatch.delenv("TODOTERM_LOG_LEVEL", raising=False)

    _reset_logger(logger_mod)
    config_mod._config_manager = None
    service_mod.set_data_file_override(None)

    dirs = {
        "config": tmp_path / "config",
        "data": tmp_path / "data",
        "log": tmp_path / "log",
    }
    with (
        patch("todoterm_cli.config.user_config_dir", return_value=str(dirs["config"])),
        patch("todoterm_cli.config.user_data_dir", return_value=str(dirs["data"])),
        patch("todoterm_cli.utils.logger.user_log_dir", return_value=str(dirs["log"])),
    ):
        yield dirs

    service_mod.set_data_file_override(None)
    config_mod._config_manager = None
    _reset_logger(logger_mod)


def _reset_logger(logger_mod) -> None:
    """Close and detach every handler of the app logger and forget the singleton."""
    app_logger = logging.getLogger("todoterm_cli")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.disabled = False
    logger_mod._logger = None


@pytest.fixture()
def app_log():
    """Callable returning what the app logger's file handler has written so far."""

    def _read() -> str:
        contents = []
        for handler in logging.getLogger("todoterm_cli").handlers:
            handler.flush()
            filename = getattr(handler, "baseFilename", None)
            if filename:
                with open(filename, encoding="utf-8") as f:
                    contents.append(f.read())
        return "".join(contents)

    return _read


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def data_file(isolated_dirs):
    """Path of the default data file inside the isolated data dir."""
    return isolated_dirs["data"] / "todos.json"


@pytest.fixture()
def store(data_file):
    """A TodoStore writing to the isolated default data file."""
    return TodoStore(data_file)


@pytest.fixture()
def seeded_store(store):
    """Store holding: #1 'Buy milk' (done), #2 'Fix bug' (P5), #3 'Write docs'."""
    from todoterm_cli.core import engine

    todos = TodoList()
    todos, _ = engine.add_todo(todos, "Buy milk")
    todos, _ = engine.add_todo(todos, "Fix bug", priority=5)
    todos, _ = engine.add_todo(todos, "Write docs")
    todos = engine.complete_todo(todos, 1)
    store.save(todos)
    return store
