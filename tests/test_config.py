# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from todolist.config import Settings

_VARS = (
    "TODOLIST_APP_NAME",
    "TODOLIST_LOG_LEVEL",
    "TODOLIST_CONSOLE_ENABLED",
    "TODOLIST_DATA_DIR",
    "TODOLIST_TASKS_DOCUMENT",
    "TODOLIST_USERS_DOCUMENT",
    "TODOLIST_ADMIN_USERNAME",
    "TODOLIST_ADMIN_PASSWORD",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()

    assert s.app_name == "todolist"
    assert s.console_enabled is True
    assert s.data_dir == Path(".local/todolist")
    assert (s.tasks_document, s.users_document) == ("tasks.json", "users.json")
    assert (s.bootstrap_admin_username, s.bootstrap_admin_password) == ("admin", "123")


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODOLIST_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODOLIST_CONSOLE_ENABLED", "off")
    monkeypatch.setenv("TODOLIST_ADMIN_USERNAME", " root ")
    monkeypatch.setenv("TODOLIST_USERS_DOCUMENT", "   ")

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.console_enabled is False
    assert s.bootstrap_admin_username == "root"
    assert s.users_document == "users.json"
