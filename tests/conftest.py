# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.accounts.account_store import AccountStore
from todolist.cli.bootstrap import create_initial_state
from todolist.core.state import AppState
from todolist.storage.documents import FileDocumentStore
from todolist.tasks.task_store import TaskStore

from .fakes import MemoryDocumentStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path / "data",
        tasks_document="tasks.json",
        users_document="users.json",
        bootstrap_admin_username="admin",
        bootstrap_admin_password="123",
    )


@pytest.fixture()
def documents(settings: SimpleNamespace) -> FileDocumentStore:
    return FileDocumentStore(settings.data_dir)


@pytest.fixture()
def memory_documents() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture()
def task_store(documents: FileDocumentStore) -> TaskStore:
    return TaskStore(documents)


@pytest.fixture()
def account_store(documents: FileDocumentStore) -> AccountStore:
    return AccountStore(documents)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState built by the real composition root.

    NOTE: We keep real file-backed stores here because snapshot writes are
    part of what we want to test.
    """
    return create_initial_state(settings=settings)
