# src/todolist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the document store and both stores into AppState.
"""

from __future__ import annotations

import logging

from ..accounts.account_store import AccountStore
from ..config import get_settings
from ..core.state import AppState
from ..storage.documents import FileDocumentStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    documents = FileDocumentStore(settings.data_dir)
    documents.ensure_container()

    state = AppState(
        settings=settings,
        documents=documents,
        task_store=TaskStore(documents, settings.tasks_document),
        account_store=AccountStore(
            documents,
            settings.users_document,
            admin_username=settings.bootstrap_admin_username,
            admin_password=settings.bootstrap_admin_password,
        ),
    )
    logger.info("State ready data_dir=%s", settings.data_dir)
    return state
