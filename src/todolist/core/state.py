# src/todolist/core/state.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from .ports import AccountRepo, DocumentStore, TaskRepo


@dataclass
class AppState:
    # Settings object (config.Settings in the app, SimpleNamespace in tests).
    settings: Any

    documents: DocumentStore
    task_store: TaskRepo
    account_store: AccountRepo

    # Stores do no locking of their own: hold the matching lock around every
    # mutating call so id assignment and snapshots stay consistent.
    task_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    account_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
