# src/todolist/tasks/task_store.py

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from ..core.ports import DocumentStore
from ..core.results import FailureReason, MutationResult
from ..core.snapshot import SnapshotStore
from .task_models import TaskItem

logger = logging.getLogger(__name__)


class TaskStore(SnapshotStore):
    """
    Task items of every owner, kept in memory and saved as one JSON document.

    Items live in a dict keyed by id; dict order is insertion order, which is
    what get_for_user falls back to for equal due dates.

    Ids:
    - assigned as max(counter, max(existing) + 1), so a deleted id is never
      handed out again by the same instance
    - the counter is recomputed from the snapshot on load; reload never lowers it

    Readers get copies; the only way to change an item is through the store.
    """

    def __init__(self, documents: DocumentStore, document_name: str = "tasks.json") -> None:
        super().__init__(documents, document_name, name="tasks")
        self._items: dict[int, TaskItem] = {}
        self._next_id = 1
        self._load()
        logger.info("TaskStore ready document=%s total=%s", document_name, len(self._items))

    # ---- snapshot hooks ----

    def _clear(self) -> None:
        self._items = {}
        self._next_id = 1

    def _restore(self, records: list[dict[str, Any]]) -> None:
        for record in records:
            try:
                item = TaskItem.from_record(record)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping bad task record %r: %s", record.get("Id"), e)
                continue
            if item.id in self._items:
                logger.warning("Skipping duplicate task id=%s", item.id)
                continue
            self._items[item.id] = item
        self._next_id = max(self._items, default=0) + 1

    def _snapshot(self) -> list[dict[str, Any]]:
        return [item.to_record() for item in self._items.values()]

    def _allocate_id(self) -> int:
        task_id = max(self._next_id, max(self._items, default=0) + 1)
        self._next_id = task_id + 1
        return task_id

    # ---- queries ----

    def count(self) -> int:
        return len(self._items)

    def get_all(self) -> list[TaskItem]:
        return [replace(item) for item in self._items.values()]

    def get(self, task_id: int) -> TaskItem | None:
        item = self._items.get(task_id)
        return replace(item) if item is not None else None

    def get_for_user(self, owner_id: int) -> list[TaskItem]:
        """Owner's items by due date ascending; undated last; ties keep insertion order."""
        owned = [item for item in self._items.values() if item.owner_id == owner_id]
        owned.sort(key=TaskItem.due_sort_key)
        return [replace(item) for item in owned]

    # ---- mutations ----

    async def add(self, item: TaskItem) -> MutationResult:
        """
        Store a copy of item and return it in result.item.

        An id of 0 (or one already taken) gets a fresh id; a free explicit id is
        kept. The assigned id is also written back to the caller's object.
        """
        if item.id <= 0 or item.id in self._items:
            task_id = self._allocate_id()
        else:
            task_id = item.id
            self._next_id = max(self._next_id, task_id + 1)

        item.id = task_id
        stored = replace(item)
        self._items[task_id] = stored
        logger.debug("Task added id=%s owner=%s due=%s", task_id, stored.owner_id, stored.due_date)
        return await self._commit(replace(stored))

    async def update(self, item: TaskItem) -> MutationResult:
        existing = self._items.get(item.id)
        if existing is None:
            logger.debug("Task update ignored: id=%s not found", item.id)
            return MutationResult.refused(FailureReason.NOT_FOUND)

        existing.title = item.title
        existing.category = item.category
        existing.priority = item.priority
        existing.due_date = item.due_date
        existing.is_completed = item.is_completed
        logger.debug("Task updated id=%s completed=%s", existing.id, existing.is_completed)
        return await self._commit(replace(existing))

    async def delete(self, task_id: int) -> MutationResult:
        removed = self._items.pop(task_id, None)
        if removed is None:
            logger.debug("Task delete ignored: id=%s not found", task_id)
            return MutationResult.refused(FailureReason.NOT_FOUND)

        logger.debug("Task deleted id=%s", task_id)
        return await self._commit(removed)

    async def delete_for_owner(self, owner_id: int) -> MutationResult:
        doomed = [task_id for task_id, item in self._items.items() if item.owner_id == owner_id]
        if not doomed:
            return MutationResult.refused(FailureReason.NOT_FOUND)

        for task_id in doomed:
            del self._items[task_id]
        logger.info("Deleted %d tasks of owner=%s", len(doomed), owner_id)
        return await self._commit(doomed)

    async def reload(self) -> MutationResult:
        issued = self._next_id
        self._load()
        self._next_id = max(self._next_id, issued)
        logger.info("TaskStore reloaded total=%s", len(self._items))
        return await self._announce()
