# src/todolist/core/snapshot.py

from __future__ import annotations

import json
import logging
from typing import Any

from .notifier import ChangeNotifier
from .ports import DocumentStore, Subscriber
from .results import MutationResult

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Base for in-memory stores persisted as one JSON array document.

    Protocol shared by every mutating operation:
      validate -> mutate memory -> write full snapshot -> notify -> return result

    Failure policy:
    - a missing document means "start empty"
    - an unreadable or malformed document is logged and also means "start empty"
    - a failed write is logged; the in-memory change stays authoritative and the
      result carries persisted=False

    Subclasses own the in-memory collection and implement the three hooks
    below. There is no locking here: callers serialize mutations per store.
    """

    def __init__(self, documents: DocumentStore, document_name: str, *, name: str) -> None:
        self._documents = documents
        self._document_name = document_name
        self._name = name
        self._notifier = ChangeNotifier(name)

    # ---- hooks ----

    def _clear(self) -> None:
        raise NotImplementedError

    def _restore(self, records: list[dict[str, Any]]) -> None:
        raise NotImplementedError

    def _snapshot(self) -> list[dict[str, Any]]:
        raise NotImplementedError

    # ---- persistence ----

    @property
    def document_name(self) -> str:
        return self._document_name

    def _load(self) -> None:
        self._clear()

        try:
            raw = self._documents.read_whole(self._document_name)
        except Exception:
            logger.exception("%s: failed to read %s; starting empty", self._name, self._document_name)
            return

        if raw is None:
            logger.info("%s: %s not found; starting empty", self._name, self._document_name)
            return

        try:
            data = json.loads(raw)
        except ValueError:
            logger.exception("%s: %s is not valid JSON; starting empty", self._name, self._document_name)
            return

        if not isinstance(data, list):
            logger.error(
                "%s: %s must hold a JSON array, got %s; starting empty",
                self._name,
                self._document_name,
                type(data).__name__,
            )
            return

        records = [r for r in data if isinstance(r, dict)]
        if len(records) != len(data):
            logger.warning(
                "%s: skipped %d non-object entries in %s",
                self._name,
                len(data) - len(records),
                self._document_name,
            )

        try:
            self._restore(records)
        except Exception:
            logger.exception("%s: failed to restore %s; starting empty", self._name, self._document_name)
            self._clear()

    def _save(self) -> bool:
        try:
            payload = json.dumps(self._snapshot(), ensure_ascii=False, indent=2)
            self._documents.ensure_container()
            self._documents.write_whole(self._document_name, payload)
        except Exception:
            logger.exception("%s: failed to write %s; in-memory state kept", self._name, self._document_name)
            return False

        logger.debug("%s: wrote snapshot %s (%d bytes)", self._name, self._document_name, len(payload))
        return True

    # ---- notification ----

    def subscribe(self, callback: Subscriber) -> int:
        return self._notifier.subscribe(callback)

    def unsubscribe(self, token: int) -> bool:
        return self._notifier.unsubscribe(token)

    async def _commit(self, item: Any = None) -> MutationResult:
        """Persist the whole collection, then notify."""
        persisted = self._save()
        errors = await self._notifier.notify()
        return MutationResult(ok=True, persisted=persisted, subscriber_errors=errors, item=item)

    async def _announce(self, item: Any = None) -> MutationResult:
        """Notify without writing (session changes, reloads)."""
        errors = await self._notifier.notify()
        return MutationResult(ok=True, subscriber_errors=errors, item=item)
