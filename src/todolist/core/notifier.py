# src/todolist/core/notifier.py

"""
Change notification fan-out.

notify() calls every registered subscriber, joins all returned awaitables
concurrently and only returns once every one of them has finished. A failing
subscriber is logged and reported back; it never stops its siblings and never
raises into the caller.
"""

from __future__ import annotations

import asyncio
import inspect
import logging

from .ports import Subscriber

logger = logging.getLogger(__name__)


class ChangeNotifier:
    def __init__(self, name: str = "store") -> None:
        self._name = name
        self._subscribers: dict[int, Subscriber] = {}
        self._next_token = 1

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Subscriber) -> int:
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = callback
        logger.debug("%s: subscriber added token=%s total=%s", self._name, token, len(self._subscribers))
        return token

    def unsubscribe(self, token: int) -> bool:
        removed = self._subscribers.pop(token, None) is not None
        if removed:
            logger.debug("%s: subscriber removed token=%s", self._name, token)
        return removed

    def clear(self) -> None:
        self._subscribers.clear()

    async def notify(self) -> list[BaseException]:
        errors: list[BaseException] = []
        pending: list[tuple[int, asyncio.Future]] = []

        # Snapshot: callbacks may (un)subscribe while we iterate.
        for token, callback in list(self._subscribers.items()):
            try:
                outcome = callback()
            except Exception as e:
                logger.exception("%s: subscriber token=%s failed", self._name, token)
                errors.append(e)
                continue

            if inspect.isawaitable(outcome):
                pending.append((token, asyncio.ensure_future(outcome)))

        if pending:
            outcomes = await asyncio.gather(*(fut for _, fut in pending), return_exceptions=True)
            for (token, _), outcome in zip(pending, outcomes):
                if isinstance(outcome, BaseException):
                    logger.error(
                        "%s: async subscriber token=%s failed",
                        self._name,
                        token,
                        exc_info=outcome,
                    )
                    errors.append(outcome)

        return errors
