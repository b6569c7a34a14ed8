# tests/fakes.py

from __future__ import annotations

import asyncio


class MemoryDocumentStore:
    """
    In-memory DocumentStore used by store tests.

    - Captures every write for assertions
    - Can be switched to fail reads or writes with OSError
    """

    def __init__(self, docs: dict[str, str] | None = None) -> None:
        self.docs: dict[str, str] = dict(docs or {})
        self.writes: list[str] = []
        self.fail_reads = False
        self.fail_writes = False

    def ensure_container(self) -> None:
        return

    def read_whole(self, name: str) -> str | None:
        if self.fail_reads:
            raise OSError(f"read failed: {name}")
        return self.docs.get(name)

    def write_whole(self, name: str, content: str) -> None:
        if self.fail_writes:
            raise OSError(f"write failed: {name}")
        self.docs[name] = content
        self.writes.append(name)


class RecordingSubscriber:
    """Async change callback that counts invocations."""

    def __init__(self, delay: float = 0.0) -> None:
        self.calls = 0
        self.delay = delay

    async def __call__(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.calls += 1


class FailingSubscriber:
    """Change callback that counts, then raises (sync or async)."""

    def __init__(self, *, is_async: bool = True) -> None:
        self.calls = 0
        self.is_async = is_async

    def __call__(self):
        self.calls += 1
        if self.is_async:
            return self._fail()
        raise RuntimeError("sync subscriber boom")

    async def _fail(self) -> None:
        raise RuntimeError("async subscriber boom")
