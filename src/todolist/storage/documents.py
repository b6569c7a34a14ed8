# src/todolist/storage/documents.py

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileDocumentStore:
    """
    Named UTF-8 documents stored as files under one directory.

    - ensure_container() creates the directory (idempotent)
    - read_whole() returns None for a missing document, raises OSError otherwise
    - write_whole() replaces the document atomically (tmp file + os.replace)
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, name: str) -> Path:
        if not name or Path(name).name != name:
            raise ValueError(f"invalid document name: {name!r}")
        return self._root / name

    def ensure_container(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)

    def read_whole(self, name: str) -> str | None:
        path = self.path_for(name)
        if not path.exists():
            return None
        return path.read_text("utf-8")

    def write_whole(self, name: str, content: str) -> None:
        path = self.path_for(name)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp.write_text(content, "utf-8")
            os.replace(tmp, path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise
        with contextlib.suppress(OSError):
            # Best-effort: the accounts document holds plaintext passwords.
            os.chmod(path, 0o600)
        logger.debug("Wrote %s (%d chars)", path, len(content))
