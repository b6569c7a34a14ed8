# tests/test_documents.py

from __future__ import annotations

from pathlib import Path

import pytest

from todolist.storage.documents import FileDocumentStore


def test_missing_document_reads_as_none(tmp_path: Path) -> None:
    store = FileDocumentStore(tmp_path / "nowhere")
    assert store.read_whole("tasks.json") is None


def test_write_then_read_whole(tmp_path: Path) -> None:
    store = FileDocumentStore(tmp_path / "a" / "b")
    store.ensure_container()
    store.ensure_container()

    store.write_whole("users.json", '[{"Username": "Zoë"}]')
    store.write_whole("users.json", "[]")

    assert store.read_whole("users.json") == "[]"
    assert sorted(p.name for p in store.root.iterdir()) == ["users.json"]


def test_content_is_utf8_on_disk(tmp_path: Path) -> None:
    store = FileDocumentStore(tmp_path)
    store.write_whole("tasks.json", '["Zoë"]')
    assert (tmp_path / "tasks.json").read_bytes() == '["Zoë"]'.encode("utf-8")


@pytest.mark.parametrize("name", ["", "../escape.json", "sub/dir.json"])
def test_document_names_must_be_plain_file_names(tmp_path: Path, name: str) -> None:
    store = FileDocumentStore(tmp_path)
    with pytest.raises(ValueError):
        store.write_whole(name, "[]")


def test_failed_replace_leaves_no_temp_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = FileDocumentStore(tmp_path)
    store.write_whole("tasks.json", "[1]")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("todolist.storage.documents.os.replace", broken_replace)

    with pytest.raises(OSError):
        store.write_whole("tasks.json", "[2]")

    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.json"]
    assert store.read_whole("tasks.json") == "[1]"
