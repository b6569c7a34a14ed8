# tests/test_task_models.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from todolist.tasks.task_models import Priority, TaskItem, parse_due_date, parse_priority


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("H", Priority.HIGH),
        ("m", Priority.MEDIUM),
        ("l", Priority.LOW),
        (" l ", Priority.UNSPECIFIED),
        ("", Priority.UNSPECIFIED),
        (None, Priority.UNSPECIFIED),
        ("High", Priority.UNSPECIFIED),
        (3, Priority.UNSPECIFIED),
    ],
)
def test_parse_priority(raw, expected) -> None:
    assert parse_priority(raw) is expected


def test_priority_display_table() -> None:
    assert Priority.HIGH.label == "High"
    assert Priority.HIGH.badge == "bg-danger"
    assert Priority.UNSPECIFIED.badge == "bg-secondary"
    # One distinct badge per priority.
    assert len({p.badge for p in Priority}) == len(Priority)


def test_parse_due_date_forms() -> None:
    assert parse_due_date("2026-10-20") == datetime(2026, 10, 20)
    assert parse_due_date("2026-10-20T09:30:00.1234567") == datetime(2026, 10, 20, 9, 30, 0, 123456)
    assert parse_due_date("  ") is None
    assert parse_due_date(None) is None
    with pytest.raises(ValueError):
        parse_due_date("next tuesday")


def test_record_uses_snapshot_field_names_and_omits_missing_due_date() -> None:
    item = TaskItem(id=4, owner_id=2, title="Pay rent", priority=Priority.HIGH)
    record = item.to_record()

    assert record == {
        "Id": 4,
        "UserId": 2,
        "Title": "Pay rent",
        "IsCompleted": False,
        "Category": "General",
        "Priority": "H",
    }


def test_from_record_is_lenient_about_optional_fields() -> None:
    item = TaskItem.from_record({"Id": 3, "UserId": 1, "Title": None, "Priority": "x", "DueDate": None})

    assert item.title == ""
    assert item.category == "General"
    assert item.priority is Priority.UNSPECIFIED
    assert item.due_date is None


def test_from_record_rejects_non_positive_id() -> None:
    with pytest.raises(ValueError):
        TaskItem.from_record({"Id": 0, "UserId": 1})


def test_due_sort_key_compares_aware_and_naive_dates() -> None:
    naive = TaskItem(id=1, due_date=datetime(2026, 5, 1, 12, 0))
    aware = TaskItem(id=2, due_date=datetime(2026, 5, 1, 13, 0, tzinfo=timezone(timedelta(hours=2))))
    undated = TaskItem(id=3)

    ordered = sorted([undated, naive, aware], key=TaskItem.due_sort_key)

    # 13:00+02:00 is 11:00 UTC, before the naive 12:00.
    assert [t.id for t in ordered] == [2, 1, 3]
