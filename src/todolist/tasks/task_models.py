# src/todolist/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

DEFAULT_CATEGORY = "General"

_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class Priority(StrEnum):
    """
    Task priority. The value is the short code stored in snapshots.

    Unknown/empty codes map to UNSPECIFIED (see parse_priority).
    """

    HIGH = "H"
    MEDIUM = "M"
    LOW = "L"
    UNSPECIFIED = ""

    @property
    def label(self) -> str:
        return _PRIORITY_DISPLAY[self][0]

    @property
    def badge(self) -> str:
        """CSS-style badge class used by front ends."""
        return _PRIORITY_DISPLAY[self][1]


_PRIORITY_DISPLAY: dict[Priority, tuple[str, str]] = {
    Priority.HIGH: ("High", "bg-danger"),
    Priority.MEDIUM: ("Medium", "bg-warning text-dark"),
    Priority.LOW: ("Low", "bg-success"),
    Priority.UNSPECIFIED: ("None", "bg-secondary"),
}


def parse_priority(raw: object) -> Priority:
    """Map a raw code ("H"/"M"/"L", any case) to Priority; anything else is UNSPECIFIED."""
    if isinstance(raw, Priority):
        return raw
    if not isinstance(raw, str):
        return Priority.UNSPECIFIED
    try:
        return Priority(raw.upper())
    except ValueError:
        return Priority.UNSPECIFIED


def parse_due_date(raw: object) -> datetime | None:
    """
    Parse an ISO-8601 date or date-time.

    Accepts "2026-10-20", "2026-10-20T09:30" and 7-digit fractions as written by
    other JSON serializers. Empty/None -> None. Raises ValueError on garbage.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str):
        raise ValueError(f"due date must be a string, got {type(raw).__name__}")
    s = raw.strip()
    if not s:
        return None
    return datetime.fromisoformat(_FRACTION_RE.sub(r"\1", s))


@dataclass(slots=True)
class TaskItem:
    id: int = 0  # 0 = not assigned yet; TaskStore.add assigns one
    owner_id: int = 0
    title: str = ""
    is_completed: bool = False
    category: str = DEFAULT_CATEGORY
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None

    def due_sort_key(self) -> tuple[bool, datetime]:
        # Items without a due date sort after every dated item.
        # Compare wall-clock datetimes; aware values are folded to naive UTC.
        due = self.due_date
        if due is None:
            return (True, datetime.min)
        if due.tzinfo is not None:
            try:
                due = due.astimezone(timezone.utc).replace(tzinfo=None)
            except OverflowError:
                due = due.replace(tzinfo=None)
        return (False, due)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "Id": self.id,
            "UserId": self.owner_id,
            "Title": self.title,
            "IsCompleted": self.is_completed,
            "Category": self.category,
            "Priority": self.priority.value,
        }
        if self.due_date is not None:
            record["DueDate"] = self.due_date.isoformat()
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> TaskItem:
        task_id = int(record["Id"])
        if task_id <= 0:
            raise ValueError(f"task id must be positive, got {task_id}")
        return cls(
            id=task_id,
            owner_id=int(record.get("UserId") or 0),
            title=str(record.get("Title") or ""),
            is_completed=bool(record.get("IsCompleted", False)),
            category=str(record.get("Category") or DEFAULT_CATEGORY),
            priority=parse_priority(record.get("Priority")),
            due_date=parse_due_date(record.get("DueDate")),
        )
