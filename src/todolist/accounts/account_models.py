# src/todolist/accounts/account_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from ..tasks.task_models import TaskItem

logger = logging.getLogger(__name__)


class Role(StrEnum):
    ADMIN = "Admin"
    USER = "User"

    @classmethod
    def parse(cls, raw: object) -> Role:
        """
        The one place role names are compared.

        Case-insensitive and trimmed; blank, unknown or non-string input is USER.
        """
        if isinstance(raw, Role):
            return raw
        if isinstance(raw, str) and raw.strip().casefold() == "admin":
            return cls.ADMIN
        return cls.USER


class Action(StrEnum):
    MANAGE_OWN_TASKS = "manage_own_tasks"
    VIEW_ALL_TASKS = "view_all_tasks"
    MANAGE_USERS = "manage_users"
    RESET_PASSWORDS = "reset_passwords"


@dataclass(frozen=True, slots=True)
class Capabilities:
    is_admin: bool
    actions: frozenset[Action]

    def allows(self, action: Action) -> bool:
        return action in self.actions


_CAPABILITIES: dict[Role, Capabilities] = {
    Role.ADMIN: Capabilities(is_admin=True, actions=frozenset(Action)),
    Role.USER: Capabilities(is_admin=False, actions=frozenset({Action.MANAGE_OWN_TASKS})),
}


def capabilities_for(role: Role) -> Capabilities:
    return _CAPABILITIES[role]


def same_username(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return False
    return a.casefold() == b.casefold()


@dataclass(slots=True)
class Account:
    id: int = 0
    username: str = ""
    password: str = ""
    role: Role = Role.USER

    # Legacy embedded task list. TaskStore is authoritative for tasks; this is
    # only carried through load/save/update so old snapshots keep their data.
    tasks: list[TaskItem] = field(default_factory=list)

    @property
    def capabilities(self) -> Capabilities:
        return capabilities_for(self.role)

    @property
    def is_admin(self) -> bool:
        return self.capabilities.is_admin

    def copy(self) -> Account:
        return replace(self, tasks=[replace(t) for t in self.tasks])

    def to_record(self) -> dict[str, Any]:
        return {
            "Id": self.id,
            "Username": self.username,
            "Password": self.password,
            "Role": self.role.value,
            "Tasks": [t.to_record() for t in self.tasks],
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Account:
        account_id = int(record["Id"])
        if account_id <= 0:
            raise ValueError(f"account id must be positive, got {account_id}")

        username = str(record.get("Username") or "").strip()
        if not username:
            raise ValueError("username is empty")

        tasks: list[TaskItem] = []
        raw_tasks = record.get("Tasks") or []
        if isinstance(raw_tasks, list):
            for raw in raw_tasks:
                if not isinstance(raw, dict):
                    continue
                try:
                    tasks.append(TaskItem.from_record(raw))
                except (KeyError, TypeError, ValueError):
                    logger.debug("Dropping bad embedded task of account id=%s", account_id)

        return cls(
            id=account_id,
            username=username,
            password=str(record.get("Password") or ""),
            role=Role.parse(record.get("Role")),
            tasks=tasks,
        )
