# src/todolist/core/results.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class FailureReason(StrEnum):
    """
    Why a store operation was refused.

    Validation family: VALIDATION, DUPLICATE, NOT_FOUND, BAD_CREDENTIALS.
    Invariant family: LAST_ADMIN, SELF_DELETE.
    """

    VALIDATION = "validation"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    BAD_CREDENTIALS = "bad_credentials"
    LAST_ADMIN = "last_admin"
    SELF_DELETE = "self_delete"


@dataclass(slots=True)
class MutationResult:
    """
    Outcome of a mutating store call.

    Truthiness follows `ok`, so `if await store.delete_user(i):` reads like the
    plain boolean API. `persisted` is None when the call writes no snapshot
    (login/logout, refused operations).
    """

    ok: bool
    reason: FailureReason | None = None
    persisted: bool | None = None
    subscriber_errors: list[BaseException] = field(default_factory=list)
    item: Any = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def clean(self) -> bool:
        return self.ok and self.persisted is not False and not self.subscriber_errors

    @classmethod
    def refused(cls, reason: FailureReason) -> MutationResult:
        return cls(ok=False, reason=reason)
