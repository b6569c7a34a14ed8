# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The stores depend on Protocols instead of concrete implementations.
This keeps persistence swappable and makes testing easier.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

Subscriber = Callable[[], Awaitable[None] | None]
# No-argument change callback; may be a plain function or a coroutine function.


class DocumentStore(Protocol):
    """
    Whole-resource storage of named text documents.

    - read_whole returns None when the document does not exist yet
    - write_whole fully replaces the document
    - ensure_container is idempotent
    """

    def ensure_container(self) -> None: ...
    def read_whole(self, name: str) -> str | None: ...
    def write_whole(self, name: str, content: str) -> None: ...


class TaskRepo(Protocol):
    # Queries
    def get_all(self) -> list[Any]: ...
    def get(self, task_id: int) -> Any | None: ...
    def get_for_user(self, owner_id: int) -> list[Any]: ...
    def count(self) -> int: ...

    # Mutations (persist + notify)
    def add(self, item: Any) -> Awaitable[Any]: ...
    def update(self, item: Any) -> Awaitable[Any]: ...
    def delete(self, task_id: int) -> Awaitable[Any]: ...
    def delete_for_owner(self, owner_id: int) -> Awaitable[Any]: ...
    def reload(self) -> Awaitable[Any]: ...

    def subscribe(self, callback: Subscriber) -> int: ...
    def unsubscribe(self, token: int) -> bool: ...


class AccountRepo(Protocol):
    # Session
    def login(self, username: str | None, password: str | None) -> Awaitable[Any]: ...
    def logout(self) -> Awaitable[Any]: ...
    def is_logged_in(self) -> bool: ...
    def get_current_user(self) -> Any | None: ...
    def is_admin(self) -> bool: ...
    def is_user(self) -> bool: ...
    def can(self, action: Any) -> bool: ...

    # Account management
    def register(self, username: str | None, password: str | None) -> Awaitable[Any]: ...
    def create_user(
            self,
            username: str | None,
            password: str | None,
            role: str | None,
    ) -> Awaitable[Any]: ...
    def reset_password(self, account_id: int, new_password: str | None) -> Awaitable[Any]: ...
    def update_user(self, updated: Any) -> Awaitable[Any]: ...
    def delete_user(self, account_id: int) -> Awaitable[Any]: ...
    def get_all_users(self) -> list[Any]: ...
    def get_user(self, account_id: int) -> Any | None: ...
    def reload(self) -> Awaitable[Any]: ...

    def subscribe(self, callback: Subscriber) -> int: ...
    def unsubscribe(self, token: int) -> bool: ...
