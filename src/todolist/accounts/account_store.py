# src/todolist/accounts/account_store.py

from __future__ import annotations

import logging
from typing import Any

from ..core.ports import DocumentStore
from ..core.results import FailureReason, MutationResult
from ..core.snapshot import SnapshotStore
from .account_models import Account, Action, Role, capabilities_for, same_username

logger = logging.getLogger(__name__)


class AccountStore(SnapshotStore):
    """
    Accounts, the current session and the rules that guard them.

    Invariants kept by every operation:
    - usernames are unique under case-insensitive comparison
    - at least one account has admin capability ("last admin" cannot be
      demoted or deleted; ensure_admin_exists restores one on startup)
    - the logged-in account cannot delete itself

    Refusals come back as MutationResult(ok=False, reason=...); nothing here
    raises for bad input. Role checks always go through Account.capabilities.

    The session is stored as an account id, so get_current_user() reflects
    updates made after login.
    """

    def __init__(
        self,
        documents: DocumentStore,
        document_name: str = "users.json",
        *,
        admin_username: str = "admin",
        admin_password: str = "123",
    ) -> None:
        super().__init__(documents, document_name, name="accounts")
        self._accounts: dict[int, Account] = {}
        self._next_id = 1
        self._current_id: int | None = None
        self._admin_username = admin_username
        self._admin_password = admin_password

        self._load()
        self.ensure_admin_exists()
        logger.info(
            "AccountStore ready document=%s total=%s admins=%s",
            document_name,
            len(self._accounts),
            len(self._admin_ids()),
        )

    # ---- snapshot hooks ----

    def _clear(self) -> None:
        self._accounts = {}
        self._next_id = 1

    def _restore(self, records: list[dict[str, Any]]) -> None:
        for record in records:
            try:
                account = Account.from_record(record)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping bad account record %r: %s", record.get("Id"), e)
                continue
            if account.id in self._accounts:
                logger.warning("Skipping duplicate account id=%s", account.id)
                continue
            if self._find_by_username(account.username) is not None:
                logger.warning("Skipping duplicate username %r (id=%s)", account.username, account.id)
                continue
            self._accounts[account.id] = account
        self._next_id = max(self._accounts, default=0) + 1

    def _snapshot(self) -> list[dict[str, Any]]:
        return [account.to_record() for account in self._accounts.values()]

    # ---- helpers ----

    def _allocate_id(self) -> int:
        account_id = max(self._next_id, max(self._accounts, default=0) + 1)
        self._next_id = account_id + 1
        return account_id

    def _find_by_username(self, username: str) -> Account | None:
        for account in self._accounts.values():
            if same_username(account.username, username):
                return account
        return None

    def _username_taken(self, username: str, *, exclude_id: int | None = None) -> bool:
        return any(
            a.id != exclude_id and same_username(a.username, username) for a in self._accounts.values()
        )

    def _admin_ids(self) -> list[int]:
        return [a.id for a in self._accounts.values() if a.is_admin]

    def _current(self) -> Account | None:
        if self._current_id is None:
            return None
        return self._accounts.get(self._current_id)

    def is_last_admin(self, account_id: int) -> bool:
        admin_ids = self._admin_ids()
        return len(admin_ids) == 1 and admin_ids[0] == account_id

    def ensure_admin_exists(self) -> bool:
        """
        Guarantee one admin account. Returns True if an account was added or promoted.

        If the bootstrap username is already taken by a non-admin, that account
        is promoted instead of adding a second one with the same name.
        Persists when it changes something; does not notify.
        """
        changed = False
        if not self._admin_ids():
            existing = self._find_by_username(self._admin_username)
            if existing is not None:
                existing.role = Role.ADMIN
                logger.warning("No admin account found; promoted %r (id=%s)", existing.username, existing.id)
            else:
                account = Account(
                    id=self._allocate_id(),
                    username=self._admin_username,
                    password=self._admin_password,
                    role=Role.ADMIN,
                )
                self._accounts[account.id] = account
                logger.warning("No admin account found; created %r (id=%s)", account.username, account.id)
            self._save()
            changed = True

        self._next_id = max(self._next_id, max(self._accounts, default=0) + 1)
        return changed

    # ---- session ----

    async def login(self, username: str | None, password: str | None) -> MutationResult:
        username = (username or "").strip()
        password = (password or "").strip()

        for account in self._accounts.values():
            if same_username(account.username, username) and account.password == password:
                self._current_id = account.id
                logger.info("Login ok id=%s username=%s", account.id, account.username)
                return await self._announce(account.copy())

        logger.info("Login failed username=%s", username)
        return MutationResult.refused(FailureReason.BAD_CREDENTIALS)

    async def logout(self) -> MutationResult:
        previous = self._current_id
        self._current_id = None
        logger.info("Logout id=%s", previous)
        return await self._announce()

    def is_logged_in(self) -> bool:
        return self._current() is not None

    def get_current_user(self) -> Account | None:
        account = self._current()
        return account.copy() if account is not None else None

    def is_admin(self) -> bool:
        account = self._current()
        if account is None:
            return False
        # Older snapshots may carry the bootstrap admin with a stale role.
        return account.is_admin or same_username(account.username, self._admin_username)

    def is_user(self) -> bool:
        return self._current() is not None and not self.is_admin()

    def can(self, action: Action) -> bool:
        account = self._current()
        if account is None:
            return False
        if self.is_admin():
            return capabilities_for(Role.ADMIN).allows(action)
        return account.capabilities.allows(action)

    # ---- queries ----

    def get_all_users(self) -> list[Account]:
        return [account.copy() for account in self._accounts.values()]

    def get_user(self, account_id: int) -> Account | None:
        account = self._accounts.get(account_id)
        return account.copy() if account is not None else None

    # ---- account management ----

    async def register(self, username: str | None, password: str | None) -> MutationResult:
        return await self._create(username, password, Role.USER)

    async def create_user(
        self,
        username: str | None,
        password: str | None,
        role: str | Role | None,
    ) -> MutationResult:
        return await self._create(username, password, Role.parse(role))

    async def _create(self, username: str | None, password: str | None, role: Role) -> MutationResult:
        username = (username or "").strip()
        password = (password or "").strip()
        if not username or not password:
            return MutationResult.refused(FailureReason.VALIDATION)
        if self._find_by_username(username) is not None:
            logger.info("Account not created: username %r taken", username)
            return MutationResult.refused(FailureReason.DUPLICATE)

        account = Account(id=self._allocate_id(), username=username, password=password, role=role)
        self._accounts[account.id] = account
        logger.info("Account created id=%s username=%s role=%s", account.id, username, role.value)
        return await self._commit(account.copy())

    async def reset_password(self, account_id: int, new_password: str | None) -> MutationResult:
        new_password = (new_password or "").strip()
        if not new_password:
            return MutationResult.refused(FailureReason.VALIDATION)

        account = self._accounts.get(account_id)
        if account is None:
            return MutationResult.refused(FailureReason.NOT_FOUND)

        account.password = new_password
        logger.info("Password reset id=%s", account_id)
        return await self._commit(account.copy())

    async def update_user(self, updated: Account) -> MutationResult:
        """
        Replace username, password and role of an existing account.

        The stored embedded task list is kept; a blank password keeps the old one.
        """
        existing = self._accounts.get(updated.id)
        if existing is None:
            return MutationResult.refused(FailureReason.NOT_FOUND)

        username = (updated.username or "").strip()
        if not username:
            return MutationResult.refused(FailureReason.VALIDATION)
        if self._username_taken(username, exclude_id=updated.id):
            logger.info("Update refused id=%s: username %r taken", updated.id, username)
            return MutationResult.refused(FailureReason.DUPLICATE)

        role = Role.parse(updated.role)
        if self.is_last_admin(updated.id) and not capabilities_for(role).is_admin:
            logger.info("Update refused id=%s: would demote the last admin", updated.id)
            return MutationResult.refused(FailureReason.LAST_ADMIN)

        replacement = Account(
            id=existing.id,
            username=username,
            password=(updated.password or "").strip() or existing.password,
            role=role,
            tasks=existing.tasks,
        )
        self._accounts[existing.id] = replacement
        logger.info("Account updated id=%s username=%s role=%s", existing.id, username, role.value)
        return await self._commit(replacement.copy())

    async def delete_user(self, account_id: int) -> MutationResult:
        if self._current_id == account_id:
            logger.info("Delete refused id=%s: account is logged in", account_id)
            return MutationResult.refused(FailureReason.SELF_DELETE)
        if self.is_last_admin(account_id):
            logger.info("Delete refused id=%s: last admin", account_id)
            return MutationResult.refused(FailureReason.LAST_ADMIN)

        removed = self._accounts.pop(account_id, None)
        if removed is None:
            return MutationResult.refused(FailureReason.NOT_FOUND)

        logger.info("Account deleted id=%s username=%s", account_id, removed.username)
        return await self._commit(removed)

    async def reload(self) -> MutationResult:
        issued = self._next_id
        self._load()
        self._next_id = max(self._next_id, issued)
        self.ensure_admin_exists()

        if self._current_id is not None and self._current_id not in self._accounts:
            logger.info("Session id=%s dropped: account gone after reload", self._current_id)
            self._current_id = None

        logger.info("AccountStore reloaded total=%s", len(self._accounts))
        return await self._announce()
