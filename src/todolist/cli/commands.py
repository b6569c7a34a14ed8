# src/todolist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..accounts.account_models import Account, Action, Role
from ..core.results import FailureReason, MutationResult
from ..core.state import AppState
from ..tasks.task_models import DEFAULT_CATEGORY, Priority, TaskItem, parse_due_date, parse_priority

CommandEmitter = Callable[[str], None]
CommandReply = str | Awaitable[str]
CommandHandler2 = Callable[[AppState, list[str]], CommandReply]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], CommandReply]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be plain functions or coroutine functions.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            reply = cast(CommandHandler3, handler)(state, args, emit)
        else:
            reply = cast(CommandHandler2, handler)(state, args)

        if inspect.isawaitable(reply):
            reply = await reply
        return reply

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


_REFUSALS = {
    FailureReason.VALIDATION: "Input is empty or invalid.",
    FailureReason.DUPLICATE: "That username is already taken.",
    FailureReason.NOT_FOUND: "Not found.",
    FailureReason.BAD_CREDENTIALS: "Wrong username or password.",
    FailureReason.LAST_ADMIN: "Refused: that is the last admin account.",
    FailureReason.SELF_DELETE: "Refused: you cannot delete the account you are logged in with.",
}


def _outcome(result: MutationResult, success: str) -> str:
    if not result:
        return _REFUSALS.get(result.reason, "Refused.") if result.reason else "Refused."
    notes: list[str] = []
    if result.persisted is False:
        notes.append("warning: change kept in memory but not saved to disk")
    if result.subscriber_errors:
        notes.append(f"warning: {len(result.subscriber_errors)} listener(s) failed")
    if notes:
        return success + " (" + "; ".join(notes) + ")"
    return success


def _parse_id(raw: str) -> int | None:
    try:
        value = int(raw.lstrip("#"))
    except ValueError:
        return None
    return value if value > 0 else None


def _format_task(task: TaskItem) -> str:
    mark = "x" if task.is_completed else " "
    due = f", due {task.due_date:%Y-%m-%d %H:%M}" if task.due_date else ""
    return f"#{task.id} [{mark}] {task.title} ({task.priority.label}, {task.category}{due})"


def _format_account(account: Account) -> str:
    return f"#{account.id} {account.username} ({account.role.value})"


def _require_login(state: AppState) -> Account | None:
    return state.account_store.get_current_user()


def _can_touch(state: AppState, user: Account, task: TaskItem) -> bool:
    return task.owner_id == user.id or state.account_store.can(Action.VIEW_ALL_TASKS)


# ---- general ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    user = state.account_store.get_current_user()
    who = "not logged in"
    if user is not None:
        who = f"{user.username} ({'admin' if state.account_store.is_admin() else 'user'})"
    return (
        "Status:\n"
        f"  Session: {who}\n"
        f"  Tasks stored: {state.task_store.count()}\n"
        f"  Accounts stored: {len(state.account_store.get_all_users())}\n"
        f"  Data dir: {getattr(state.settings, 'data_dir', '?')}"
    )


async def cmd_reload(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Reloading snapshots from disk...")
    async with state.account_lock:
        await state.account_store.reload()
    async with state.task_lock:
        await state.task_store.reload()
    return f"Reloaded: {state.task_store.count()} tasks, {len(state.account_store.get_all_users())} accounts."


# ---- session ----


async def cmd_register(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /register <username> <password>"
    async with state.account_lock:
        result = await state.account_store.register(args[0], args[1])
    return _outcome(result, f"Registered {args[0]}. Use /login to sign in.")


async def cmd_login(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /login <username> <password>"
    async with state.account_lock:
        result = await state.account_store.login(args[0], args[1])
    if not result:
        return _outcome(result, "")
    return _outcome(result, f"Welcome, {result.item.username}.")


async def cmd_logout(state: AppState, args: list[str]) -> str:
    if not state.account_store.is_logged_in():
        return "Not logged in."
    async with state.account_lock:
        result = await state.account_store.logout()
    return _outcome(result, "Logged out.")


# ---- tasks ----


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """
    /tasks       -> your tasks by due date
    /tasks all   -> every task (admins)
    """
    user = _require_login(state)
    if user is None:
        return "Log in first."

    if args and args[0].lower() == "all":
        if not state.account_store.can(Action.VIEW_ALL_TASKS):
            return "Only admins can list every task."
        tasks = state.task_store.get_all()
        header = "All tasks:"
    else:
        tasks = state.task_store.get_for_user(user.id)
        header = f"Tasks of {user.username}:"

    if not tasks:
        return "No tasks."
    return "\n".join([header] + [f"  {_format_task(t)}" for t in tasks])


async def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title words> [due=YYYY-MM-DD[THH:MM]] [pri=H|M|L] [cat=<category>]
    """
    user = _require_login(state)
    if user is None:
        return "Log in first."

    title_parts: list[str] = []
    due = None
    priority = Priority.MEDIUM
    category = DEFAULT_CATEGORY

    for arg in args:
        key, sep, value = arg.partition("=")
        key = key.lower()
        if sep and key in ("due", "pri", "priority", "cat", "category"):
            if key == "due":
                try:
                    due = parse_due_date(value)
                except ValueError:
                    return f"Bad due date: {value!r}. Use YYYY-MM-DD or YYYY-MM-DDTHH:MM."
            elif key in ("pri", "priority"):
                priority = parse_priority(value)
            else:
                category = value or DEFAULT_CATEGORY
            continue
        title_parts.append(arg)

    title = " ".join(title_parts).strip()
    if not title:
        return "Usage: /add <title> [due=YYYY-MM-DD] [pri=H|M|L] [cat=<category>]"

    item = TaskItem(owner_id=user.id, title=title, category=category, priority=priority, due_date=due)
    async with state.task_lock:
        result = await state.task_store.add(item)
    return _outcome(result, f"Added {_format_task(result.item)}")


async def cmd_done(state: AppState, args: list[str]) -> str:
    """/done <id> -> toggle completion."""
    user = _require_login(state)
    if user is None:
        return "Log in first."
    task_id = _parse_id(args[0]) if args else None
    if task_id is None:
        return "Usage: /done <task id>"

    task = state.task_store.get(task_id)
    if task is None or not _can_touch(state, user, task):
        return f"No task #{task_id}."

    task.is_completed = not task.is_completed
    async with state.task_lock:
        result = await state.task_store.update(task)
    return _outcome(result, _format_task(task))


async def cmd_del(state: AppState, args: list[str]) -> str:
    user = _require_login(state)
    if user is None:
        return "Log in first."
    task_id = _parse_id(args[0]) if args else None
    if task_id is None:
        return "Usage: /del <task id>"

    task = state.task_store.get(task_id)
    if task is None or not _can_touch(state, user, task):
        return f"No task #{task_id}."

    async with state.task_lock:
        result = await state.task_store.delete(task_id)
    return _outcome(result, f"Deleted task #{task_id}.")


# ---- accounts (admin) ----


def cmd_users(state: AppState, args: list[str]) -> str:
    if not state.account_store.can(Action.MANAGE_USERS):
        return "Only admins can list accounts."
    lines = ["Accounts:"]
    lines.extend(f"  {_format_account(a)}" for a in state.account_store.get_all_users())
    return "\n".join(lines)


async def cmd_useradd(state: AppState, args: list[str]) -> str:
    if not state.account_store.can(Action.MANAGE_USERS):
        return "Only admins can create accounts."
    if len(args) not in (2, 3):
        return "Usage: /useradd <username> <password> [Admin|User]"
    role = args[2] if len(args) == 3 else None
    async with state.account_lock:
        result = await state.account_store.create_user(args[0], args[1], role)
    if not result:
        return _outcome(result, "")
    return _outcome(result, f"Created {_format_account(result.item)}")


async def cmd_userdel(state: AppState, args: list[str]) -> str:
    """/userdel <id> -> delete an account and the tasks it owns."""
    if not state.account_store.can(Action.MANAGE_USERS):
        return "Only admins can delete accounts."
    account_id = _parse_id(args[0]) if args else None
    if account_id is None:
        return "Usage: /userdel <account id>"

    async with state.account_lock:
        result = await state.account_store.delete_user(account_id)
    if not result:
        return _outcome(result, "")

    async with state.task_lock:
        await state.task_store.delete_for_owner(account_id)
    return _outcome(result, f"Deleted {_format_account(result.item)} and their tasks.")


async def cmd_passwd(state: AppState, args: list[str]) -> str:
    """
    /passwd <new>        -> change your own password
    /passwd <id> <new>   -> reset someone's password (admins)
    """
    user = _require_login(state)
    if user is None:
        return "Log in first."

    if len(args) == 1:
        target_id, new_password = user.id, args[0]
    elif len(args) == 2:
        if not state.account_store.can(Action.RESET_PASSWORDS):
            return "Only admins can reset other passwords."
        target_id, new_password = _parse_id(args[0]), args[1]
        if target_id is None:
            return "Usage: /passwd <account id> <new password>"
    else:
        return "Usage: /passwd <new password> | /passwd <account id> <new password>"

    async with state.account_lock:
        result = await state.account_store.reset_password(target_id, new_password)
    return _outcome(result, "Password changed.")


async def cmd_role(state: AppState, args: list[str]) -> str:
    if not state.account_store.can(Action.MANAGE_USERS):
        return "Only admins can change roles."
    account_id = _parse_id(args[0]) if len(args) == 2 else None
    if account_id is None:
        return "Usage: /role <account id> <Admin|User>"

    account = state.account_store.get_user(account_id)
    if account is None:
        return f"No account #{account_id}."

    account.role = Role.parse(args[1])
    async with state.account_lock:
        result = await state.account_store.update_user(account)
    if not result:
        return _outcome(result, "")
    return _outcome(result, f"Updated {_format_account(result.item)}")


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session and store totals.")
registry.register("reload", cmd_reload, help_text="Reload tasks and accounts from disk.")
registry.register("register", cmd_register, help_text="Create a user account: /register <name> <password>.")
registry.register("login", cmd_login, help_text="Sign in: /login <name> <password>.")
registry.register("logout", cmd_logout, help_text="Sign out.")
registry.register("tasks", cmd_tasks, help_text="List your tasks (/tasks all for admins).", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [due=..] [pri=H|M|L] [cat=..].")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.")
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("users", cmd_users, help_text="List accounts (admin).")
registry.register("useradd", cmd_useradd, help_text="Create an account (admin): /useradd <name> <pw> [role].")
registry.register("userdel", cmd_userdel, help_text="Delete an account and its tasks (admin).")
registry.register("passwd", cmd_passwd, help_text="Change your password, or reset one (admin).")
registry.register("role", cmd_role, help_text="Set a role (admin): /role <id> <Admin|User>.")
