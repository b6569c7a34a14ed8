# src/todolist/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _prompt(state: AppState) -> str:
    user = state.account_store.get_current_user()
    return f"{user.username}> " if user is not None else "> "


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type /help for commands, /login admin <password> to start. Use /exit to quit.\n")

    def emit(text: str) -> None:
        # Immediate user-visible feedback for long operations.
        print(f"[{_ts_local()}] {text}", flush=True)

    def on_tasks_changed() -> None:
        logger.debug("Task store changed (total=%s)", state.task_store.count())

    def on_accounts_changed() -> None:
        logger.debug("Account store changed (logged_in=%s)", state.account_store.is_logged_in())

    task_token = state.task_store.subscribe(on_tasks_changed)
    account_token = state.account_store.subscribe(on_accounts_changed)

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(input, _prompt(state))).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                reply = await command_registry.handle(state, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is None:
                reply = "Commands start with '/'. Use /help to list them."
            _print_ts(reply)
    finally:
        state.task_store.unsubscribe(task_token)
        state.account_store.unsubscribe(account_token)

    logger.info("Console connector finished.")
