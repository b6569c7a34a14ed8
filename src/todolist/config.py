# src/todolist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read from disk at import time except the local .env.
- Tests build their own settings objects instead of importing this one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODOLIST"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Front end ----
    console_enabled: bool

    # ---- Local data (ignored by git) ----
    data_dir: Path
    tasks_document: str
    users_document: str

    # ---- Account bootstrap ----
    bootstrap_admin_username: str
    bootstrap_admin_password: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todolist").strip() or "todolist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todolist"))
        tasks_document = _env(_k("TASKS_DOCUMENT"), "tasks.json").strip() or "tasks.json"
        users_document = _env(_k("USERS_DOCUMENT"), "users.json").strip() or "users.json"

        # Used only when no admin account exists yet; change the password after first login.
        bootstrap_admin_username = _env(_k("ADMIN_USERNAME"), "admin").strip() or "admin"
        bootstrap_admin_password = _env(_k("ADMIN_PASSWORD"), "123").strip() or "123"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            tasks_document=tasks_document,
            users_document=users_document,
            bootstrap_admin_username=bootstrap_admin_username,
            bootstrap_admin_password=bootstrap_admin_password,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
