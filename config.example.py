# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit a real .env: the bootstrap admin password lives there.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODOLIST_APP_NAME": "App display name (default: todolist).",
    "TODOLIST_LOG_LEVEL": "Console logging level (default: INFO).",
    # Front end
    "TODOLIST_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "TODOLIST_DATA_DIR": "Local data directory for snapshots and logs (default: .local/todolist).",
    "TODOLIST_TASKS_DOCUMENT": "Task snapshot file name inside the data dir (default: tasks.json).",
    "TODOLIST_USERS_DOCUMENT": "Account snapshot file name inside the data dir (default: users.json).",
    # Account bootstrap
    "TODOLIST_ADMIN_USERNAME": "Username of the admin created when none exists (default: admin).",
    "TODOLIST_ADMIN_PASSWORD": "Password of that admin (default: 123).",
}
