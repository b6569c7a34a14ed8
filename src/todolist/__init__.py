"""
todolist: per-owner task lists and role-based accounts backed by JSON snapshots.

Packages:
- core/: shared store protocol (ports, notifier, snapshot base, results)
- storage/: durable document store implementations
- tasks/: TaskItem, Priority, TaskStore
- accounts/: Account, Role, capabilities, AccountStore
- cli/, connectors/: composition root and the console front end
"""

__version__ = "0.1.0"
