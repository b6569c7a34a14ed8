"""
Task subsystem.

Components:
- task_models.py: data structures (TaskItem, Priority) and record conversion
- task_store.py: in-memory TaskStore persisted as a whole JSON snapshot
"""
