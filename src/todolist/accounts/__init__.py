"""
Account subsystem.

Components:
- account_models.py: Account, Role, Action, Capabilities (role -> capability lookup)
- account_store.py: AccountStore (session, unique usernames, last-admin protection)
"""
