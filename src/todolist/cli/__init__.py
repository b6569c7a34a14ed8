"""
Command-line front end.

Components:
- bootstrap.py: composition root (settings -> document store -> stores -> AppState)
- commands.py: slash-command registry and handlers
- main.py: `todolist` console script
"""
