"""
Front-end connectors.

Components:
- console_connector.py: interactive REPL driving the command registry
"""
