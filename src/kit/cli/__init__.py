"""Command-line interface for Kit.

A single ``kit`` entry point: everything after the command name is handed to
the dispatcher, so operations and shortcuts parse their own arguments.

Architecture:
    Uses Click for the toolkit-level flags (--search, --list-categories,
    --validate, --config, --debug, --version). The command registry is imported
    lazily inside the command for fast startup.
"""

from .main import cli, main

__all__ = ["cli", "main"]
