"""CLI command groups for tasksync.

- auth: login, logout, whoami
- task: list, stats, add, move, edit, delete

Each group is a Typer app registered with the main app using
``app.add_typer()``; the most common commands also get top-level shortcuts.
"""

from tasksync.interfaces.cli.commands import auth, task

__all__ = ["auth", "task"]
