"""Interfaces layer for tasksync.

Adapters for user interaction. The only one is the Typer CLI, which plays
the role of the rendered views: it reads boards from the pipeline and sends
intents to the orchestrator.
"""

from tasksync.interfaces.cli import app

__all__ = ["app"]
