"""CLI interface for tasksync using Typer.

Usage:
    tasksync login you@example.com    # Sign in (offers to create the account)
    tasksync board                    # Tasks by status, with statistics
    tasksync add "Write report"       # New task in to-do
    tasksync move <id> in-progress    # Change status
    tasksync done <id>                # Mark done

The CLI is structured as:
- app: Main Typer application
- commands/: command groups (auth, task)
- common.py: shared helpers for CLI commands
- main.py: entry point that runs the app
"""

from typing import Optional

import typer

from tasksync import __version__
from tasksync.config import get_settings
from tasksync.interfaces.cli.commands import auth, task
from tasksync.interfaces.cli.common import setup_logging

app = typer.Typer(
    name="tasksync",
    help="Track tasks in three buckets: to do, in progress, done",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tasksync version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """tasksync - a task tracking client."""
    setup_logging(get_settings().log_level, verbose=verbose)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(auth.app, name="auth")
app.add_typer(task.app, name="task")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("login")
def login(
    email: str = typer.Argument(..., help="Your email address"),
    create: Optional[bool] = typer.Option(
        None,
        "--create/--no-create",
        help="Create the account if it does not exist (default: ask)",
    ),
) -> None:
    """Sign in (shortcut for 'auth login')."""
    auth.login(email=email, create=create)


@app.command("logout")
def logout() -> None:
    """Sign out (shortcut for 'auth logout')."""
    auth.logout()


@app.command("whoami")
def whoami() -> None:
    """Show the signed-in account (shortcut for 'auth whoami')."""
    auth.whoami()


@app.command("board")
def board(
    descriptions: bool = typer.Option(
        False, "--descriptions", "-d", help="Show task descriptions"
    ),
) -> None:
    """Show tasks by status (shortcut for 'task list')."""
    task.list_tasks(descriptions=descriptions)


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title (3-100 characters)"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
) -> None:
    """Create a task (shortcut for 'task add')."""
    task.add(title=title, description=description)


@app.command("move")
def move(
    task_id: str = typer.Argument(..., help="Task ID"),
    status: str = typer.Argument(..., help="todo, in-progress or done"),
) -> None:
    """Change a task's status (shortcut for 'task move')."""
    task.move(task_id=task_id, status=status)


@app.command("done")
def done(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Mark a task done (shortcut for 'task move <id> done')."""
    task.move(task_id=task_id, status="done")


__all__ = ["app"]
