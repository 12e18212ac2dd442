"""Shared utilities for tasksync CLI commands.

- Logging setup
- Service construction (settings, session, HTTP client, engine)
- Formatted output helpers (error, success, info)
- Board, task and statistics rendering
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import NoReturn

import typer

from tasksync.application import SessionStore, TaskEngine
from tasksync.config import Settings, get_settings
from tasksync.domain.shared import EngineError
from tasksync.domain.task import Task, TaskBoard, TaskStats, TaskStatus
from tasksync.infrastructure import ApiClient, SessionRepository, TaskGateway

STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To do",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.DONE: "Done",
}

STATUS_MARKS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "[ ]",
    TaskStatus.IN_PROGRESS: "[~]",
    TaskStatus.DONE: "[x]",
}


# =============================================================================
# Logging
# =============================================================================


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Configure root logging once for the CLI process."""
    resolved = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


# =============================================================================
# Services
# =============================================================================


def load_session() -> SessionStore:
    """Restore the saved session from disk."""
    return SessionStore.restore(SessionRepository())


def build_client(settings: Settings, store: SessionStore) -> ApiClient:
    """HTTP client that signs requests with the session token.

    A 401 from the task service signs the user out.
    """
    return ApiClient(
        settings.api_url,
        timeout=settings.timeout,
        token_provider=store.get_token,
        on_unauthorized=store.logout,
    )


def require_session(store: SessionStore) -> None:
    """Exit with a helpful message when nobody is signed in."""
    if store.is_authenticated:
        return
    print_error("Not signed in.")
    typer.echo("")
    typer.echo("Sign in first:  tasksync login you@example.com")
    raise typer.Exit(1)


@asynccontextmanager
async def open_engine() -> AsyncIterator[TaskEngine]:
    """Build a started engine for the signed-in user and tear it down after."""
    settings = get_settings()
    store = load_session()
    require_session(store)

    client = build_client(settings, store)
    engine = TaskEngine(TaskGateway(client), store)
    try:
        await engine.start()
        yield engine
    finally:
        engine.close()
        await client.aclose()


def fail(error: EngineError | str) -> NoReturn:
    """Print an error and exit with status 1."""
    print_error(str(error))
    raise typer.Exit(1)


def find_task(engine: TaskEngine, task_id: str) -> Task:
    """Look a task up in the engine cache, exiting if it is unknown."""
    task = engine.cache.get(task_id)
    if task is None:
        if engine.board.error:
            fail(engine.board.error)
        fail(f"No task with id {task_id}")
    return task


# =============================================================================
# Output
# =============================================================================


def print_error(msg: str) -> None:
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def format_task(task: Task) -> str:
    """One-line summary: ``[x] <id>  <title>``."""
    return f"{STATUS_MARKS[task.status]} {task.id}  {task.title}"


def format_stats(stats: TaskStats) -> str:
    return (
        f"{stats.total} task(s): {stats.todo} to do, "
        f"{stats.in_progress} in progress, {stats.done} done "
        f"({stats.completion_rate}% complete)"
    )


def print_board(board: TaskBoard, show_descriptions: bool = False) -> None:
    """Print the three partitions followed by the statistics."""
    print_separator()
    typer.echo("TASKS")
    print_separator()

    for status in TaskStatus:
        tasks = board.partition(status)
        typer.echo(f"\n## {STATUS_LABELS[status]} ({len(tasks)})")
        if not tasks:
            typer.echo("  (none)")
        for task in tasks:
            typer.echo(f"  {format_task(task)}")
            if show_descriptions and task.description:
                typer.echo(f"      {task.description}")

    typer.echo("")
    print_separator("-")
    typer.echo(format_stats(board.stats))
    if board.error:
        print_error(board.error)
