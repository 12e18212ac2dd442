"""Task CLI commands.

Every command opens an engine for the signed-in user (which performs the
start-up refresh), runs one intent and prints the result.
"""

import asyncio

import typer

from tasksync.domain.shared import Err
from tasksync.domain.task import TaskDraft
from tasksync.interfaces.cli.common import (
    fail,
    find_task,
    format_stats,
    open_engine,
    print_board,
    print_success,
)

app = typer.Typer(help="Task commands")


def _normalize_status(raw: str) -> str:
    """Accept ``in-progress`` as well as ``in_progress`` on the command line."""
    return raw.strip().lower().replace("-", "_")


# =============================================================================
# Views
# =============================================================================


async def _show_board(descriptions: bool) -> None:
    async with open_engine() as engine:
        print_board(engine.board, show_descriptions=descriptions)
        if engine.board.error:
            raise typer.Exit(1)


@app.command("list")
def list_tasks(
    descriptions: bool = typer.Option(
        False, "--descriptions", "-d", help="Show task descriptions"
    ),
) -> None:
    """Show tasks grouped by status, with statistics."""
    asyncio.run(_show_board(descriptions))


async def _show_stats(as_json: bool) -> None:
    async with open_engine() as engine:
        board = engine.board
        if board.error:
            fail(board.error)
        if as_json:
            typer.echo(board.stats.model_dump_json(by_alias=True))
        else:
            typer.echo(format_stats(board.stats))


@app.command("stats")
def stats(
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
) -> None:
    """Show task statistics."""
    asyncio.run(_show_stats(as_json))


# =============================================================================
# Mutations
# =============================================================================


async def _add(title: str, description: str) -> None:
    async with open_engine() as engine:
        result = await engine.orchestrator.create(
            TaskDraft(title=title, description=description)
        )
        if isinstance(result, Err):
            fail(result.error)
        print_success(f"Created {result.value.id}: {result.value.title}")
        typer.echo(format_stats(engine.board.stats))


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title (3-100 characters)"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
) -> None:
    """Create a task in the to-do bucket."""
    asyncio.run(_add(title, description))


async def _move(task_id: str, status: str) -> None:
    async with open_engine() as engine:
        task = find_task(engine, task_id)
        result = await engine.orchestrator.change_status(task, _normalize_status(status))
        if isinstance(result, Err):
            fail(result.error)
        print_success(f"{task.title} -> {result.value.status.value}")


@app.command("move")
def move(
    task_id: str = typer.Argument(..., help="Task ID"),
    status: str = typer.Argument(..., help="todo, in-progress or done"),
) -> None:
    """Move a task to another status."""
    asyncio.run(_move(task_id, status))


async def _edit(task_id: str, title: str | None, description: str | None) -> None:
    async with open_engine() as engine:
        task = find_task(engine, task_id)
        draft = TaskDraft(
            title=task.title if title is None else title,
            description=task.description if description is None else description,
        )
        result = await engine.orchestrator.update(task, draft)
        if isinstance(result, Err):
            fail(result.error)
        print_success(f"Updated {result.value.id}: {result.value.title}")


@app.command("edit")
def edit(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description"
    ),
) -> None:
    """Change a task's title or description."""
    if title is None and description is None:
        fail("Nothing to change: pass --title and/or --description")
    asyncio.run(_edit(task_id, title, description))


async def _delete(task_id: str, yes: bool) -> None:
    async with open_engine() as engine:
        task = find_task(engine, task_id)
        if not yes and not typer.confirm(f"Delete '{task.title}'?"):
            typer.echo("Cancelled")
            return
        result = await engine.orchestrator.delete(task)
        if isinstance(result, Err):
            fail(result.error)
        print_success(f"Deleted {task.id}: {task.title}")


@app.command("delete")
def delete(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a task."""
    asyncio.run(_delete(task_id, yes))
