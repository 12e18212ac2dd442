"""Shared test fixtures for tasksync tests.

- An owner with three tasks, one per status
- An in-memory task gateway serving them
- A wired TaskEngine for that owner
- An isolated config directory (TASKSYNC_HOME)
"""

from pathlib import Path

import pytest

from tasksync.application import StaticSession, TaskEngine
from tasksync.domain.task import TaskStatus

from .fakes import FakeTaskGateway, make_task

OWNER = "a@x.com"


# ─────────────────────────────────────────────────────────────────────────────
# Task data
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def owner() -> str:
    return OWNER


@pytest.fixture
def sample_tasks():
    """One task per bucket for ``a@x.com``."""
    return [
        make_task("1", TaskStatus.TODO, title="Test Todo Task"),
        make_task("2", TaskStatus.IN_PROGRESS, title="Test In Progress Task"),
        make_task("3", TaskStatus.DONE, title="Test Done Task"),
    ]


@pytest.fixture
def gateway(sample_tasks) -> FakeTaskGateway:
    return FakeTaskGateway(sample_tasks)


@pytest.fixture
def session() -> StaticSession:
    return StaticSession(OWNER, "token-123")


@pytest.fixture
def engine(gateway, session):
    engine = TaskEngine(gateway, session)
    yield engine
    engine.close()


# ─────────────────────────────────────────────────────────────────────────────
# Filesystem isolation
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def tasksync_home(tmp_path, monkeypatch) -> Path:
    """Point the config directory at a temporary folder."""
    home = tmp_path / "tasksync-home"
    monkeypatch.setenv("TASKSYNC_HOME", str(home))
    for name in ("TASKSYNC_API_URL", "TASKSYNC_TIMEOUT", "TASKSYNC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return home
