"""Tests for the Typer CLI.

Gateways are swapped for the in-memory fakes; the session file lives in a
temporary TASKSYNC_HOME.
"""

import json

import pytest
from typer.testing import CliRunner

from tasksync import __version__
from tasksync.domain.task import TaskStatus
from tasksync.domain.user import AuthState, User
from tasksync.infrastructure.storage import SessionRepository
from tasksync.interfaces.cli import app
from tests.fakes import TIMESTAMP, FakeTaskGateway, FakeUserGateway

runner = CliRunner()


@pytest.fixture
def signed_in(tasksync_home):
    user = User(id="1", email="a@x.com", created_at=TIMESTAMP)
    SessionRepository().save(AuthState.signed_in(user, "token-123"))
    return user


@pytest.fixture
def fake_tasks(monkeypatch, sample_tasks) -> FakeTaskGateway:
    gateway = FakeTaskGateway(sample_tasks)
    monkeypatch.setattr(
        "tasksync.interfaces.cli.common.TaskGateway", lambda client: gateway
    )
    return gateway


@pytest.fixture
def fake_users(monkeypatch) -> FakeUserGateway:
    gateway = FakeUserGateway(["known@example.com"])
    monkeypatch.setattr(
        "tasksync.interfaces.cli.commands.auth.UserGateway", lambda client: gateway
    )
    return gateway


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


# ─────────────────────────────────────────────────────────────────────────────
# Account
# ─────────────────────────────────────────────────────────────────────────────


def test_whoami_signed_out(tasksync_home):
    result = runner.invoke(app, ["whoami"])

    assert result.exit_code == 1
    assert "Not signed in" in result.output


def test_whoami_signed_in(signed_in):
    result = runner.invoke(app, ["whoami"])

    assert result.exit_code == 0
    assert "a@x.com" in result.output


def test_login_known_account(tasksync_home, fake_users):
    result = runner.invoke(app, ["login", "Known@Example.com"])

    assert result.exit_code == 0
    assert "Signed in as known@example.com" in result.output
    assert SessionRepository().load().value.email == "known@example.com"


def test_login_creates_missing_account_after_confirm(tasksync_home, fake_users):
    result = runner.invoke(app, ["login", "new@example.com"], input="y\n")

    assert result.exit_code == 0
    assert "Account created" in result.output
    assert [name for name, _ in fake_users.calls] == ["login", "register", "login"]


def test_login_declined(tasksync_home, fake_users):
    result = runner.invoke(app, ["login", "new@example.com", "--no-create"])

    assert result.exit_code == 1
    assert "No account for new@example.com" in result.output
    assert not SessionRepository().load().value.is_authenticated


def test_logout(signed_in):
    result = runner.invoke(app, ["logout"])

    assert result.exit_code == 0
    assert not SessionRepository().load().value.is_authenticated


# ─────────────────────────────────────────────────────────────────────────────
# Tasks
# ─────────────────────────────────────────────────────────────────────────────


def test_board_requires_session(tasksync_home, fake_tasks):
    result = runner.invoke(app, ["board"])

    assert result.exit_code == 1
    assert fake_tasks.calls == []


def test_board(signed_in, fake_tasks):
    result = runner.invoke(app, ["board"])

    assert result.exit_code == 0
    assert "Test Todo Task" in result.output
    assert "33% complete" in result.output


def test_stats_json(signed_in, fake_tasks):
    result = runner.invoke(app, ["task", "stats", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "total": 3,
        "todo": 1,
        "inProgress": 1,
        "done": 1,
        "completionRate": 33,
    }


def test_board_failure_exits_nonzero(signed_in, fake_tasks):
    fake_tasks.fail("list_by_owner")

    result = runner.invoke(app, ["board"])

    assert result.exit_code == 1
    assert "Failed to load tasks" in result.output


def test_add(signed_in, fake_tasks):
    result = runner.invoke(app, ["add", "Write report", "-d", "Quarterly"])

    assert result.exit_code == 0
    created = [task for task in fake_tasks.tasks.values() if task.title == "Write report"]
    assert len(created) == 1
    assert created[0].description == "Quarterly"


def test_add_rejects_short_title(signed_in, fake_tasks):
    result = runner.invoke(app, ["add", "ab"])

    assert result.exit_code == 1
    assert fake_tasks.count("create") == 0


def test_move_accepts_dashes(signed_in, fake_tasks):
    result = runner.invoke(app, ["move", "1", "in-progress"])

    assert result.exit_code == 0
    assert fake_tasks.tasks["1"].status == TaskStatus.IN_PROGRESS


def test_done_unknown_task(signed_in, fake_tasks):
    result = runner.invoke(app, ["done", "404"])

    assert result.exit_code == 1
    assert "No task with id 404" in result.output


def test_delete_with_yes(signed_in, fake_tasks):
    result = runner.invoke(app, ["task", "delete", "3", "--yes"])

    assert result.exit_code == 0
    assert "3" not in fake_tasks.tasks
