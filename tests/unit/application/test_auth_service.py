"""Tests for login, account creation and session persistence."""

import pytest

from tasksync.application import AuthService, SessionStore
from tasksync.domain.shared import Err, ErrorKind, Ok
from tasksync.infrastructure.storage import SessionRepository
from tests.fakes import FakeUserGateway


@pytest.fixture
def repository(tmp_path) -> SessionRepository:
    return SessionRepository(path=tmp_path / "session.json")


@pytest.fixture
def store(repository) -> SessionStore:
    return SessionStore(repository)


@pytest.mark.asyncio
async def test_login_known_user(store, repository):
    auth = AuthService(FakeUserGateway(["test@example.com"]), store)

    result = await auth.login("  Test@Example.com ")

    assert isinstance(result, Ok)
    assert store.is_authenticated
    assert store.get_current_email() == "test@example.com"
    assert store.get_token() == "token-test@example.com"
    assert repository.load().value.is_authenticated


@pytest.mark.asyncio
async def test_unknown_user_two_step_flow(store):
    gateway = FakeUserGateway()
    auth = AuthService(gateway, store)

    first = await auth.login("new@example.com")
    assert isinstance(first, Err)
    assert first.error.kind == ErrorKind.NOT_FOUND
    assert not store.is_authenticated

    created = await auth.create_missing_user("new@example.com")
    assert isinstance(created, Ok)
    assert not store.is_authenticated

    second = await auth.login("new@example.com")
    assert isinstance(second, Ok)
    assert store.get_current_email() == "new@example.com"
    assert [name for name, _ in gateway.calls] == ["login", "register", "login"]


@pytest.mark.asyncio
async def test_register_existing_user_is_refused(store):
    auth = AuthService(FakeUserGateway(["test@example.com"]), store)

    result = await auth.create_missing_user("test@example.com")

    assert result.error.kind == ErrorKind.APPLICATION
    assert result.error.message == "User already exists"


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["", "not-an-email"])
async def test_invalid_email_never_reaches_gateway(store, email):
    gateway = FakeUserGateway()
    auth = AuthService(gateway, store)

    result = await auth.login(email)

    assert result.error.kind == ErrorKind.VALIDATION
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_logout_clears_persisted_session(store, repository):
    auth = AuthService(FakeUserGateway(["test@example.com"]), store)
    await auth.login("test@example.com")

    auth.logout()

    assert not store.is_authenticated
    assert store.get_current_email() is None
    assert not repository.path.exists()


@pytest.mark.asyncio
async def test_restore_reads_saved_session(store, repository):
    auth = AuthService(FakeUserGateway(["test@example.com"]), store)
    await auth.login("test@example.com")

    restored = SessionStore.restore(repository)

    assert restored.get_current_email() == "test@example.com"
    assert restored.user.email == "test@example.com"
