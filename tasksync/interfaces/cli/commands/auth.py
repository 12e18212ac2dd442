"""Account CLI commands: login, logout, whoami."""

import asyncio

import typer

from tasksync.application import AuthService
from tasksync.config import get_settings
from tasksync.domain.shared import Err, ErrorKind
from tasksync.infrastructure import UserGateway
from tasksync.interfaces.cli.common import (
    build_client,
    fail,
    load_session,
    print_info,
    print_success,
)

app = typer.Typer(help="Account commands")


async def _login(email: str, create: bool | None) -> None:
    store = load_session()
    async with build_client(get_settings(), store) as client:
        auth = AuthService(UserGateway(client), store)

        result = await auth.login(email)
        if isinstance(result, Err) and result.error.kind == ErrorKind.NOT_FOUND:
            if create is None:
                create = typer.confirm(f"No account for {email.strip()}. Create one?")
            if not create:
                fail(result.error)

            created = await auth.create_missing_user(email)
            if isinstance(created, Err):
                fail(created.error)
            print_info(f"Account created for {created.value.email}")
            result = await auth.login(email)

        if isinstance(result, Err):
            fail(result.error)
        print_success(f"Signed in as {result.value.email}")


@app.command("login")
def login(
    email: str = typer.Argument(..., help="Your email address"),
    create: bool | None = typer.Option(
        None,
        "--create/--no-create",
        help="Create the account if it does not exist (default: ask)",
    ),
) -> None:
    """Sign in with your email address."""
    asyncio.run(_login(email, create))


@app.command("logout")
def logout() -> None:
    """Sign out and forget the saved session."""
    store = load_session()
    if not store.is_authenticated:
        print_info("Not signed in")
        return
    email = store.get_current_email()
    store.logout()
    print_success(f"Signed out {email}")


@app.command("whoami")
def whoami() -> None:
    """Show the signed-in account."""
    store = load_session()
    if not store.is_authenticated:
        fail("Not signed in")
    typer.echo(store.get_current_email())
