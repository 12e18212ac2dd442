"""Authentication service.

Signing in for an unknown email is a two-step flow driven by the caller:

    result = await auth.login(email)
    if isinstance(result, Err) and result.error.kind == ErrorKind.NOT_FOUND:
        if user_agrees:
            created = await auth.create_missing_user(email)
            if isinstance(created, Ok):
                result = await auth.login(email)

The service never asks for confirmation itself.
"""

import logging

from tasksync.application.session import SessionStore
from tasksync.domain.shared import EngineError, Err, ErrorKind, Ok, Result
from tasksync.domain.user import User, is_valid_email, normalize_email
from tasksync.infrastructure.gateway import UserGatewayPort

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed"
REGISTER_FAILED = "Could not create the account"


def _check_email(email: str) -> Result[str, EngineError]:
    normalized = normalize_email(email)
    if not normalized:
        return Err(EngineError.validation("Email is required"))
    if not is_valid_email(normalized):
        return Err(EngineError.validation(f"Invalid email address: {email.strip()}"))
    return Ok(normalized)


class AuthService:
    """Login, account creation and logout against a ``SessionStore``."""

    def __init__(self, gateway: UserGatewayPort, store: SessionStore) -> None:
        self._gateway = gateway
        self._store = store

    @property
    def session(self) -> SessionStore:
        return self._store

    async def login(self, email: str) -> Result[User, EngineError]:
        """Sign in with an email address.

        Returns:
            Ok(User) and a saved session on success. Err with kind NOT_FOUND
            when the account does not exist, VALIDATION for a malformed
            email, APPLICATION or TRANSPORT otherwise.
        """
        checked = _check_email(email)
        if isinstance(checked, Err):
            return checked

        result = await self._gateway.login(checked.value)
        if isinstance(result, Err):
            if result.error.status_code == 404:
                return Err(
                    EngineError(
                        kind=ErrorKind.NOT_FOUND,
                        message=f"No account for {checked.value}",
                        status_code=404,
                    )
                )
            return result

        envelope = result.value
        if not envelope.success or envelope.data is None:
            return Err(EngineError.application(envelope.message, LOGIN_FAILED))

        self._store.sign_in(envelope.data.user, envelope.data.token)
        logger.info(f"Signed in as {envelope.data.user.email}")
        return Ok(envelope.data.user)

    async def create_missing_user(self, email: str) -> Result[User, EngineError]:
        """Register an account for ``email``. Does not sign in."""
        checked = _check_email(email)
        if isinstance(checked, Err):
            return checked

        result = await self._gateway.register(checked.value)
        if isinstance(result, Err):
            return result

        envelope = result.value
        if not envelope.success or envelope.data is None:
            return Err(EngineError.application(envelope.message, REGISTER_FAILED))

        logger.info(f"Registered {envelope.data.email}")
        return Ok(envelope.data)

    def logout(self) -> None:
        """Clear the session, in memory and on disk."""
        self._store.logout()
