"""Remote user and authentication gateway."""

from typing import Protocol

from tasksync.domain.shared import EngineError, Err, Result
from tasksync.domain.user import LoginData, User, normalize_email
from tasksync.infrastructure.gateway.envelope import Envelope, parse_envelope
from tasksync.infrastructure.http import ApiClient

LoginResult = Result[Envelope[LoginData], EngineError]
RegisterResult = Result[Envelope[User], EngineError]


class UserGatewayPort(Protocol):
    async def login(self, email: str) -> LoginResult: ...

    async def register(self, email: str) -> RegisterResult: ...


class UserGateway:
    """Login and registration calls. Emails are normalized before sending."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def login(self, email: str) -> LoginResult:
        """POST /auth/login"""
        result = await self._client.request(
            "POST", "/auth/login", json={"email": normalize_email(email)}
        )
        if isinstance(result, Err):
            return result
        return parse_envelope(result.value, LoginData)

    async def register(self, email: str) -> RegisterResult:
        """POST /user"""
        result = await self._client.request(
            "POST", "/user", json={"email": normalize_email(email)}
        )
        if isinstance(result, Err):
            return result
        return parse_envelope(result.value, User)
