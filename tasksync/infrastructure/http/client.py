"""Async JSON client for the task service.

Wraps ``httpx.AsyncClient`` and returns Result values instead of raising.
Transport problems (connection errors, timeouts, non-2xx statuses, bodies
that are not JSON) all come back as ``Err(EngineError)`` with kind
TRANSPORT. Whatever JSON the server returned is handed back untouched in an
``Ok``; interpreting it is the gateway's job.
"""

import logging
from collections.abc import Callable
from typing import Any, Optional

import httpx

from tasksync.domain.shared import EngineError, Err, Ok, Result

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

# Endpoints that never carry a bearer token and never trigger a logout
AUTH_ENDPOINTS = ("/auth/login", "/auth/register")

TokenProvider = Callable[[], Optional[str]]


def is_auth_endpoint(path: str) -> bool:
    return any(endpoint in path for endpoint in AUTH_ENDPOINTS)


def _body_message(response: httpx.Response) -> str | None:
    """Pull ``message`` out of an error body, if the body has one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"] or None
    return None


def describe_status(response: httpx.Response) -> str:
    """Map an error status to the message shown to the user."""
    status = response.status_code
    if status == 400:
        return _body_message(response) or "Invalid data"
    if status == 401:
        return "Unauthorized"
    if status == 404:
        return "Not found"
    if status == 500:
        return "Internal server error"
    return _body_message(response) or f"Error {status}: {response.reason_phrase}"


class ApiClient:
    """JSON-over-HTTP client with bearer token attachment.

    Example:
        client = ApiClient("http://localhost:3000/api", token_provider=session.get_token)
        result = await client.request("GET", "/task/", params={"userEmail": email})
        if isinstance(result, Ok):
            payload = result.value
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        token_provider: TokenProvider | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Service root, e.g. ``http://localhost:3000/api``.
            timeout: Per-request timeout in seconds.
            token_provider: Returns the current bearer token, or None.
            on_unauthorized: Called when a non-auth endpoint answers 401.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _headers_for(self, path: str) -> dict[str, str]:
        if self._token_provider is None or is_auth_endpoint(path):
            return {}
        token = self._token_provider()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> Result[Any, EngineError]:
        """Send one request and decode the JSON response.

        Args:
            method: HTTP method.
            path: Path relative to ``base_url``, starting with ``/``.
            json: Optional JSON body.
            params: Optional query parameters.

        Returns:
            Ok(decoded JSON) on a 2xx response, Err(TRANSPORT) otherwise.
        """
        url = f"{self.base_url}{path}"
        try:
            client = await self._get_client()
            response = await client.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers_for(path),
            )
        except httpx.ConnectError:
            logger.error(f"Cannot connect to task service at {self.base_url}")
            return Err(EngineError.transport(f"Cannot connect to {self.base_url}"))
        except httpx.TimeoutException:
            logger.error(f"{method} {path} timed out after {self.timeout}s")
            return Err(EngineError.transport("The request timed out"))
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            return Err(EngineError.transport(f"Network error: {e}"))

        if not response.is_success:
            if response.status_code == 401 and not is_auth_endpoint(path):
                logger.warning("Received 401, signing out")
                if self._on_unauthorized is not None:
                    self._on_unauthorized()
            message = describe_status(response)
            logger.error(f"{method} {path} -> {response.status_code}: {message}")
            return Err(EngineError.transport(message, status_code=response.status_code))

        try:
            return Ok(response.json())
        except ValueError:
            logger.error(f"{method} {path} returned a non-JSON body")
            return Err(
                EngineError.transport(
                    "Invalid response from server", status_code=response.status_code
                )
            )
