"""HTTP transport for tasksync."""

from tasksync.infrastructure.http.client import (
    AUTH_ENDPOINTS,
    DEFAULT_TIMEOUT,
    ApiClient,
    describe_status,
    is_auth_endpoint,
)

__all__ = [
    "ApiClient",
    "AUTH_ENDPOINTS",
    "DEFAULT_TIMEOUT",
    "describe_status",
    "is_auth_endpoint",
]
