"""Infrastructure layer for tasksync.

Wraps every I/O concern with Result-returning interfaces:

    HTTP:
        - ApiClient: httpx-based JSON client with bearer token attachment

    Gateways:
        - TaskGateway: task CRUD and status endpoints
        - UserGateway: login and registration
        - Envelope: uniform ``{success, data, message}`` response

    Storage:
        - JsonStorage: low-level JSON file I/O
        - SessionRepository: signed-in session persistence
"""

from tasksync.infrastructure.gateway import (
    Envelope,
    TaskGateway,
    TaskGatewayPort,
    UserGateway,
    UserGatewayPort,
)
from tasksync.infrastructure.http import ApiClient
from tasksync.infrastructure.storage import JsonStorage, SessionRepository

__all__ = [
    # HTTP
    "ApiClient",
    # Gateways
    "Envelope",
    "TaskGateway",
    "TaskGatewayPort",
    "UserGateway",
    "UserGatewayPort",
    # Storage
    "JsonStorage",
    "SessionRepository",
]
