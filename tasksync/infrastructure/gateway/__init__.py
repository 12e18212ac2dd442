"""Gateways to the remote task and user service."""

from tasksync.infrastructure.gateway.envelope import Envelope, parse_envelope
from tasksync.infrastructure.gateway.task_gateway import (
    STATUS_ENDPOINTS,
    TaskGateway,
    TaskGatewayPort,
)
from tasksync.infrastructure.gateway.user_gateway import UserGateway, UserGatewayPort

__all__ = [
    "Envelope",
    "parse_envelope",
    "STATUS_ENDPOINTS",
    "TaskGateway",
    "TaskGatewayPort",
    "UserGateway",
    "UserGatewayPort",
]
