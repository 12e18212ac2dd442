"""Tests for the HTTP client and the task/user gateways.

Requests go through ``httpx.MockTransport`` so the exact URL, method,
headers and body of every call can be checked.
"""

import json

import httpx
import pytest

from tasksync.domain.shared import Err, ErrorKind, Ok
from tasksync.domain.task import TaskCreateRequest, TaskStatus
from tasksync.infrastructure import ApiClient, TaskGateway, UserGateway
from tasksync.infrastructure.gateway.envelope import parse_envelope
from tests.fakes import TIMESTAMP, make_task

BASE_URL = "http://test.local/api"

TASK_JSON = {
    "id": "123",
    "title": "X",
    "description": "Y",
    "status": "todo",
    "userEmail": "a@x.com",
    "createdAt": TIMESTAMP,
}


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, body: object = None, content: bytes | None = None):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.body = body if body is not None else {"success": True, "data": TASK_JSON}
        self.content = content

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(recorder: Recorder, token: str | None = "token-123", on_unauthorized=None):
    return ApiClient(
        BASE_URL,
        token_provider=lambda: token,
        on_unauthorized=on_unauthorized,
        transport=httpx.MockTransport(recorder),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Task endpoints
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_by_owner_request():
    recorder = Recorder(body={"success": True, "data": [TASK_JSON]})
    async with make_client(recorder) as client:
        result = await TaskGateway(client).list_by_owner("a@x.com")

    assert recorder.last.method == "GET"
    assert recorder.last.url.path == "/api/task/"
    assert recorder.last.url.params["userEmail"] == "a@x.com"
    assert recorder.last.headers["Authorization"] == "Bearer token-123"
    assert isinstance(result, Ok)
    assert result.value.data[0].id == "123"


@pytest.mark.asyncio
async def test_create_sends_wire_body():
    recorder = Recorder()
    async with make_client(recorder) as client:
        request = TaskCreateRequest(title="X", description="Y", user_email="a@x.com")
        result = await TaskGateway(client).create(request)

    assert recorder.last.method == "POST"
    assert str(recorder.last.url) == f"{BASE_URL}/task"
    assert json.loads(recorder.last.content) == {
        "title": "X",
        "description": "Y",
        "status": "todo",
        "userEmail": "a@x.com",
    }
    assert result.value.data.user_email == "a@x.com"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "suffix"),
    [
        (TaskStatus.TODO, "todo"),
        (TaskStatus.IN_PROGRESS, "in-progress"),
        (TaskStatus.DONE, "done"),
    ],
)
async def test_set_status_endpoints(status, suffix):
    recorder = Recorder()
    async with make_client(recorder) as client:
        await TaskGateway(client).set_status("123", status)

    assert recorder.last.method == "PATCH"
    assert str(recorder.last.url) == f"{BASE_URL}/task/123/{suffix}"


@pytest.mark.asyncio
async def test_update_and_delete():
    recorder = Recorder()
    task = make_task("123", title="X", description="Y")
    async with make_client(recorder) as client:
        gateway = TaskGateway(client)
        await gateway.update(task)
        await gateway.delete("123")

    put, delete = recorder.requests
    assert put.method == "PUT"
    assert str(put.url) == f"{BASE_URL}/task/123"
    assert json.loads(put.content)["title"] == "X"
    assert delete.method == "DELETE"
    assert str(delete.url) == f"{BASE_URL}/task/123"


@pytest.mark.asyncio
async def test_unsuccessful_envelope_is_ok():
    recorder = Recorder(body={"success": False, "message": "Task not allowed", "data": None})
    async with make_client(recorder) as client:
        result = await TaskGateway(client).delete("123")

    assert isinstance(result, Ok)
    assert not result.value.success
    assert result.value.message == "Task not allowed"


# ─────────────────────────────────────────────────────────────────────────────
# Transport failures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status_code", "message"),
    [(404, "Not found"), (500, "Internal server error")],
)
async def test_error_status_is_transport_error(status_code, message):
    recorder = Recorder(status_code=status_code, body={"message": "ignored"})
    async with make_client(recorder) as client:
        result = await TaskGateway(client).delete("123")

    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.TRANSPORT
    assert result.error.status_code == status_code
    assert result.error.message == message


@pytest.mark.asyncio
async def test_bad_request_uses_body_message():
    recorder = Recorder(status_code=400, body={"message": "Title is required"})
    async with make_client(recorder) as client:
        result = await TaskGateway(client).create(TaskCreateRequest(title="", user_email="a@x.com"))

    assert result.error.message == "Title is required"


@pytest.mark.asyncio
async def test_unauthorized_signs_out():
    signed_out = []
    recorder = Recorder(status_code=401, body={"message": "expired"})
    async with make_client(recorder, on_unauthorized=lambda: signed_out.append(True)) as client:
        result = await TaskGateway(client).list_by_owner("a@x.com")

    assert result.error.status_code == 401
    assert signed_out == [True]


@pytest.mark.asyncio
async def test_non_json_body():
    recorder = Recorder(content=b"<html>oops</html>")
    async with make_client(recorder) as client:
        result = await TaskGateway(client).list_by_owner("a@x.com")

    assert isinstance(result, Err)
    assert result.error.message == "Invalid response from server"


@pytest.mark.asyncio
async def test_connect_error():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ApiClient(BASE_URL, transport=httpx.MockTransport(refuse))
    result = await TaskGateway(client).list_by_owner("a@x.com")
    await client.aclose()

    assert result.error.kind == ErrorKind.TRANSPORT
    assert result.error.status_code is None


def test_malformed_envelope():
    assert isinstance(parse_envelope({"data": []}, list), Err)
    assert isinstance(parse_envelope(["not", "an", "envelope"], list), Err)


# ─────────────────────────────────────────────────────────────────────────────
# User endpoints
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_login_has_no_bearer_and_no_logout():
    signed_out = []
    recorder = Recorder(status_code=401, body={"message": "nope"})
    async with make_client(recorder, on_unauthorized=lambda: signed_out.append(True)) as client:
        await UserGateway(client).login("  Test@Example.com ")

    assert str(recorder.last.url) == f"{BASE_URL}/auth/login"
    assert "Authorization" not in recorder.last.headers
    assert json.loads(recorder.last.content) == {"email": "test@example.com"}
    assert signed_out == []


@pytest.mark.asyncio
async def test_register_and_login_payloads():
    user = {"id": "1", "email": "test@example.com", "createdAt": TIMESTAMP}
    recorder = Recorder(
        body={"success": True, "data": {"user": user, "token": "jwt", "expiresIn": "1h"}}
    )
    async with make_client(recorder, token=None) as client:
        login = await UserGateway(client).login("test@example.com")

    assert login.value.data.token == "jwt"
    assert login.value.data.user.email == "test@example.com"

    recorder = Recorder(body={"success": True, "data": user})
    async with make_client(recorder, token=None) as client:
        registered = await UserGateway(client).register("Test@Example.com")

    assert recorder.last.method == "POST"
    assert str(recorder.last.url) == f"{BASE_URL}/user"
    assert registered.value.data.id == "1"
