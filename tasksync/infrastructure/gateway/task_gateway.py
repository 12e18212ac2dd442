"""Remote task gateway.

Stateless CRUD calls against the task service. Every method returns
``Ok(Envelope)`` when the server answered (successfully or not) and
``Err(EngineError)`` when the request itself failed.
"""

import logging
from typing import Protocol

from tasksync.domain.shared import EngineError, Err, Result
from tasksync.domain.task import Task, TaskCreateRequest, TaskStatus
from tasksync.infrastructure.gateway.envelope import Envelope, parse_envelope
from tasksync.infrastructure.http import ApiClient

logger = logging.getLogger(__name__)

# Path suffix of the status endpoint for each target status
STATUS_ENDPOINTS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "todo",
    TaskStatus.IN_PROGRESS: "in-progress",
    TaskStatus.DONE: "done",
}

TaskResult = Result[Envelope[Task], EngineError]
TaskListResult = Result[Envelope[list[Task]], EngineError]


class TaskGatewayPort(Protocol):
    """The gateway surface the engine depends on."""

    async def create(self, request: TaskCreateRequest) -> TaskResult: ...

    async def list_by_owner(self, user_email: str) -> TaskListResult: ...

    async def set_status(self, task_id: str, status: TaskStatus) -> TaskResult: ...

    async def update(self, task: Task) -> TaskResult: ...

    async def delete(self, task_id: str) -> TaskResult: ...


class TaskGateway:
    """HTTP implementation of ``TaskGatewayPort``.

    Example:
        gateway = TaskGateway(ApiClient(settings.api_url))
        result = await gateway.list_by_owner("a@x.com")
        if isinstance(result, Ok) and result.value.success:
            tasks = result.value.data
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def _call(
        self,
        method: str,
        path: str,
        data_type: object,
        **kwargs: object,
    ) -> Result[Envelope, EngineError]:
        result = await self._client.request(method, path, **kwargs)
        if isinstance(result, Err):
            return result
        return parse_envelope(result.value, data_type)

    async def create(self, request: TaskCreateRequest) -> TaskResult:
        """POST /task"""
        return await self._call("POST", "/task", Task, json=request.to_wire())

    async def list_by_owner(self, user_email: str) -> TaskListResult:
        """GET /task/?userEmail=<email>"""
        return await self._call(
            "GET", "/task/", list[Task], params={"userEmail": user_email}
        )

    async def _patch_status(self, task_id: str, status: TaskStatus) -> TaskResult:
        suffix = STATUS_ENDPOINTS[status]
        return await self._call("PATCH", f"/task/{task_id}/{suffix}", Task, json={})

    async def move_to_in_progress(self, task_id: str) -> TaskResult:
        """PATCH /task/<id>/in-progress"""
        return await self._patch_status(task_id, TaskStatus.IN_PROGRESS)

    async def mark_as_done(self, task_id: str) -> TaskResult:
        """PATCH /task/<id>/done"""
        return await self._patch_status(task_id, TaskStatus.DONE)

    async def move_back_to_todo(self, task_id: str) -> TaskResult:
        """PATCH /task/<id>/todo"""
        return await self._patch_status(task_id, TaskStatus.TODO)

    async def set_status(self, task_id: str, status: TaskStatus) -> TaskResult:
        """Dispatch to the endpoint matching ``status``."""
        if status == TaskStatus.TODO:
            return await self.move_back_to_todo(task_id)
        if status == TaskStatus.IN_PROGRESS:
            return await self.move_to_in_progress(task_id)
        return await self.mark_as_done(task_id)

    async def update(self, task: Task) -> TaskResult:
        """PUT /task/<id> with the full task."""
        return await self._call("PUT", f"/task/{task.id}", Task, json=task.to_wire())

    async def delete(self, task_id: str) -> TaskResult:
        """DELETE /task/<id>"""
        return await self._call("DELETE", f"/task/{task_id}", Task)
