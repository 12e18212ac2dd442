"""Task engine facade.

Wires one cache, one error slot, the view pipeline and the mutation
orchestrator around a gateway and a session context.

Example:
    engine = TaskEngine(gateway, session)
    engine.pipeline.subscribe(render)
    await engine.start()
    await engine.orchestrator.create(TaskDraft(title="Write report"))
    engine.close()
"""

import logging

from tasksync.application.cache import TaskCache
from tasksync.application.error_slot import ErrorSlot
from tasksync.application.orchestrator import MutationOrchestrator
from tasksync.application.pipeline import ViewPipeline
from tasksync.application.session import SessionContext
from tasksync.domain.task import TaskBoard
from tasksync.infrastructure.gateway import TaskGatewayPort

logger = logging.getLogger(__name__)


class TaskEngine:
    """Client-side task state synchronization engine."""

    def __init__(self, gateway: TaskGatewayPort, session: SessionContext) -> None:
        self.cache = TaskCache()
        self.errors = ErrorSlot()
        self.pipeline = ViewPipeline(gateway, session, self.cache, self.errors)
        self.orchestrator = MutationOrchestrator(
            gateway, session, self.cache, self.pipeline, self.errors
        )

    @property
    def board(self) -> TaskBoard:
        return self.pipeline.board

    async def start(self) -> TaskBoard:
        """Fire the start-up refresh signal."""
        logger.debug("engine: initial refresh")
        return await self.pipeline.refresh()

    async def refresh(self) -> TaskBoard:
        return await self.pipeline.refresh()

    def close(self) -> None:
        """Release every subscription held by the engine."""
        self.orchestrator.close()
        self.pipeline.close()
