from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from breed_advisor.models.ai_workflow import (
    AIWorkflowEvent,
    AIWorkflowRun,
    WorkflowStatus,
    WorkflowStep,
    WorkflowStepStatus,
    WorkflowType,
    utcnow,
)

logger = logging.getLogger(__name__)

StreamEmitter = Callable[[dict[str, Any]], Awaitable[None]]


class WorkflowRuntime:
    """Tracks the steps of one recommendation run and streams them to an optional emitter.

    Events: workflow_started, step_started, step_completed, result,
    workflow_completed, workflow_failed.
    """

    def __init__(
        self,
        *,
        action: str,
        workflow_type: WorkflowType,
        emitter: Optional[StreamEmitter] = None,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        self.emitter = emitter
        self.workflow = AIWorkflowRun(
            action=action,
            workflow_type=workflow_type,
            user_id=user_id,
            request_id=request_id,
            metadata=metadata or {},
        )

    @property
    def id(self) -> str:
        return self.workflow.id

    @property
    def current_step(self) -> Optional[str]:
        return self.workflow.current_step

    async def start(self) -> None:
        self._set_status(WorkflowStatus.RUNNING)
        await self._emit("workflow_started", {"status": WorkflowStatus.RUNNING.value})

    async def start_step(self, step: str) -> None:
        state = self._step(step)
        state.status = WorkflowStepStatus.IN_PROGRESS
        state.started_at = utcnow()
        await self._emit("step_started", step=step)

    async def complete_step(self, step: str, payload: Optional[dict[str, Any]] = None) -> None:
        self._finish_step(step, WorkflowStepStatus.COMPLETED)
        await self._emit("step_completed", payload, step=step)

    async def emit_result(self, data: dict[str, Any]) -> None:
        await self._emit("result", data, step=self.current_step)

    async def complete(self, payload: dict[str, Any]) -> None:
        self._set_status(WorkflowStatus.COMPLETED)
        await self._emit("workflow_completed", payload, step=self.current_step)

    async def fail(self, error_message: str, payload: Optional[dict[str, Any]] = None) -> None:
        """Marks the current step (if any) and the run as failed."""
        step = self.current_step
        if step is not None:
            self._finish_step(step, WorkflowStepStatus.FAILED).error = error_message
        self._set_status(WorkflowStatus.FAILED)
        await self._emit("workflow_failed", {"error": error_message, **(payload or {})}, step=step)

    def _step(self, step: str) -> WorkflowStep:
        state = self.workflow.steps.setdefault(step, WorkflowStep(name=step))
        self.workflow.current_step = step
        self.workflow.updated_at = utcnow()
        return state

    def _finish_step(self, step: str, status: WorkflowStepStatus) -> WorkflowStep:
        state = self._step(step)
        state.status = status
        state.completed_at = utcnow()
        if state.started_at is None:
            state.started_at = state.completed_at
        return state

    def _set_status(self, status: WorkflowStatus) -> None:
        self.workflow.status = status
        self.workflow.updated_at = utcnow()

    async def _emit(
        self,
        event_type: str,
        payload: Optional[dict[str, Any]] = None,
        *,
        step: Optional[str] = None,
    ) -> None:
        event = AIWorkflowEvent(
            workflow_id=self.workflow.id,
            action=self.workflow.action,
            event_type=event_type,
            step=step,
            payload=payload or {},
        )
        logger.debug("workflow %s %s event=%s step=%s", event.action, event.workflow_id, event_type, step)

        if self.emitter is None:
            return
        try:
            await self.emitter(
                {
                    "action": event.action,
                    "event": event.event_type,
                    "workflow_id": event.workflow_id,
                    "workflow_status": self.workflow.status.value,
                    "step": event.step,
                    "data": event.payload,
                    "ts": event.ts.isoformat(),
                }
            )
        except Exception:
            # Streaming is best effort; the run carries on without the client.
            logger.warning("Could not stream workflow event %s for %s", event_type, event.workflow_id)
