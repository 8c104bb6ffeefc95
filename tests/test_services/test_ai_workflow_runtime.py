"""
Tests for breed_advisor/services/ai_workflow_runtime.py.

What we test
------------
  - Step bookkeeping (status, timestamps, current step).
  - Event envelope sent to the emitter.
  - fail() marks the current step and the run as failed.
  - A raising emitter does not break the run.
"""

from __future__ import annotations

import asyncio

from breed_advisor.models.ai_workflow import (
    WorkflowStatus,
    WorkflowStepStatus,
    WorkflowType,
)
from breed_advisor.services.ai_workflow_runtime import WorkflowRuntime


def _runtime(emitter=None) -> WorkflowRuntime:
    return WorkflowRuntime(
        action="breed_recommendation",
        workflow_type=WorkflowType.BREED_RECOMMENDATION,
        emitter=emitter,
        user_id="farmer-1",
        request_id="req-1",
    )


def test_step_lifecycle_and_events():
    events: list[dict] = []

    async def emitter(message):
        events.append(message)

    async def scenario():
        runtime = _runtime(emitter)
        await runtime.start()
        await runtime.start_step("filter_breeds")
        await runtime.complete_step("filter_breeds", {"candidate_count": 2})
        await runtime.emit_result({"recommended_breeds": []})
        await runtime.complete({"breed_count": 0})
        return runtime

    runtime = asyncio.run(scenario())

    assert runtime.workflow.status == WorkflowStatus.COMPLETED
    assert runtime.current_step == "filter_breeds"
    step = runtime.workflow.steps["filter_breeds"]
    assert step.status == WorkflowStepStatus.COMPLETED
    assert step.started_at is not None and step.completed_at >= step.started_at

    assert [e["event"] for e in events] == [
        "workflow_started",
        "step_started",
        "step_completed",
        "result",
        "workflow_completed",
    ]
    assert events[2]["data"] == {"candidate_count": 2}
    assert events[3]["step"] == "filter_breeds"
    assert events[-1]["workflow_status"] == "completed"
    assert all(e["workflow_id"] == runtime.id for e in events)
    assert all(e["action"] == "breed_recommendation" for e in events)


def test_fail_marks_current_step():
    events: list[dict] = []

    async def emitter(message):
        events.append(message)

    async def scenario():
        runtime = _runtime(emitter)
        await runtime.start()
        await runtime.start_step("generate_breed_narratives")
        await runtime.fail("model offline", {"status_code": 503})
        return runtime

    runtime = asyncio.run(scenario())

    assert runtime.workflow.status == WorkflowStatus.FAILED
    step = runtime.workflow.steps["generate_breed_narratives"]
    assert step.status == WorkflowStepStatus.FAILED
    assert step.error == "model offline"
    assert events[-1]["event"] == "workflow_failed"
    assert events[-1]["step"] == "generate_breed_narratives"
    assert events[-1]["data"] == {"error": "model offline", "status_code": 503}


def test_fail_before_any_step():
    runtime = _runtime()
    asyncio.run(runtime.fail("boom"))
    assert runtime.workflow.status == WorkflowStatus.FAILED
    assert runtime.workflow.steps == {}


def test_broken_emitter_is_ignored():
    async def emitter(message):
        raise ConnectionError("socket gone")

    async def scenario():
        runtime = _runtime(emitter)
        await runtime.start()
        await runtime.complete({"breed_count": 0})
        return runtime

    assert asyncio.run(scenario()).workflow.status == WorkflowStatus.COMPLETED
