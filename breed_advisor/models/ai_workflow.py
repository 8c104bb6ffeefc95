from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkflowStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class WorkflowStepStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class WorkflowType(str, Enum):
    BREED_RECOMMENDATION = "breed_recommendation"


class WorkflowStep(BaseModel):
    name: str
    status: WorkflowStepStatus = Field(default=WorkflowStepStatus.PENDING)
    started_at: Optional[datetime] = Field(default=None)
    completed_at: Optional[datetime] = Field(default=None)
    error: Optional[str] = Field(default=None)


class AIWorkflowRun(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    action: str
    workflow_type: WorkflowType
    status: WorkflowStatus = Field(default=WorkflowStatus.PENDING)
    user_id: Optional[str] = Field(default=None)
    request_id: Optional[str] = Field(default=None)
    current_step: Optional[str] = Field(default=None)
    steps: Dict[str, WorkflowStep] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AIWorkflowEvent(BaseModel):
    workflow_id: str
    action: str
    event_type: str
    step: Optional[str] = Field(default=None)
    payload: Dict[str, Any] = Field(default_factory=dict)
    ts: datetime = Field(default_factory=utcnow)
