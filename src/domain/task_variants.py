"""
Task variant payloads.

A task is a tagged union: `task_type` selects which payload model validates
`details`. Validation runs on every create and update so a stored task always
carries a payload matching its variant.
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from src.domain.base import utcnow
from src.domain.entities import TaskFrequency, TaskPriority, TaskStatus, TaskType


class TaskVariantError(Exception):
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class RoutineDetails(BaseModel):
    task_type: Literal[TaskType.routine] = TaskType.routine
    frequency: TaskFrequency = TaskFrequency.daily
    estimated_duration: Optional[int] = Field(default=None, ge=1, le=480)


class AssignedDetails(BaseModel):
    task_type: Literal[TaskType.assigned] = TaskType.assigned
    assigned_to: List[UUID] = Field(..., min_length=1)
    assigned_by: Optional[UUID] = None
    assigned_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class ProjectDetails(BaseModel):
    task_type: Literal[TaskType.project] = TaskType.project
    vendor_id: Optional[UUID] = None
    estimated_cost: float = Field(default=0, ge=0)
    actual_cost: float = Field(default=0, ge=0)
    start_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    project_manager_id: Optional[UUID] = None

    def cost_variance(self) -> float:
        """Percent over (positive) or under (negative) the estimate"""
        if self.estimated_cost == 0:
            return 0
        return (self.actual_cost - self.estimated_cost) / self.estimated_cost * 100


TaskDetails = Annotated[
    Union[RoutineDetails, AssignedDetails, ProjectDetails],
    Field(discriminator="task_type"),
]

_details_adapter = TypeAdapter(TaskDetails)

ACTIVITY_TASK_TYPES = (TaskType.assigned, TaskType.project)


def parse_details(task_type: TaskType, details: Optional[dict]) -> Union[RoutineDetails, AssignedDetails, ProjectDetails]:
    payload = dict(details or {})
    payload["task_type"] = TaskType(task_type)
    try:
        return _details_adapter.validate_python(payload)
    except ValidationError as exc:
        raise TaskVariantError("VALIDATION_ERROR", f"Invalid {TaskType(task_type).value} details: {exc.errors()[0]['msg']}")


def validate_task(
    task_type: TaskType,
    status: TaskStatus,
    priority: TaskPriority,
    details: Optional[dict],
    previous_status: Optional[TaskStatus] = None,
) -> dict:
    """
    Validate a task's variant rules and return the normalized JSON payload.

    Raises:
        TaskVariantError: INVALID_ROUTINE_TASK_STATUS, INVALID_ROUTINE_TASK_PRIORITY
            or VALIDATION_ERROR
    """
    parsed = parse_details(task_type, details)

    if isinstance(parsed, RoutineDetails):
        if status == TaskStatus.to_do:
            raise TaskVariantError("INVALID_ROUTINE_TASK_STATUS", 'RoutineTask cannot have "To Do" status')
        if priority == TaskPriority.low:
            raise TaskVariantError("INVALID_ROUTINE_TASK_PRIORITY", 'RoutineTask cannot have "Low" priority')
    else:
        if isinstance(parsed, AssignedDetails) and parsed.assigned_at is None:
            parsed.assigned_at = utcnow()
        if status != previous_status:
            if status == TaskStatus.completed and parsed.completed_at is None:
                parsed.completed_at = utcnow()
            elif status != TaskStatus.completed:
                parsed.completed_at = None

    return parsed.model_dump(mode="json", exclude={"task_type"})
