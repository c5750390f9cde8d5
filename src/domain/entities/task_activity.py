"""
TaskActivity Entity

Progress entry logged against an assigned or project task.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, Index

from src.domain.base import Entity

from .enums import ActivityStatus


class TaskActivity(Entity, table=True):
    """
    TaskActivity entity.

    Business Rules:
    - Only AssignedTask and ProjectTask accept activities
    - Inherits organization and department from its task
    - Deleting cascades to its attachments
    """

    __tablename__ = "task_activities"

    description: str = Field(max_length=1000)
    status: ActivityStatus = Field(default=ActivityStatus.pending)
    notes: Optional[str] = Field(default=None, max_length=1000)

    task_id: UUID = Field(foreign_key="tasks.id", nullable=False, index=True)
    assigned_to: Optional[UUID] = Field(default=None)

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    department_id: UUID = Field(foreign_key="departments.id", nullable=False)
    created_by: UUID = Field(nullable=False, index=True)

    __table_args__ = (Index("idx_activity_task_created", "task_id", "created_at"),)
