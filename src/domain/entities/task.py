"""
Task Entity

One table for all task variants. `task_type` is the discriminator and
`details` holds the variant payload (see src.domain.task_variants).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import JSON, Column, DateTime, Field, Index

from src.domain.base import Entity

from .enums import TaskPriority, TaskStatus, TaskType


class Task(Entity, table=True):
    """
    Task entity - routine, assigned or project work item.

    Business Rules:
    - Department must belong to the task's organization
    - Variant payload is validated on every create and update
    - Deleting cascades to activities, comments and attachments
    """

    __tablename__ = "tasks"

    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: TaskStatus = Field(default=TaskStatus.to_do)
    priority: TaskPriority = Field(default=TaskPriority.medium)
    due_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    task_type: TaskType = Field(nullable=False)
    details: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    department_id: UUID = Field(foreign_key="departments.id", nullable=False, index=True)
    created_by: UUID = Field(nullable=False, index=True)

    __table_args__ = (
        Index("idx_task_org_dept", "organization_id", "department_id"),
        Index("idx_task_status_priority", "status", "priority"),
        Index("idx_task_type", "task_type"),
    )
