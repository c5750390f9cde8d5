"""
TaskComment Entity

Threaded comment on a task.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import JSON, Column, DateTime, Field, Index

from src.domain.base import Entity

from .enums import CommentType


class TaskComment(Entity, table=True):
    """
    TaskComment entity.

    Business Rules:
    - Inherits organization and department from its task
    - parent_comment_id threads replies; deleting a comment deletes its
      replies and attachments
    """

    __tablename__ = "task_comments"

    content: str = Field(max_length=2000)
    comment_type: CommentType = Field(default=CommentType.general)
    mentions: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    task_id: UUID = Field(foreign_key="tasks.id", nullable=False, index=True)
    parent_comment_id: Optional[UUID] = Field(default=None, index=True)

    is_edited: bool = Field(default=False)
    edited_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    department_id: UUID = Field(foreign_key="departments.id", nullable=False)
    created_by: UUID = Field(nullable=False, index=True)

    __table_args__ = (Index("idx_comment_task_parent", "task_id", "parent_comment_id"),)
