"""
Attachment Entity

File metadata hung off a task, activity or comment. Blob hosting is external.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, Index

from src.domain.base import Entity

from .enums import AttachmentParent, FileCategory


class Attachment(Entity, table=True):
    """
    Attachment entity - polymorphic on (attached_to_kind, attached_to).
    """

    __tablename__ = "attachments"

    filename: str = Field(max_length=255)
    original_name: str = Field(max_length=255)
    mime_type: str = Field(max_length=100)
    file_size: int = Field(gt=0)
    url: str = Field(max_length=500)
    storage_key: str = Field(max_length=255)
    file_category: FileCategory = Field(default=FileCategory.other)
    description: Optional[str] = Field(default=None, max_length=500)

    attached_to: UUID = Field(nullable=False, index=True)
    attached_to_kind: AttachmentParent = Field(nullable=False)

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    department_id: Optional[UUID] = Field(default=None)
    uploaded_by: UUID = Field(nullable=False, index=True)

    __table_args__ = (Index("idx_attachment_parent", "attached_to", "attached_to_kind"),)
