"""
Department Entity

Second isolation boundary inside an organization.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, Index

from src.domain.base import Entity


class Department(Entity, table=True):
    """
    Department entity - belongs to exactly one organization.

    Business Rules:
    - Name is unique per organization among active departments
    - Deleting cascades to the department's users and tasks
    """

    __tablename__ = "departments"

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    created_by: Optional[UUID] = Field(default=None)

    __table_args__ = (
        Index("idx_department_org_name", "organization_id", "name"),
        Index("idx_department_org_deleted", "organization_id", "is_deleted"),
    )
