"""
Organization Entity

Root isolation boundary. One reserved id is the platform organization.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, Index

from src.domain.base import Entity

from .enums import OrganizationSize


class Organization(Entity, table=True):
    """
    Organization entity - a customer tenant.

    Business Rules:
    - Name and email are unique among active organizations
    - The platform organization is never listed to customers
    - Deleting cascades to departments, users, tasks, materials, vendors
      and notifications
    """

    __tablename__ = "organizations"

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    email: str = Field(max_length=255)
    phone: str = Field(max_length=20)
    address: str = Field(max_length=200)
    size: OrganizationSize = Field(default=OrganizationSize.small)
    industry: str = Field(max_length=100)
    logo: Optional[str] = Field(default=None, max_length=500)

    created_by: Optional[UUID] = Field(default=None)

    __table_args__ = (
        Index("idx_organization_name", "name"),
        Index("idx_organization_size", "size"),
        Index("idx_organization_deleted_created", "is_deleted", "created_at"),
    )
