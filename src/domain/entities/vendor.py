"""
Vendor Entity
"""

from typing import Optional
from uuid import UUID

from sqlmodel import JSON, Column, Field, Index

from src.domain.base import Entity


class Vendor(Entity, table=True):
    """
    Vendor entity - external supplier used by project tasks.

    Business Rules:
    - Name is unique per organization among active vendors
    """

    __tablename__ = "vendors"

    name: str = Field(max_length=100)
    contact_person: str = Field(max_length=100)
    email: str = Field(max_length=255)
    phone: str = Field(max_length=20)
    address: Optional[str] = Field(default=None, max_length=200)
    service_categories: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    rating: int = Field(default=3, ge=1, le=5)

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    created_by: UUID = Field(nullable=False)

    __table_args__ = (Index("idx_vendor_org_name", "organization_id", "name"),)
