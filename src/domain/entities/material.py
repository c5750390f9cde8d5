"""
Material Entity
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, Index

from src.domain.base import Entity

from .enums import MaterialUnit


class Material(Entity, table=True):
    """
    Material entity - organization-level inventory item.

    Business Rules:
    - Name is unique per organization among active materials
    """

    __tablename__ = "materials"

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: str = Field(max_length=50)
    unit: MaterialUnit = Field(default=MaterialUnit.piece)
    unit_price: float = Field(default=0, ge=0)

    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)
    created_by: UUID = Field(nullable=False)

    __table_args__ = (Index("idx_material_org_name", "organization_id", "name"),)
