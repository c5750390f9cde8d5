"""
AuditEvent Entity

Immutable log of lifecycle and authentication events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of tombstone, restore, purge and login events.

    Business Rules:
    - Immutable (never updated or deleted, never tombstoned)
    - organization_id nullable for platform-wide events (purge sweeps)
    - actor_id nullable for system actions
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: Optional[UUID] = Field(default=None, index=True)
    actor_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "entity_tombstoned", "login"
    entity_kind: Optional[str] = Field(default=None, max_length=50)
    entity_id: Optional[UUID] = Field(default=None)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_org_action", "organization_id", "action"),
    )
