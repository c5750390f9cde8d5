"""
Notification Entity
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index

from src.domain.base import Entity

from .enums import EntityKind, NotificationPriority, NotificationType


class Notification(Entity, table=True):
    """
    Notification entity - addressed to one recipient.

    Business Rules:
    - Shortest retention of all kinds once deleted (30 days)
    - sender_id is None for system notifications
    """

    __tablename__ = "notifications"

    title: str = Field(max_length=200)
    message: str = Field(max_length=1000)
    type: NotificationType = Field(nullable=False)
    priority: NotificationPriority = Field(default=NotificationPriority.medium)

    recipient_id: UUID = Field(nullable=False, index=True)
    sender_id: Optional[UUID] = Field(default=None)
    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False, index=True)

    related_entity_id: Optional[UUID] = Field(default=None)
    related_entity_kind: Optional[EntityKind] = Field(default=None)

    is_read: bool = Field(default=False)
    read_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_notification_recipient_read", "recipient_id", "is_read"),)
