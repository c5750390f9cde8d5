"""
Event sink interface.

Lifecycle and presence changes are published here; delivery (sockets, push,
email) lives behind the implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.base import utcnow

ENTITY_TOMBSTONED = "entity_tombstoned"
ENTITY_RESTORED = "entity_restored"
ENTITY_PURGED = "entity_purged"
STATUS_CHANGED = "status_changed"


@dataclass(frozen=True)
class DomainEvent:
    name: str
    entity_kind: Optional[str] = None
    entity_id: Optional[UUID] = None
    organization_id: Optional[UUID] = None
    actor_id: Optional[UUID] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=utcnow)


class IEventSink(ABC):
    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Hand an event to the delivery layer. Must not raise on delivery failure."""
        pass


class NullEventSink(IEventSink):
    """Sink that drops every event"""

    async def publish(self, event: DomainEvent) -> None:
        return None
