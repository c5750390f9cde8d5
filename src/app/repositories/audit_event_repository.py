from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """Append-only audit trail of lifecycle and login events"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Record an event; rows are never updated afterwards"""
        pass

    @abstractmethod
    async def get_by_entity(self, entity_id: UUID) -> List[AuditEvent]:
        """Audit trail of one record, oldest first"""
        pass
