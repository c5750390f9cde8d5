"""
Delete Resource Use Case

Soft delete with cascade through the lifecycle engine.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.event_sink import IEventSink
from src.app.services.soft_delete_service import SoftDeleteService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import TenantContext
from src.domain.entities import Action, EntityKind
from src.domain.errors import LifecycleError
from src.domain.permissions import authorize
from .policy import error_of


class DeleteResourceUseCase:
    """
    Business Rules:
    - The scope between actor and record must grant delete
    - Actors cannot delete their own account
    - Deleting an already deleted record fails with ALREADY_DELETED
    - Every descendant declared in the cascade table is tombstoned with the
      same timestamp; the transaction covers the whole tree
    """

    def __init__(self, uow: UnitOfWork, events: Optional[IEventSink] = None):
        self.uow = uow
        self.events = events

    async def execute(self, context: TenantContext, kind: EntityKind, entity_id: UUID) -> Result[Dict[str, Any]]:
        kind = EntityKind(kind)
        lifecycle = SoftDeleteService(self.uow, self.events)

        async with self.uow:
            record = await self.uow.repository(kind).get_by_id(entity_id, include_deleted=True)
            if record is None:
                return Return.err(Error("NOT_FOUND", f"{kind.value} not found"))

            if not authorize(context, Action.delete, kind, record):
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

            if kind == EntityKind.user and record.id == context.actor_id:
                return Return.err(Error("FORBIDDEN", "You cannot delete your own account"))

            try:
                report = await lifecycle.soft_delete(kind, record, actor_id=context.actor_id)
            except LifecycleError as exc:
                return Return.err(error_of(exc))

            await self.uow.commit()
            payload = {
                "id": str(record.id),
                "kind": kind.value,
                "deleted_at": report.deleted_at.isoformat(),
                "cascaded": report.cascaded,
            }

        await lifecycle.publish_pending()
        return Return.ok(payload)
