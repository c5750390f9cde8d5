"""
Restore Resource Use Case
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
from .policy import error_of, to_payload


class RestoreResourceUseCase:
    """
    Business Rules:
    - The scope between actor and record must grant restore (write bucket)
    - Restoring an active record fails with NOT_DELETED
    - An active record holding the same unique key blocks the restore
      (RESTORE_CONFLICT); the active record is left untouched
    - Owning records must be active (REFERENTIAL_INTEGRITY_VIOLATION)
    - Descendants are not restored
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

            if not authorize(context, Action.restore, kind, record):
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

            try:
                record = await lifecycle.restore(kind, record, actor_id=context.actor_id)
            except LifecycleError as exc:
                return Return.err(error_of(exc))

            await self.uow.commit()
            payload = to_payload(record)

        await lifecycle.publish_pending()
        return Return.ok(payload)
