"""
Get Resource Use Case
"""

from typing import Any, Dict
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import TenantContext
from src.domain.entities import Action, EntityKind
from src.domain.permissions import authorize
from .policy import to_payload


class GetResourceUseCase:
    """
    Business Rules:
    - Tombstoned records are only visible to roles that may restore the kind
    - The scope between actor and record must grant read
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: TenantContext, kind: EntityKind, entity_id: UUID, include_deleted: bool = False
    ) -> Result[Dict[str, Any]]:
        kind = EntityKind(kind)
        if include_deleted and not authorize(context, Action.restore, kind):
            return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

        async with self.uow:
            record = await self.uow.repository(kind).get_by_id(entity_id, include_deleted=include_deleted)
            if record is None:
                return Return.err(Error("NOT_FOUND", f"{kind.value} not found"))

            if not authorize(context, Action.read, kind, record):
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

            return Return.ok(to_payload(record))
