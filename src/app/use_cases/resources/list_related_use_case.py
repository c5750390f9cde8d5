"""
List Related Use Case

Children of one record, read through the repositories' relationship queries
(comments of a task, users of a department, ...).
"""

from typing import Any, Dict
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import TenantContext
from src.domain.entities import Action, AttachmentParent, EntityKind
from src.domain.permissions import authorize
from .policy import to_payload

# parent kind -> relation name -> (child kind, loader)
RELATIONS = {
    EntityKind.task: {
        "comments": (EntityKind.task_comment, lambda uow, task_id: uow.tasks.get_comments(task_id)),
        "activities": (EntityKind.task_activity, lambda uow, task_id: uow.tasks.get_activities(task_id)),
        "attachments": (
            EntityKind.attachment,
            lambda uow, task_id: uow.tasks.get_attachments(task_id, AttachmentParent.task),
        ),
    },
    EntityKind.department: {
        "users": (EntityKind.user, lambda uow, department_id: uow.users.get_by_department(department_id)),
        "hods": (EntityKind.user, lambda uow, department_id: uow.users.get_hods(department_id)),
    },
}


class ListRelatedUseCase:
    """
    Business Rules:
    - The parent must be active and readable by the actor
    - The actor's role must be allowed to read the child kind
    - Children the actor cannot read are left out
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: TenantContext, kind: EntityKind, entity_id: UUID, relation: str
    ) -> Result[Dict[str, Any]]:
        kind = EntityKind(kind)
        child_kind, load = RELATIONS.get(kind, {}).get(relation, (None, None))
        if child_kind is None:
            return Return.err(Error("NOT_FOUND", f"{kind.value} has no {relation}"))
        if not authorize(context, Action.read, child_kind):
            return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

        async with self.uow:
            parent = await self.uow.repository(kind).get_by_id(entity_id)
            if parent is None:
                return Return.err(Error("NOT_FOUND", f"{kind.value} not found"))
            if not authorize(context, Action.read, kind, parent):
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

            children = await load(self.uow, parent.id)
            items = [to_payload(child) for child in children if authorize(context, Action.read, child_kind, child)]
            return Return.ok({"items": items, "total": len(items)})
