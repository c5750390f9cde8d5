"""
Create Resource Use Case

Creates a tenant-owned record of any resource kind.
"""

from typing import Any, Dict
from uuid import UUID

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.soft_delete_service import SoftDeleteService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import TenantContext
from src.domain.entities import (
    ENTITY_MODELS,
    Action,
    AttachmentParent,
    EntityKind,
    Role,
    TaskPriority,
    TaskStatus,
    TaskType,
)
from src.domain.errors import LifecycleError, ReferentialIntegrityViolation
from src.domain.permissions import authorize, can_assign_role
from src.domain.task_variants import TaskVariantError, validate_task
from .policy import (
    check_department,
    check_users_in_organization,
    check_task_details,
    error_of,
    load_attachment_parent,
    load_parent_task,
    placement_allowed,
    to_payload,
)


class CreateResourceUseCase:
    """
    Business Rules:
    - The role must be allowed to create the kind at all
    - Records land in the actor's organization (platform admins may name another)
    - Other departments need crossDept write; new users never outrank their creator
    - Activities, comments and attachments inherit organization and department
      from the record they hang off, which the actor must be able to read
    - Only assigned and project tasks take activities
    - Task payloads are validated against their variant
    - Unique keys are checked among active records
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: TenantContext, kind: EntityKind, data: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        kind = EntityKind(kind)
        if not authorize(context, Action.create, kind):
            return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

        data = dict(data)
        lifecycle = SoftDeleteService(self.uow)
        async with self.uow:
            try:
                record = await self._build(context, kind, data)
            except (LifecycleError, TaskVariantError) as exc:
                return Return.err(error_of(exc))
            if record is None:
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

            try:
                await lifecycle.ensure_unique(kind, record)
            except LifecycleError as exc:
                return Return.err(error_of(exc))

            record = await self.uow.repository(kind).create(record)
            await self.uow.commit()
            return Return.ok(to_payload(record))

    async def _build(self, context: TenantContext, kind: EntityKind, data: Dict[str, Any]):
        """Returns None when the placement is not allowed"""
        model = ENTITY_MODELS[kind]
        organization_id = UUID(str(data.pop("organization_id", None) or context.tenant_id))

        if kind in (EntityKind.task_activity, EntityKind.task_comment):
            task = await load_parent_task(
                self.uow, context, data["task_id"], for_activity=kind == EntityKind.task_activity
            )
            if kind == EntityKind.task_comment and data.get("parent_comment_id"):
                parent = await self.uow.task_comments.get_by_id(data["parent_comment_id"])
                if parent is None or parent.task_id != task.id:
                    raise ReferentialIntegrityViolation("Parent comment not found on this task")
            return model(
                **data,
                organization_id=task.organization_id,
                department_id=task.department_id,
                created_by=context.actor_id,
            )

        if kind == EntityKind.attachment:
            parent = await load_attachment_parent(
                self.uow, context, AttachmentParent(data["attached_to_kind"]), data["attached_to"]
            )
            return model(
                **data,
                organization_id=parent.organization_id,
                department_id=getattr(parent, "department_id", None),
                uploaded_by=context.actor_id,
            )

        department_id = None
        if kind in (EntityKind.user, EntityKind.task):
            department_id = UUID(str(data.pop("department_id", None) or context.subtenant_id))

        if not placement_allowed(context, organization_id, department_id):
            return None
        await check_department(self.uow, organization_id, department_id)

        if kind == EntityKind.user:
            if not can_assign_role(context, data.get("role") or Role.user):
                return None
            password = data.pop("password")
            data["email"] = data["email"].lower()
            data["password_hash"] = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(12)).decode("utf-8")
            return model(**data, organization_id=organization_id, department_id=department_id)

        if kind == EntityKind.task:
            task_type = TaskType(data.pop("task_type"))
            status = TaskStatus(data.pop("status", None) or TaskStatus.to_do)
            priority = TaskPriority(data.pop("priority", None) or TaskPriority.medium)
            details = validate_task(task_type, status, priority, data.pop("details", None))
            await check_task_details(self.uow, organization_id, task_type, details)
            return model(
                **data,
                task_type=task_type,
                status=status,
                priority=priority,
                details=details,
                organization_id=organization_id,
                department_id=department_id,
                created_by=context.actor_id,
            )

        if kind == EntityKind.notification:
            await check_users_in_organization(self.uow, organization_id, [data["recipient_id"]])
            return model(**data, organization_id=organization_id, sender_id=context.actor_id)

        if kind == EntityKind.vendor and data.get("email"):
            data["email"] = data["email"].lower()

        return model(**data, organization_id=organization_id, created_by=context.actor_id)
