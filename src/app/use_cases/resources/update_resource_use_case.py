"""
Update Resource Use Case
"""

from typing import Any, Dict
from uuid import UUID

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.soft_delete_service import SoftDeleteService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.context import TenantContext
from src.domain.entities import Action, EntityKind, Role, TaskPriority, TaskStatus
from src.domain.errors import LifecycleError
from src.domain.permissions import authorize, can_assign_role, can_set_password
from src.domain.task_variants import TaskVariantError, validate_task
from .policy import (
    IMMUTABLE_FIELDS,
    check_department,
    check_task_details,
    error_of,
    placement_allowed,
    to_payload,
)


class UpdateResourceUseCase:
    """
    Business Rules:
    - Tombstoned records cannot be updated (NOT_FOUND)
    - The scope between actor and record must grant write
    - Ownership, tenancy and tombstone fields never change through updates
    - Role changes must pass can_assign_role (never on the actor's own record)
    - Only HOD roles reset another user's password
    - Moving a user or task to another department re-checks placement
    - Task payloads are re-validated; completed_at follows the status
    - Unique keys are re-checked excluding the record itself
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: TenantContext, kind: EntityKind, entity_id: UUID, changes: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        kind = EntityKind(kind)
        changes = {name: value for name, value in changes.items() if name not in IMMUTABLE_FIELDS}
        lifecycle = SoftDeleteService(self.uow)

        async with self.uow:
            repo = self.uow.repository(kind)
            record = await repo.get_by_id(entity_id)
            if record is None:
                return Return.err(Error("NOT_FOUND", f"{kind.value} not found"))

            if not authorize(context, Action.update, kind, record):
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

            try:
                allowed = await self._apply(context, kind, record, changes)
                if not allowed:
                    return Return.err(Error("FORBIDDEN", "Insufficient permissions"))
                await lifecycle.ensure_unique(kind, record, exclude_id=record.id)
            except (LifecycleError, TaskVariantError) as exc:
                return Return.err(error_of(exc))

            record.touch()
            record = await repo.update(record)
            await self.uow.commit()
            return Return.ok(to_payload(record))

    async def _apply(self, context: TenantContext, kind: EntityKind, record, changes: Dict[str, Any]) -> bool:
        if "department_id" in changes and kind in (EntityKind.user, EntityKind.task):
            department_id = changes["department_id"]
            if department_id != record.department_id:
                if not placement_allowed(context, record.organization_id, department_id):
                    return False
                await check_department(self.uow, record.organization_id, department_id)
        else:
            changes.pop("department_id", None)

        if kind == EntityKind.user:
            if changes.get("role") is not None and Role(changes["role"]) != Role(record.role):
                if not can_assign_role(context, changes["role"], record):
                    return False
            else:
                changes.pop("role", None)
            password = changes.pop("password", None)
            if password is not None:
                if not can_set_password(context, record):
                    return False
                record.password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(12)).decode("utf-8")
            if changes.get("email"):
                changes["email"] = changes["email"].lower()

        if kind == EntityKind.vendor and changes.get("email"):
            changes["email"] = changes["email"].lower()

        if kind == EntityKind.task:
            previous_status = record.status
            status = TaskStatus(changes.pop("status", None) or record.status)
            priority = TaskPriority(changes.pop("priority", None) or record.priority)
            details = changes.pop("details", None)
            details = {**(record.details or {}), **details} if details is not None else record.details
            record.details = validate_task(record.task_type, status, priority, details, previous_status)
            await check_task_details(self.uow, record.organization_id, record.task_type, record.details)
            record.status = status
            record.priority = priority

        if kind == EntityKind.task_comment and "content" in changes and changes["content"] != record.content:
            record.is_edited = True
            record.edited_at = utcnow()

        if kind == EntityKind.notification and changes.get("is_read") and not record.is_read:
            record.read_at = utcnow()

        for name, value in changes.items():
            setattr(record, name, value)
        return True
