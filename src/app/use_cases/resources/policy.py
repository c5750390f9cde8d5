"""
Shared rules for tenant-owned resources.

Placement (which organization / department a new or moved record may live
in), list visibility filters, parent reference checks and serialization.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.libs.result import Error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import TenantContext
from src.domain.entities import (
    Action,
    AttachmentParent,
    EntityKind,
    Permission,
    ScopeLevel,
    TaskType,
)
from src.domain.errors import ReferentialIntegrityViolation
from src.domain.permissions import SCOPE_PERMISSIONS, authorize
from src.domain.scope import OWNER_FIELDS
from src.domain.task_variants import ACTIVITY_TASK_TYPES, TaskVariantError, parse_details

RESOURCE_KINDS = (
    EntityKind.department,
    EntityKind.user,
    EntityKind.task,
    EntityKind.task_activity,
    EntityKind.task_comment,
    EntityKind.material,
    EntityKind.vendor,
    EntityKind.attachment,
    EntityKind.notification,
)

# Kinds whose rows carry their own department_id
DEPARTMENT_SCOPED = (
    EntityKind.user,
    EntityKind.task,
    EntityKind.task_activity,
    EntityKind.task_comment,
)

SEARCH_FIELDS = {
    EntityKind.department: ("name", "description"),
    EntityKind.user: ("first_name", "last_name", "email", "position"),
    EntityKind.task: ("title", "description"),
    EntityKind.task_activity: ("description",),
    EntityKind.task_comment: ("content",),
    EntityKind.material: ("name", "description"),
    EntityKind.vendor: ("name", "contact_person", "email"),
    EntityKind.attachment: ("original_name", "description"),
    EntityKind.notification: ("title", "message"),
}

IMMUTABLE_FIELDS = frozenset(
    {
        "id",
        "organization_id",
        "created_by",
        "uploaded_by",
        "task_id",
        "task_type",
        "attached_to",
        "attached_to_kind",
        "is_deleted",
        "deleted_at",
        "deleted_by",
        "created_at",
        "updated_at",
        "password_hash",
        "refresh_token_hash",
        "refresh_token_expires_at",
    }
)

SENSITIVE_FIELDS = {"password_hash", "refresh_token_hash", "refresh_token_expires_at"}

PARENT_KINDS = {
    AttachmentParent.task: EntityKind.task,
    AttachmentParent.task_activity: EntityKind.task_activity,
    AttachmentParent.task_comment: EntityKind.task_comment,
}


def to_payload(entity: Any) -> Dict[str, Any]:
    return entity.model_dump(mode="json", exclude=SENSITIVE_FIELDS)


def placement_allowed(context: TenantContext, organization_id: UUID, department_id: Optional[UUID]) -> bool:
    """
    A record may be placed in the actor's organization (any organization for
    platform admins). Another department needs write at crossDept scope.
    """
    if str(organization_id) != str(context.tenant_id) and not context.is_platform_admin:
        return False
    if department_id is not None and str(department_id) != str(context.subtenant_id):
        cross_dept = SCOPE_PERMISSIONS.get(context.role, {}).get(ScopeLevel.cross_dept, set())
        return Permission.write in cross_dept
    return True


def visibility_filters(context: TenantContext, kind: EntityKind) -> Dict[str, Any]:
    """
    Query filters matching what the actor may read.

    Roles that cannot read across departments only see their own department
    for department-scoped kinds; notifications are always the actor's own.
    """
    filters: Dict[str, Any] = {"organization_id": context.tenant_id}
    if kind == EntityKind.notification:
        filters[OWNER_FIELDS[kind]] = context.actor_id
        return filters
    cross_dept = SCOPE_PERMISSIONS.get(context.role, {}).get(ScopeLevel.cross_dept, set())
    if Permission.read not in cross_dept:
        if kind in DEPARTMENT_SCOPED:
            filters["department_id"] = context.subtenant_id
        elif kind == EntityKind.department:
            filters["id"] = context.subtenant_id
    return filters


async def check_department(uow: UnitOfWork, organization_id: UUID, department_id: Optional[UUID]) -> None:
    if department_id is None:
        return
    department = await uow.departments.get_by_id(department_id)
    if department is None or department.organization_id != organization_id:
        raise ReferentialIntegrityViolation("Department does not belong to the organization")


async def check_users_in_organization(uow: UnitOfWork, organization_id: UUID, user_ids) -> None:
    ids = [UUID(str(user_id)) for user_id in user_ids]
    if not ids:
        return
    found = await uow.users.count({"id": ids, "organization_id": organization_id})
    if found != len(set(ids)):
        raise ReferentialIntegrityViolation("Referenced users must be active members of the organization")


async def check_task_details(uow: UnitOfWork, organization_id: UUID, task_type: TaskType, details: dict) -> None:
    parsed = parse_details(task_type, details)
    assigned_to = getattr(parsed, "assigned_to", None)
    if assigned_to:
        await check_users_in_organization(uow, organization_id, assigned_to)
    vendor_id = getattr(parsed, "vendor_id", None)
    if vendor_id is not None:
        vendor = await uow.vendors.get_by_id(vendor_id)
        if vendor is None or vendor.organization_id != organization_id:
            raise ReferentialIntegrityViolation("Vendor does not belong to the organization")


async def load_parent_task(
    uow: UnitOfWork, context: TenantContext, task_id: UUID, for_activity: bool = False
):
    """Active task the actor may read; activities need an assigned or project task"""
    task = await uow.tasks.get_by_id(task_id)
    if task is None:
        raise ReferentialIntegrityViolation("Task not found")
    if not authorize(context, Action.read, EntityKind.task, task):
        raise ReferentialIntegrityViolation("Task not found")
    if for_activity and task.task_type not in ACTIVITY_TASK_TYPES:
        raise TaskVariantError("VALIDATION_ERROR", "Activities can only be added to assigned or project tasks")
    return task


async def load_attachment_parent(uow: UnitOfWork, context: TenantContext, parent_kind: AttachmentParent, parent_id: UUID):
    kind = PARENT_KINDS[AttachmentParent(parent_kind)]
    parent = await uow.repository(kind).get_by_id(parent_id)
    if parent is None or not authorize(context, Action.read, kind, parent):
        raise ReferentialIntegrityViolation(f"{kind.value} not found")
    return parent


def error_of(exc) -> Error:
    """Error for a LifecycleError or TaskVariantError"""
    details = {"fields": list(exc.fields)} if getattr(exc, "fields", None) else {}
    return Error(exc.code, exc.message, details=details)
