"""Builders for domain records and tenant contexts used across the test suites."""

from uuid import UUID, uuid4

import bcrypt

from src.api.utils.jwt import create_access_token
from src.domain.context import PLATFORM_ORGANIZATION_ID, TenantContext
from src.domain.entities import (
    HOD_ROLES,
    Department,
    Material,
    Organization,
    Role,
    Task,
    TaskPriority,
    TaskStatus,
    TaskType,
    User,
)

DEFAULT_PASSWORD = "Password123!"
# Low cost factor keeps the suites fast
_PASSWORD_HASH = bcrypt.hashpw(DEFAULT_PASSWORD.encode("utf-8"), bcrypt.gensalt(4)).decode("utf-8")


def make_organization(name: str = "Acme", email: str = None, **fields) -> Organization:
    return Organization(
        name=name,
        email=email or f"{name.lower().replace(' ', '')}@example.com",
        phone="555-0100",
        address="1 Main Street",
        industry="Construction",
        **fields,
    )


def make_platform_organization() -> Organization:
    return make_organization(name="Platform", id=PLATFORM_ORGANIZATION_ID)


def make_department(organization_id: UUID, name: str = "Operations", **fields) -> Department:
    return Department(name=name, organization_id=organization_id, **fields)


def make_user(
    organization_id: UUID,
    department_id: UUID,
    role: Role = Role.user,
    email: str = None,
    position: str = None,
    **fields,
) -> User:
    return User(
        first_name="Test",
        last_name=role.value,
        email=email or f"{uuid4().hex[:8]}@example.com",
        password_hash=_PASSWORD_HASH,
        role=role,
        position=position or f"{role.value} {uuid4().hex[:4]}",
        organization_id=organization_id,
        department_id=department_id,
        **fields,
    )


def make_task(
    organization_id: UUID,
    department_id: UUID,
    created_by: UUID,
    task_type: TaskType = TaskType.assigned,
    details: dict = None,
    **fields,
) -> Task:
    if details is None:
        details = {"assigned_to": [str(created_by)]} if task_type == TaskType.assigned else {}
    fields.setdefault("status", TaskStatus.in_progress if task_type == TaskType.routine else TaskStatus.to_do)
    fields.setdefault("priority", TaskPriority.medium)
    return Task(
        title="Inspect site",
        task_type=task_type,
        details=details,
        organization_id=organization_id,
        department_id=department_id,
        created_by=created_by,
        **fields,
    )


def make_material(organization_id: UUID, created_by: UUID, name: str = "Cement", **fields) -> Material:
    return Material(name=name, category="Building", organization_id=organization_id, created_by=created_by, **fields)


def make_context(
    role: Role = Role.user,
    organization_id: UUID = None,
    department_id: UUID = None,
    actor_id: UUID = None,
    platform: bool = False,
) -> TenantContext:
    organization_id = PLATFORM_ORGANIZATION_ID if platform else (organization_id or uuid4())
    return TenantContext(
        actor_id=actor_id or uuid4(),
        tenant_id=organization_id,
        subtenant_id=department_id or uuid4(),
        role=role,
        is_hod=role in HOD_ROLES,
        is_platform_admin=platform,
    )


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}
