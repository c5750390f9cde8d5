"""
Scope resolution.

Computes the relationship between the acting user and a target record:
own, ownDept, crossDept, crossOrg, or None when no scope applies. Pure and
store-independent; targets may be entities or plain mappings.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from src.domain.context import TenantContext
from src.domain.entities import EntityKind, ScopeLevel

# Field naming the owning actor, for kinds that do not use created_by
OWNER_FIELDS = {
    EntityKind.attachment: "uploaded_by",
    EntityKind.notification: "recipient_id",
}


@dataclass(frozen=True)
class ScopeTarget:
    actor_id: Optional[str] = None
    tenant_id: Optional[str] = None
    subtenant_id: Optional[str] = None


def _read(target: Any, name: str) -> Optional[str]:
    if isinstance(target, Mapping):
        value = target.get(name)
    else:
        value = getattr(target, name, None)
    return str(value) if value is not None else None


def scope_target_of(kind: EntityKind, target: Any) -> ScopeTarget:
    """Extract actor / tenant / sub-tenant references using the kind's field mapping"""
    if kind == EntityKind.organization:
        return ScopeTarget(tenant_id=_read(target, "id"))

    if kind == EntityKind.department:
        return ScopeTarget(
            tenant_id=_read(target, "organization_id"),
            subtenant_id=_read(target, "id"),
        )

    if kind == EntityKind.user:
        return ScopeTarget(
            actor_id=_read(target, "id"),
            tenant_id=_read(target, "organization_id"),
            subtenant_id=_read(target, "department_id"),
        )

    return ScopeTarget(
        actor_id=_read(target, OWNER_FIELDS.get(kind, "created_by")),
        tenant_id=_read(target, "organization_id"),
        subtenant_id=_read(target, "department_id"),
    )


def resolve_scope(context: TenantContext, target: ScopeTarget) -> Optional[ScopeLevel]:
    """
    First match wins:
    1. target owned by the actor -> own
    2. different organization -> crossOrg for platform actors, else None
    3. different department -> crossDept
    4. same department -> ownDept
    5. organization-level target in the actor's organization -> ownDept
    """
    actor_id = str(context.actor_id)
    tenant_id = str(context.tenant_id)
    subtenant_id = str(context.subtenant_id)

    if target.actor_id is not None and target.actor_id == actor_id:
        return ScopeLevel.own

    if target.tenant_id is not None and target.tenant_id != tenant_id:
        return ScopeLevel.cross_org if context.is_platform_admin else None

    if target.subtenant_id is not None and target.subtenant_id != subtenant_id:
        return ScopeLevel.cross_dept

    if target.subtenant_id is not None and target.subtenant_id == subtenant_id:
        return ScopeLevel.own_dept

    if target.tenant_id is not None and target.tenant_id == tenant_id:
        return ScopeLevel.own_dept

    return None
