"""
Tenant context of the acting user.

Built once per request from the authenticated user; the scope resolver and
the authorization engine read nothing else about the actor.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.entities import HOD_ROLES, Role, User

PLATFORM_ORGANIZATION_ID = UUID("00000000-0000-0000-0000-000000000000")


@dataclass(frozen=True)
class TenantContext:
    actor_id: UUID
    tenant_id: UUID
    subtenant_id: UUID
    role: str
    is_hod: bool
    is_platform_admin: bool

    @classmethod
    def of(cls, user: User, platform_organization_id: UUID = PLATFORM_ORGANIZATION_ID) -> "TenantContext":
        return cls(
            actor_id=user.id,
            tenant_id=user.organization_id,
            subtenant_id=user.department_id,
            role=Role(user.role),
            is_hod=user.role in HOD_ROLES,
            is_platform_admin=str(user.organization_id) == str(platform_organization_id),
        )
