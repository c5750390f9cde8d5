"""
Platform-management guard shared by the organization use cases.
"""

from typing import Optional
from uuid import UUID

from src.libs.result import Error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import TenantContext
from src.domain.entities import Organization
from src.domain.permissions import is_platform_admin

FORBIDDEN = Error("FORBIDDEN", "Insufficient permissions")
NOT_FOUND = Error("NOT_FOUND", "Organization not found")


def platform_guard(context: TenantContext) -> Optional[Error]:
    """Only SuperAdmins of the platform organization manage organizations"""
    if not is_platform_admin(context):
        return FORBIDDEN
    return None


async def load_customer_organization(
    uow: UnitOfWork, context: TenantContext, organization_id: UUID, include_deleted: bool = False
) -> Optional[Organization]:
    """The platform organization itself is never returned"""
    if str(organization_id) == str(context.tenant_id):
        return None
    return await uow.organizations.get_by_id(organization_id, include_deleted=include_deleted)
