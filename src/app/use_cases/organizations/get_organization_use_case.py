"""
Get Organization Use Case
"""

from typing import Any, Dict
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.resources.policy import to_payload
from src.domain.context import TenantContext
from .guard import NOT_FOUND, load_customer_organization, platform_guard


class GetOrganizationUseCase:
    """Organization with its active department and user counts"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: TenantContext, organization_id: UUID, include_deleted: bool = False
    ) -> Result[Dict[str, Any]]:
        error = platform_guard(context)
        if error:
            return Return.err(error)

        async with self.uow:
            organization = await load_customer_organization(
                self.uow, context, organization_id, include_deleted=include_deleted
            )
            if organization is None:
                return Return.err(NOT_FOUND)

            payload = to_payload(organization)
            payload["department_count"] = await self.uow.departments.count({"organization_id": organization.id})
            payload["user_count"] = await self.uow.users.count({"organization_id": organization.id})
            return Return.ok(payload)
