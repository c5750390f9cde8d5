"""
Load Context Use Case

Turns verified access-token claims into the tenant context every
authorization decision reads.
"""

from typing import Any, Dict
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import PLATFORM_ORGANIZATION_ID, TenantContext
from .account import deactivation_error


class LoadContextUseCase:
    """
    Use case for loading the acting user's tenant context.

    Business Rules:
    - Claims provide user_id, email, organization_id, department_id
    - User must exist and match the claims, else UNAUTHENTICATED
    - User, organization and department must be active, else ACCOUNT_DEACTIVATED
    - isPlatformAdmin is derived from the organization, never from claims
    """

    def __init__(self, uow: UnitOfWork, platform_organization_id: UUID = PLATFORM_ORGANIZATION_ID):
        self.uow = uow
        self.platform_organization_id = platform_organization_id

    async def execute(self, claims: Dict[str, Any]) -> Result[TenantContext]:
        try:
            user_id = UUID(str(claims["user_id"]))
        except (KeyError, ValueError):
            return Return.err(Error("UNAUTHENTICATED", "Authentication required"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id, include_deleted=True)
            if user is None:
                return Return.err(Error("UNAUTHENTICATED", "Authentication required"))

            error = await deactivation_error(self.uow, user)
            if error:
                return Return.err(error)

            # Token must describe the stored user
            if (
                claims.get("email") != user.email
                or claims.get("organization_id") != str(user.organization_id)
                or claims.get("department_id") != str(user.department_id)
            ):
                return Return.err(Error("UNAUTHENTICATED", "Token no longer matches account"))

            return Return.ok(TenantContext.of(user, self.platform_organization_id))
