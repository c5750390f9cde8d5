"""
Create / Update Organization Use Cases
"""

from typing import Any, Dict
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.soft_delete_service import SoftDeleteService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.resources.policy import IMMUTABLE_FIELDS, error_of, to_payload
from src.domain.context import TenantContext
from src.domain.entities import EntityKind, Organization
from src.domain.errors import DuplicateEntry
from .guard import NOT_FOUND, load_customer_organization, platform_guard


class CreateOrganizationUseCase:
    """
    Business Rules:
    - Platform admins only
    - Name and email must be free among active organizations
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: TenantContext, data: Dict[str, Any]) -> Result[Dict[str, Any]]:
        error = platform_guard(context)
        if error:
            return Return.err(error)

        data = dict(data)
        data["email"] = data["email"].lower()
        organization = Organization(**data, created_by=context.actor_id)

        async with self.uow:
            try:
                await SoftDeleteService(self.uow).ensure_unique(EntityKind.organization, organization)
            except DuplicateEntry as exc:
                return Return.err(error_of(exc))

            organization = await self.uow.organizations.create(organization)
            await self.uow.commit()
            return Return.ok(to_payload(organization))


class UpdateOrganizationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, context: TenantContext, organization_id: UUID, changes: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        error = platform_guard(context)
        if error:
            return Return.err(error)

        changes = {name: value for name, value in changes.items() if name not in IMMUTABLE_FIELDS}
        if changes.get("email"):
            changes["email"] = changes["email"].lower()

        async with self.uow:
            organization = await load_customer_organization(self.uow, context, organization_id)
            if organization is None:
                return Return.err(NOT_FOUND)

            for name, value in changes.items():
                setattr(organization, name, value)

            try:
                await SoftDeleteService(self.uow).ensure_unique(
                    EntityKind.organization, organization, exclude_id=organization.id
                )
            except DuplicateEntry as exc:
                return Return.err(error_of(exc))

            organization.touch()
            organization = await self.uow.organizations.update(organization)
            await self.uow.commit()
            return Return.ok(to_payload(organization))
