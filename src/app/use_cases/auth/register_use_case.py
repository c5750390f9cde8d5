"""
Register Use Case

Creates an organization, its first department and its SuperAdmin in one
transaction, then signs the new user in.
"""

from datetime import timedelta

import bcrypt

from config import ApplicationConfig
from src.libs.result import Error, Result, Return
from src.app.services.soft_delete_service import SoftDeleteService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    AuditEvent,
    Department,
    EntityKind,
    Organization,
    OrganizationSize,
    Role,
    User,
    UserStatus,
)
from src.domain.errors import DuplicateEntry
from src.api.utils.jwt import create_access_token, create_refresh_token, hash_token
from .dtos import RegisterCommand, RegisterResponse, user_info


class RegisterUseCase:
    """
    Business Logic:
    1. Organization name and email must be free among active organizations
    2. Create organization, department and SuperAdmin user
    3. Record the user as creator of the organization and department
    4. Hash password with bcrypt cost factor 12
    5. Commit atomically, then issue tokens
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        lifecycle = SoftDeleteService(self.uow)
        async with self.uow:
            organization = Organization(
                name=command.organization_name,
                description=command.organization_description,
                email=command.organization_email.lower(),
                phone=command.organization_phone,
                address=command.organization_address,
                industry=command.organization_industry,
                size=OrganizationSize(command.organization_size),
            )
            try:
                await lifecycle.ensure_unique(EntityKind.organization, organization)
            except DuplicateEntry as exc:
                return Return.err(Error(exc.code, exc.message, details={"fields": list(exc.fields)}))

            organization = await self.uow.organizations.create(organization)

            department = Department(
                name=command.department_name,
                description=command.department_description,
                organization_id=organization.id,
            )
            department = await self.uow.departments.create(department)

            password_hash = bcrypt.hashpw(command.password.encode("utf-8"), bcrypt.gensalt(12))
            user = User(
                first_name=command.first_name,
                last_name=command.last_name,
                email=command.email.lower(),
                password_hash=password_hash.decode("utf-8"),
                role=Role.super_admin,
                position=command.position,
                status=UserStatus.online,
                organization_id=organization.id,
                department_id=department.id,
            )
            user = await self.uow.users.create(user)

            organization.created_by = user.id
            department.created_by = user.id
            await self.uow.organizations.update(organization)
            await self.uow.departments.update(department)

            access_token = create_access_token(user)
            refresh_token = create_refresh_token(user)
            now = utcnow()
            user.refresh_token_hash = hash_token(refresh_token)
            user.refresh_token_expires_at = now + timedelta(days=ApplicationConfig.REFRESH_TOKEN_DAYS)
            user.last_login_at = now
            await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization.id,
                    actor_id=user.id,
                    action="organization_registered",
                    entity_kind=EntityKind.organization.value,
                    entity_id=organization.id,
                    event_metadata={"name": organization.name, "email": user.email},
                )
            )

            await self.uow.commit()

            return Return.ok(
                RegisterResponse(
                    access_token=access_token,
                    refresh_token=refresh_token,
                    user=user_info(user),
                    organization_id=str(organization.id),
                    department_id=str(department.id),
                )
            )
