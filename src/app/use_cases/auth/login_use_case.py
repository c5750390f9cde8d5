"""
Login Use Case

Handles user authentication and issues cookie-bound JWT tokens.
"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

import bcrypt

from config import ApplicationConfig
from src.libs.result import Error, Result, Return
from src.app.services.presence_tracker import PresenceTracker
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.account import deactivation_error
from src.domain.base import utcnow
from src.domain.context import PLATFORM_ORGANIZATION_ID
from src.domain.entities import AuditEvent, UserStatus
from src.api.utils.jwt import create_access_token, create_refresh_token, hash_token
from .dtos import LoginResponse, user_info

# Hash of a throwaway password, checked when no user matches
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Email is unique per organization, so the organization may be named
    - Without an organization, platform accounts are never matched and more
      than one customer match asks the caller to pick an organization
    - Constant-time password comparison
    - Organization and department must be active
    - Sets status online, stores the refresh token hash, updates last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        presence: Optional[PresenceTracker] = None,
        platform_organization_id: UUID = PLATFORM_ORGANIZATION_ID,
    ):
        self.uow = uow
        self.presence = presence
        self.platform_organization_id = platform_organization_id

    async def execute(
        self, email: str, password: str, organization_id: Optional[UUID] = None
    ) -> Result[LoginResponse]:
        email = email.lower()
        async with self.uow:
            if organization_id is not None:
                user = await self.uow.users.get_by_email(organization_id, email)
            else:
                candidates = [
                    u
                    for u in await self.uow.users.find({"email": email})
                    if u.organization_id != self.platform_organization_id
                ]
                if len(candidates) > 1:
                    return Return.err(
                        Error(
                            "ORGANIZATION_SELECTION_REQUIRED",
                            "Multiple organizations found. Please select one.",
                            details={"organizations": [str(u.organization_id) for u in candidates]},
                        )
                    )
                user = candidates[0] if candidates else None

            # Always perform a hash check so timing does not reveal unknown emails
            if user is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            error = await deactivation_error(self.uow, user)
            if error:
                return Return.err(error)

            access_token = create_access_token(user)
            refresh_token = create_refresh_token(user)

            now = utcnow()
            user.refresh_token_hash = hash_token(refresh_token)
            user.refresh_token_expires_at = now + timedelta(days=ApplicationConfig.REFRESH_TOKEN_DAYS)
            user.last_login_at = now
            user.status = UserStatus.online
            user.touch()
            await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=user.organization_id,
                    actor_id=user.id,
                    action="login",
                    entity_kind="User",
                    entity_id=user.id,
                    event_metadata={"email": email},
                )
            )

            await self.uow.commit()

            if self.presence is not None:
                self.presence.mark_online(user.id)

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    refresh_token=refresh_token,
                    user=user_info(user),
                )
            )
