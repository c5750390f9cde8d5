"""
Refresh Token Use Case

Rotates the access and refresh tokens of a signed-in user.
"""

from datetime import timedelta
from uuid import UUID

from config import ApplicationConfig
from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.account import deactivation_error
from src.domain.base import utcnow
from src.api.utils.jwt import create_access_token, create_refresh_token, hash_token, verify_jwt
from .dtos import RefreshTokenResponse


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT tokens.

    Business Rules:
    - Refresh token rotation: old token invalidated, new token issued
    - Token must match the hash stored on the user and not be past its expiry
    - Deactivated accounts (user, organization or department tombstoned) cannot refresh
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        payload = verify_jwt(refresh_token, token_type="refresh")
        if payload is None:
            return Return.err(Error("UNAUTHENTICATED", "Invalid or expired refresh token"))

        async with self.uow:
            user = await self.uow.users.get_by_id(UUID(payload["user_id"]), include_deleted=True)
            if user is None:
                return Return.err(Error("UNAUTHENTICATED", "Invalid or expired refresh token"))

            error = await deactivation_error(self.uow, user)
            if error:
                return Return.err(error)

            now = utcnow()
            if user.refresh_token_hash != hash_token(refresh_token) or (
                user.refresh_token_expires_at is not None and user.refresh_token_expires_at < now
            ):
                return Return.err(Error("UNAUTHENTICATED", "Invalid or expired refresh token"))

            access_token = create_access_token(user)
            new_refresh_token = create_refresh_token(user)

            user.refresh_token_hash = hash_token(new_refresh_token)
            user.refresh_token_expires_at = now + timedelta(days=ApplicationConfig.REFRESH_TOKEN_DAYS)
            await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(
                RefreshTokenResponse(access_token=access_token, refresh_token=new_refresh_token)
            )
