"""
Logout Use Case

Forgets the refresh token and marks the user offline.
"""

from typing import Optional
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.presence_tracker import PresenceTracker
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserStatus


class LogoutUseCase:
    """Always succeeds; an unknown user leaves nothing to clear"""

    def __init__(self, uow: UnitOfWork, presence: Optional[PresenceTracker] = None):
        self.uow = uow
        self.presence = presence

    async def execute(self, user_id: Optional[UUID]) -> Result[None]:
        if user_id is None:
            return Return.ok(None)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is not None:
                user.refresh_token_hash = None
                user.refresh_token_expires_at = None
                user.status = UserStatus.offline
                user.touch()
                await self.uow.users.update(user)
                await self.uow.commit()

        if self.presence is not None:
            self.presence.forget(user_id)
        return Return.ok(None)
