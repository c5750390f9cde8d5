"""
Presence Status Use Cases

Online / away / offline status, persisted on the user and mirrored in the
in-process presence tracker.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.event_sink import STATUS_CHANGED, DomainEvent, IEventSink, NullEventSink
from src.app.services.presence_tracker import PresenceTracker
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import TenantContext
from src.domain.entities import Action, EntityKind, User, UserStatus
from src.domain.permissions import authorize
from src.domain.presence import can_transition

logger = logging.getLogger(__name__)


def status_payload(user: User, presence: PresenceTracker, previous: Optional[UserStatus] = None) -> Dict[str, Any]:
    last_seen = presence.last_seen(user.id)
    payload = {
        "user_id": str(user.id),
        "status": UserStatus(user.status).value,
        "full_name": user.full_name,
        "organization_id": str(user.organization_id),
        "department_id": str(user.department_id),
        "last_activity": last_seen.isoformat() if last_seen else None,
        "updated_at": user.updated_at.isoformat(),
    }
    if previous is not None:
        payload["previous_status"] = UserStatus(previous).value
    return payload


class UpdateStatusUseCase:
    """
    Business Rules:
    - offline -> online; online -> away | offline; away -> online | offline
    - Setting the current status again is accepted and changes nothing
    - online starts activity tracking, offline stops it
    - A status change is published to the event sink after commit
    """

    def __init__(self, uow: UnitOfWork, presence: PresenceTracker, events: Optional[IEventSink] = None):
        self.uow = uow
        self.presence = presence
        self.events = events or NullEventSink()

    async def execute(self, user_id: UUID, status: UserStatus) -> Result[Dict[str, Any]]:
        status = UserStatus(status)
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            previous = UserStatus(user.status)
            if not can_transition(previous, status):
                return Return.err(
                    Error(
                        "INVALID_STATUS_TRANSITION",
                        f"Invalid status transition from {previous.value} to {status.value}",
                    )
                )

            if previous != status:
                user.status = status
                user.touch()
                await self.uow.users.update(user)
                await self.uow.commit()

            if status == UserStatus.online:
                self.presence.mark_online(user.id)
            elif status == UserStatus.offline:
                self.presence.forget(user.id)

            payload = status_payload(user, self.presence, previous)
            event = DomainEvent(
                name=STATUS_CHANGED,
                entity_kind=EntityKind.user.value,
                entity_id=user.id,
                organization_id=user.organization_id,
                actor_id=user.id,
                payload={"status": status.value, "previous_status": previous.value},
            )

        if previous != status:
            await self.events.publish(event)

        return Return.ok(payload)


class GetStatusUseCase:
    def __init__(self, uow: UnitOfWork, presence: PresenceTracker):
        self.uow = uow
        self.presence = presence

    async def execute(self, context: TenantContext, user_id: UUID) -> Result[Dict[str, Any]]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))
            if not authorize(context, Action.read, EntityKind.user, user):
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))
            return Return.ok(status_payload(user, self.presence))


class MarkInactiveAwayUseCase:
    """Flip tracked users idle past the auto-away window from online to away"""

    def __init__(self, uow: UnitOfWork, presence: PresenceTracker, events: Optional[IEventSink] = None):
        self.uow = uow
        self.presence = presence
        self.events = events or NullEventSink()

    async def execute(self) -> Result[int]:
        changed = []
        async with self.uow:
            for user_id in self.presence.inactive():
                user = await self.uow.users.get_by_id(user_id)
                if user is None:
                    self.presence.forget(user_id)
                    continue
                if user.status != UserStatus.online:
                    continue
                user.status = UserStatus.away
                user.touch()
                await self.uow.users.update(user)
                changed.append(
                    DomainEvent(
                        name=STATUS_CHANGED,
                        entity_kind=EntityKind.user.value,
                        entity_id=user.id,
                        organization_id=user.organization_id,
                        payload={"status": UserStatus.away.value, "previous_status": UserStatus.online.value},
                    )
                )
            if changed:
                await self.uow.commit()

        for event in changed:
            await self.events.publish(event)
        if changed:
            logger.info(f"Set {len(changed)} inactive users to away")
        return Return.ok(len(changed))
