"""
Organization Lifecycle Use Cases

Soft delete (cascading to everything the organization owns), restore of the
organization record alone, and the administrative hard delete.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.event_sink import ENTITY_PURGED, DomainEvent, IEventSink, NullEventSink
from src.app.services.soft_delete_service import SoftDeleteService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.resources.policy import error_of, to_payload
from src.domain.context import TenantContext
from src.domain.entities import AuditEvent, EntityKind
from src.domain.errors import LifecycleError
from src.domain.lifecycle import PURGE_ORDER
from .guard import NOT_FOUND, load_customer_organization, platform_guard

logger = logging.getLogger(__name__)


class DeleteOrganizationUseCase:
    """
    Business Rules:
    - Platform admins only; the platform organization cannot be deleted
    - Departments, users, tasks (with their activities, comments and
      attachments), materials, vendors and notifications are tombstoned
      with the organization, in one transaction
    """

    def __init__(self, uow: UnitOfWork, events: Optional[IEventSink] = None):
        self.uow = uow
        self.events = events

    async def execute(self, context: TenantContext, organization_id: UUID) -> Result[Dict[str, Any]]:
        error = platform_guard(context)
        if error:
            return Return.err(error)

        lifecycle = SoftDeleteService(self.uow, self.events)
        async with self.uow:
            organization = await load_customer_organization(
                self.uow, context, organization_id, include_deleted=True
            )
            if organization is None:
                return Return.err(NOT_FOUND)

            try:
                report = await lifecycle.soft_delete(
                    EntityKind.organization, organization, actor_id=context.actor_id
                )
            except LifecycleError as exc:
                return Return.err(error_of(exc))

            await self.uow.commit()
            payload = {
                "id": str(organization.id),
                "kind": EntityKind.organization.value,
                "deleted_at": report.deleted_at.isoformat(),
                "cascaded": report.cascaded,
            }

        await lifecycle.publish_pending()
        return Return.ok(payload)


class RestoreOrganizationUseCase:
    """
    Business Rules:
    - Only the organization record is restored; its departments and users
      stay deleted until restored one by one
    - Another active organization with the same name or email blocks the
      restore (RESTORE_CONFLICT)
    """

    def __init__(self, uow: UnitOfWork, events: Optional[IEventSink] = None):
        self.uow = uow
        self.events = events

    async def execute(self, context: TenantContext, organization_id: UUID) -> Result[Dict[str, Any]]:
        error = platform_guard(context)
        if error:
            return Return.err(error)

        lifecycle = SoftDeleteService(self.uow, self.events)
        async with self.uow:
            organization = await load_customer_organization(
                self.uow, context, organization_id, include_deleted=True
            )
            if organization is None:
                return Return.err(NOT_FOUND)

            try:
                organization = await lifecycle.restore(
                    EntityKind.organization, organization, actor_id=context.actor_id
                )
            except LifecycleError as exc:
                return Return.err(error_of(exc))

            await self.uow.commit()
            payload = to_payload(organization)

        await lifecycle.publish_pending()
        return Return.ok(payload)


class HardDeleteOrganizationUseCase:
    """
    Permanently remove an organization and every record it owns, active or
    tombstoned. Children are removed before parents. The audit trail is kept.
    """

    def __init__(self, uow: UnitOfWork, events: Optional[IEventSink] = None):
        self.uow = uow
        self.events = events or NullEventSink()

    async def execute(self, context: TenantContext, organization_id: UUID) -> Result[Dict[str, Any]]:
        error = platform_guard(context)
        if error:
            return Return.err(error)

        removed: Dict[str, int] = {}
        async with self.uow:
            organization = await load_customer_organization(
                self.uow, context, organization_id, include_deleted=True
            )
            if organization is None:
                return Return.err(NOT_FOUND)
            organization_id = organization.id
            name = organization.name

            self.uow.enable_hard_delete()
            for kind in PURGE_ORDER:
                if kind == EntityKind.organization:
                    continue
                count = await self.uow.repository(kind).hard_delete({"organization_id": organization_id})
                if count:
                    removed[kind.value] = count
            await self.uow.organizations.hard_delete({"id": organization_id})

            await self.uow.audit_events.create(
                AuditEvent(
                    organization_id=organization_id,
                    actor_id=context.actor_id,
                    action="organization_hard_deleted",
                    entity_kind=EntityKind.organization.value,
                    entity_id=organization_id,
                    event_metadata={"name": name, "removed": removed},
                )
            )
            await self.uow.commit()

        logger.warning(f"Organization {organization_id} permanently deleted by {context.actor_id}")
        await self.events.publish(
            DomainEvent(
                name=ENTITY_PURGED,
                entity_kind=EntityKind.organization.value,
                entity_id=organization_id,
                organization_id=organization_id,
                actor_id=context.actor_id,
                payload={"removed": removed},
            )
        )
        return Return.ok({"id": str(organization_id), "removed": removed})
