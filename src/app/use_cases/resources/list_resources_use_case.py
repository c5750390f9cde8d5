"""
List Resources Use Case
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.context import TenantContext
from src.domain.entities import Action, EntityKind
from src.domain.permissions import authorize
from .dtos import DEFAULT_LIMIT, PaginatedResponse, clamp_paging, paginate
from .policy import SEARCH_FIELDS, to_payload, visibility_filters


class ListResourcesUseCase:
    """
    Business Rules:
    - The role must be allowed to read the kind
    - Results are confined to the actor's organization, and to the actor's
      department for roles that cannot read across departments
    - Platform admins may list another organization's records
    - Deleted records are included only on request, for roles that may restore
    - Newest first, paginated (default 20, max 100)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: TenantContext,
        kind: EntityKind,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
        search: Optional[str] = None,
        include_deleted: bool = False,
        filters: Optional[Dict[str, Any]] = None,
        organization_id: Optional[UUID] = None,
    ) -> Result[PaginatedResponse]:
        kind = EntityKind(kind)
        if not authorize(context, Action.read, kind):
            return Return.err(Error("FORBIDDEN", "Insufficient permissions"))
        if include_deleted and not authorize(context, Action.restore, kind):
            return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

        scope_filters = visibility_filters(context, kind)
        if organization_id is not None and str(organization_id) != str(context.tenant_id):
            if not context.is_platform_admin:
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))
            scope_filters = {"organization_id": organization_id}

        query = {name: value for name, value in (filters or {}).items() if value is not None}
        query.update(scope_filters)

        page, limit, offset = clamp_paging(page, limit)
        search_fields = SEARCH_FIELDS.get(kind, ())

        async with self.uow:
            repo = self.uow.repository(kind)
            total = await repo.count(
                query, include_deleted=include_deleted, search=search, search_fields=search_fields
            )
            records = await repo.find(
                query,
                include_deleted=include_deleted,
                offset=offset,
                limit=limit,
                search=search,
                search_fields=search_fields,
            )
            return Return.ok(paginate([to_payload(r) for r in records], page, limit, total))
