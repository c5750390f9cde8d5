"""
List Organizations Use Cases

Cross-tenant listing and statistics for platform administrators.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.resources.dtos import DEFAULT_LIMIT, PaginatedResponse, clamp_paging, paginate
from src.app.use_cases.resources.policy import to_payload
from src.domain.base import utcnow
from src.domain.context import TenantContext
from src.domain.entities import OrganizationSize
from .guard import platform_guard

SEARCH_FIELDS = ("name", "email", "industry")
RECENT_DAYS = 30


class ListOrganizationsUseCase:
    """
    Business Rules:
    - Platform admins only
    - The platform organization is excluded
    - Optional search over name, email and industry, and a size filter
    - Deleted organizations are included on request
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        context: TenantContext,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
        search: Optional[str] = None,
        size: Optional[OrganizationSize] = None,
        include_deleted: bool = False,
    ) -> Result[PaginatedResponse]:
        error = platform_guard(context)
        if error:
            return Return.err(error)

        filters: Dict[str, Any] = {}
        if size is not None:
            filters["size"] = OrganizationSize(size)
        page, limit, offset = clamp_paging(page, limit)
        exclude_ids = [context.tenant_id]

        async with self.uow:
            total = await self.uow.organizations.count(
                filters,
                include_deleted=include_deleted,
                search=search,
                search_fields=SEARCH_FIELDS,
                exclude_ids=exclude_ids,
            )
            organizations = await self.uow.organizations.find(
                filters,
                include_deleted=include_deleted,
                offset=offset,
                limit=limit,
                search=search,
                search_fields=SEARCH_FIELDS,
                exclude_ids=exclude_ids,
            )
            return Return.ok(paginate([to_payload(o) for o in organizations], page, limit, total))


class OrganizationStatisticsUseCase:
    """Totals over customer organizations: active, deleted, recent and per size"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: TenantContext) -> Result[Dict[str, Any]]:
        error = platform_guard(context)
        if error:
            return Return.err(error)

        exclude_ids = [context.tenant_id]
        since = utcnow() - timedelta(days=RECENT_DAYS)

        async with self.uow:
            repo = self.uow.organizations
            total = await repo.count(include_deleted=True, exclude_ids=exclude_ids)
            active = await repo.count(exclude_ids=exclude_ids)
            recent = await repo.count(exclude_ids=exclude_ids, created_since=since)
            by_size = await repo.aggregate("size", exclude_ids=exclude_ids)

        return Return.ok(
            {
                "total": total,
                "active": active,
                "deleted": total - active,
                "recent": recent,
                "by_size": {OrganizationSize(size).value: count for size, count in by_size.items()},
            }
        )
