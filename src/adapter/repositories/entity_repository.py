from datetime import datetime
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.soft_delete_filter import INCLUDE_DELETED
from src.app.repositories.entity_repository import Filters, IEntityRepository
from src.domain.base import Entity

T = TypeVar("T", bound=Entity)


class EntityRepository(IEntityRepository[T], Generic[T]):
    """
    Generic SQLModel repository.

    Tombstone exclusion is applied by the session listener; this class only
    opts out of it when the caller asks for deleted rows.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    def _conditions(self, filters: Optional[Filters]) -> List[Any]:
        conditions = []
        for name, value in (filters or {}).items():
            column = getattr(self.model, name)
            if isinstance(value, (list, tuple, set, frozenset)):
                conditions.append(column.in_(list(value)))
            elif value is None:
                conditions.append(column.is_(None))
            else:
                conditions.append(column == value)
        return conditions

    def _search(self, search: Optional[str], search_fields: Sequence[str]) -> List[Any]:
        if not search or not search_fields:
            return []
        pattern = f"%{search}%"
        return [or_(*(getattr(self.model, name).ilike(pattern) for name in search_fields))]

    def _criteria(
        self,
        filters: Optional[Filters],
        search: Optional[str] = None,
        search_fields: Sequence[str] = (),
        exclude_ids: Sequence[UUID] = (),
    ) -> List[Any]:
        criteria = self._conditions(filters) + self._search(search, search_fields)
        if exclude_ids:
            criteria.append(self.model.id.not_in(list(exclude_ids)))
        return criteria

    async def get_by_id(self, entity_id: UUID, include_deleted: bool = False) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == entity_id)
        if include_deleted:
            stmt = stmt.execution_options(**{INCLUDE_DELETED: True})
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find(
        self,
        filters: Optional[Filters] = None,
        include_deleted: bool = False,
        offset: int = 0,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
        search: Optional[str] = None,
        search_fields: Sequence[str] = (),
        exclude_ids: Sequence[UUID] = (),
    ) -> List[T]:
        stmt = select(self.model).where(*self._criteria(filters, search, search_fields, exclude_ids))
        order_column = getattr(self.model, order_by or "created_at")
        stmt = stmt.order_by(order_column.desc() if descending else order_column.asc())
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        if include_deleted:
            stmt = stmt.execution_options(**{INCLUDE_DELETED: True})
        result = await self.session.exec(stmt)
        return list(result.all())

    async def find_one(self, filters: Filters, include_deleted: bool = False) -> Optional[T]:
        found = await self.find(filters, include_deleted=include_deleted, limit=1)
        return found[0] if found else None

    async def count(
        self,
        filters: Optional[Filters] = None,
        include_deleted: bool = False,
        search: Optional[str] = None,
        search_fields: Sequence[str] = (),
        exclude_ids: Sequence[UUID] = (),
        created_since: Optional[datetime] = None,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(*self._criteria(filters, search, search_fields, exclude_ids))
        )
        if created_since is not None:
            stmt = stmt.where(self.model.created_at >= created_since)
        if include_deleted:
            stmt = stmt.execution_options(**{INCLUDE_DELETED: True})
        result = await self.session.exec(stmt)
        return result.one()

    async def aggregate(
        self,
        group_by: str,
        filters: Optional[Filters] = None,
        include_deleted: bool = False,
        exclude_ids: Sequence[UUID] = (),
    ) -> Dict[Any, int]:
        column = getattr(self.model, group_by)
        stmt = select(column, func.count()).where(*self._criteria(filters, exclude_ids=exclude_ids)).group_by(column)
        if include_deleted:
            stmt = stmt.execution_options(**{INCLUDE_DELETED: True})
        result = await self.session.exec(stmt)
        return {value: total for value, total in result.all()}

    async def create(self, entity: T) -> T:
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: T) -> T:
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update_many(self, filters: Filters, values: Mapping[str, Any], include_deleted: bool = False) -> int:
        stmt = update(self.model).where(*self._conditions(filters)).values(**values)
        if include_deleted:
            stmt = stmt.execution_options(**{INCLUDE_DELETED: True})
        result = await self.session.execute(stmt)
        return result.rowcount

    async def hard_delete(self, filters: Filters) -> int:
        """Refused by the session guard unless hard delete is enabled on the unit of work"""
        stmt = delete(self.model).where(*self._conditions(filters))
        result = await self.session.execute(stmt)
        return result.rowcount

    async def purge_expired(self, cutoff: datetime) -> int:
        stmt = delete(self.model).where(
            self.model.is_deleted.is_(True),
            self.model.deleted_at < cutoff,
        )
        result = await self.session.execute(stmt)
        return result.rowcount
