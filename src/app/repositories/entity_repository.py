from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar
from uuid import UUID

T = TypeVar("T")

Filters = Mapping[str, Any]


class IEntityRepository(ABC, Generic[T]):
    """
    Entity repository interface - application layer

    Every read and update-by-query excludes tombstoned records unless
    `include_deleted` is set or the filters name `is_deleted` explicitly.
    Filter values: sequence -> IN, None -> IS NULL, anything else -> equality.
    """

    model: type

    @abstractmethod
    async def get_by_id(self, entity_id: UUID, include_deleted: bool = False) -> Optional[T]:
        """Get entity by ID"""
        pass

    @abstractmethod
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
        """Find entities matching filters"""
        pass

    @abstractmethod
    async def find_one(self, filters: Filters, include_deleted: bool = False) -> Optional[T]:
        """Find first entity matching filters"""
        pass

    @abstractmethod
    async def count(
        self,
        filters: Optional[Filters] = None,
        include_deleted: bool = False,
        search: Optional[str] = None,
        search_fields: Sequence[str] = (),
        exclude_ids: Sequence[UUID] = (),
        created_since: Optional[datetime] = None,
    ) -> int:
        """Count entities matching filters"""
        pass

    @abstractmethod
    async def aggregate(
        self,
        group_by: str,
        filters: Optional[Filters] = None,
        include_deleted: bool = False,
        exclude_ids: Sequence[UUID] = (),
    ) -> Dict[Any, int]:
        """Count entities per distinct value of `group_by`"""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Create a new entity"""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Update existing entity"""
        pass

    @abstractmethod
    async def update_many(self, filters: Filters, values: Mapping[str, Any], include_deleted: bool = False) -> int:
        """Bulk update matching entities, returns affected row count"""
        pass

    @abstractmethod
    async def hard_delete(self, filters: Filters) -> int:
        """Permanently remove matching entities (purge and administrative paths only)"""
        pass

    @abstractmethod
    async def purge_expired(self, cutoff: datetime) -> int:
        """Permanently remove tombstones older than `cutoff`, returns removed row count"""
        pass
