from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import DateTime, Field, SQLModel

from src.domain.errors import AlreadyDeleted, NotDeleted

TOMBSTONE_FIELD = "is_deleted"


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in every DateTime column"""
    return datetime.now(UTC).replace(tzinfo=None)


class Entity(SQLModel):
    """
    Shared columns for every persisted kind.

    is_deleted is False exactly when deleted_at and deleted_by are both
    None. `soft_delete` may record no actor (system deletions), in which
    case deleted_by stays None while deleted_at is set.
    """

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    is_deleted: bool = Field(default=False, index=True)
    deleted_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    deleted_by: Optional[UUID] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    def soft_delete(self, actor_id: Optional[UUID] = None, at: Optional[datetime] = None) -> None:
        if self.is_deleted:
            raise AlreadyDeleted(f"{type(self).__name__} {self.id} is already deleted")
        self.is_deleted = True
        self.deleted_at = at or utcnow()
        self.deleted_by = actor_id

    def restore(self) -> None:
        if not self.is_deleted:
            raise NotDeleted(f"{type(self).__name__} {self.id} is not deleted")
        self.is_deleted = False
        self.deleted_at = None
        self.deleted_by = None

    def touch(self) -> None:
        self.updated_at = utcnow()
