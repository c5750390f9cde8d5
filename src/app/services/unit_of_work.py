from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.entity_repository import IEntityRepository
from src.app.repositories.task_repository import ITaskRepository
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import EntityKind


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    organizations: IEntityRepository
    departments: IEntityRepository
    users: IUserRepository
    tasks: ITaskRepository
    task_activities: IEntityRepository
    task_comments: IEntityRepository
    materials: IEntityRepository
    vendors: IEntityRepository
    attachments: IEntityRepository
    notifications: IEntityRepository
    audit_events: IAuditEventRepository

    # False when the store cannot group several writes atomically
    supports_transactions: bool = True

    def repository(self, kind: EntityKind) -> IEntityRepository:
        """Repository for an entity kind"""
        return {
            EntityKind.organization: self.organizations,
            EntityKind.department: self.departments,
            EntityKind.user: self.users,
            EntityKind.task: self.tasks,
            EntityKind.task_activity: self.task_activities,
            EntityKind.task_comment: self.task_comments,
            EntityKind.material: self.materials,
            EntityKind.vendor: self.vendors,
            EntityKind.attachment: self.attachments,
            EntityKind.notification: self.notifications,
        }[EntityKind(kind)]

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    def enable_hard_delete(self):
        """Permit permanent deletes for the rest of this unit of work"""
        pass
