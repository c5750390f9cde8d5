from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.entity_repository import EntityRepository
from src.adapter.repositories.task_repository import TaskRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.services.soft_delete_filter import ALLOW_HARD_DELETE
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    Attachment,
    Department,
    Material,
    Notification,
    Organization,
    TaskActivity,
    TaskComment,
    Vendor,
)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    supports_transactions = True

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.organizations = EntityRepository(self.session, Organization)
        self.departments = EntityRepository(self.session, Department)
        self.users = UserRepository(self.session)
        self.tasks = TaskRepository(self.session)
        self.task_activities = EntityRepository(self.session, TaskActivity)
        self.task_comments = EntityRepository(self.session, TaskComment)
        self.materials = EntityRepository(self.session, Material)
        self.vendors = EntityRepository(self.session, Vendor)
        self.attachments = EntityRepository(self.session, Attachment)
        self.notifications = EntityRepository(self.session, Notification)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        self.session.info.pop(ALLOW_HARD_DELETE, None)
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    def enable_hard_delete(self):
        self.session.info[ALLOW_HARD_DELETE] = True
