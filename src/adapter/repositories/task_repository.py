from typing import List
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.entity_repository import EntityRepository
from src.app.repositories.task_repository import ITaskRepository
from src.domain.entities import Attachment, AttachmentParent, Task, TaskActivity, TaskComment


class TaskRepository(EntityRepository[Task], ITaskRepository):
    """Task repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Task)

    async def get_comments(self, task_id: UUID, top_level_only: bool = False) -> List[TaskComment]:
        stmt = select(TaskComment).where(TaskComment.task_id == task_id)
        if top_level_only:
            stmt = stmt.where(TaskComment.parent_comment_id.is_(None))
        result = await self.session.exec(stmt.order_by(TaskComment.created_at))
        return list(result.all())

    async def get_activities(self, task_id: UUID) -> List[TaskActivity]:
        stmt = (
            select(TaskActivity)
            .where(TaskActivity.task_id == task_id)
            .order_by(TaskActivity.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_attachments(
        self, parent_id: UUID, parent_kind: AttachmentParent = AttachmentParent.task
    ) -> List[Attachment]:
        stmt = select(Attachment).where(
            Attachment.attached_to == parent_id,
            Attachment.attached_to_kind == parent_kind,
        )
        result = await self.session.exec(stmt.order_by(Attachment.created_at))
        return list(result.all())
