from abc import abstractmethod
from typing import List
from uuid import UUID

from src.app.repositories.entity_repository import IEntityRepository
from src.domain.entities import Attachment, AttachmentParent, Task, TaskActivity, TaskComment


class ITaskRepository(IEntityRepository[Task]):
    """
    Task repository interface - application layer

    Related records are reached through explicit queries, never through
    lazily loaded attributes on the task.
    """

    @abstractmethod
    async def get_comments(self, task_id: UUID, top_level_only: bool = False) -> List[TaskComment]:
        """Active comments of a task, oldest first"""
        pass

    @abstractmethod
    async def get_activities(self, task_id: UUID) -> List[TaskActivity]:
        """Active activities of a task, newest first"""
        pass

    @abstractmethod
    async def get_attachments(
        self, parent_id: UUID, parent_kind: AttachmentParent = AttachmentParent.task
    ) -> List[Attachment]:
        """Active attachments of a task, activity or comment"""
        pass
