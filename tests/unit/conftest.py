import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.entities import EntityKind

REPOSITORIES = {
    EntityKind.organization: "organizations",
    EntityKind.department: "departments",
    EntityKind.user: "users",
    EntityKind.task: "tasks",
    EntityKind.task_activity: "task_activities",
    EntityKind.task_comment: "task_comments",
    EntityKind.material: "materials",
    EntityKind.vendor: "vendors",
    EntityKind.attachment: "attachments",
    EntityKind.notification: "notifications",
}


def _repository():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.find = AsyncMock(return_value=[])
    repo.find_one = AsyncMock(return_value=None)
    repo.count = AsyncMock(return_value=0)
    repo.aggregate = AsyncMock(return_value={})
    repo.create = AsyncMock(side_effect=lambda entity: entity)
    repo.update = AsyncMock(side_effect=lambda entity: entity)
    repo.update_many = AsyncMock(return_value=0)
    repo.hard_delete = AsyncMock(return_value=0)
    repo.purge_expired = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.enable_hard_delete = MagicMock()
    uow.supports_transactions = True

    for attribute in REPOSITORIES.values():
        setattr(uow, attribute, _repository())
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)

    uow.repository = MagicMock(side_effect=lambda kind: getattr(uow, REPOSITORIES[EntityKind(kind)]))
    return uow
