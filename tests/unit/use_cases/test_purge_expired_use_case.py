import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.services.event_sink import ENTITY_PURGED
from src.app.use_cases.maintenance import PurgeExpiredUseCase
from src.domain.entities import EntityKind


@pytest.mark.asyncio
async def test_purge_uses_retention_per_kind(mock_uow):
    now = datetime(2025, 6, 30, 12, 0)

    result = await PurgeExpiredUseCase(mock_uow).execute(now=now)

    assert result.is_ok()
    assert set(result.value) == {kind.value for kind in EntityKind}
    mock_uow.enable_hard_delete.assert_called_once()
    mock_uow.notifications.purge_expired.assert_awaited_once_with(now - timedelta(days=30))
    mock_uow.attachments.purge_expired.assert_awaited_once_with(now - timedelta(days=90))
    mock_uow.tasks.purge_expired.assert_awaited_once_with(now - timedelta(days=180))
    mock_uow.organizations.purge_expired.assert_awaited_once_with(now - timedelta(days=365))
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_purge_audits_only_kinds_that_lost_rows(mock_uow):
    mock_uow.tasks.purge_expired.return_value = 3
    events = MagicMock()
    events.publish = AsyncMock()

    result = await PurgeExpiredUseCase(mock_uow, events=events).execute()

    assert result.value["Task"] == 3
    assert result.value["User"] == 0
    audit = mock_uow.audit_events.create.await_args.args[0]
    assert audit.action == ENTITY_PURGED
    assert audit.entity_kind == "Task"
    assert audit.event_metadata["count"] == 3
    mock_uow.audit_events.create.assert_awaited_once()
    events.publish.assert_awaited_once()


@pytest.mark.asyncio
async def test_second_run_removes_nothing(mock_uow):
    mock_uow.notifications.purge_expired.side_effect = [4, 0]
    use_case = PurgeExpiredUseCase(mock_uow)

    first = await use_case.execute()
    second = await use_case.execute()

    assert first.value["Notification"] == 4
    assert all(count == 0 for count in second.value.values())


@pytest.mark.asyncio
async def test_retention_override(mock_uow):
    now = datetime(2025, 1, 31)

    await PurgeExpiredUseCase(mock_uow, retention_overrides={"Notification": 7}).execute(now=now)

    mock_uow.notifications.purge_expired.assert_awaited_once_with(now - timedelta(days=7))
