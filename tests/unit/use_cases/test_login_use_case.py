import pytest
from uuid import uuid4

from src.app.services.presence_tracker import PresenceTracker
from src.app.use_cases.auth.login_use_case import LoginUseCase
from src.domain.context import PLATFORM_ORGANIZATION_ID
from src.domain.entities import UserStatus
from src.api.utils.jwt import hash_token, verify_jwt
from tests.factories import DEFAULT_PASSWORD, make_department, make_organization, make_user


def _account(mock_uow):
    organization = make_organization()
    department = make_department(organization.id)
    user = make_user(organization.id, department.id, email="worker@example.com")
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.departments.get_by_id.return_value = department
    return organization, department, user


@pytest.mark.asyncio
async def test_login_success(mock_uow):
    organization, _, user = _account(mock_uow)
    mock_uow.users.get_by_email.return_value = user
    presence = PresenceTracker()

    result = await LoginUseCase(mock_uow, presence).execute("Worker@Example.com", DEFAULT_PASSWORD, organization.id)

    assert result.is_ok()
    response = result.value
    assert response.user.email == "worker@example.com"
    assert verify_jwt(response.access_token)["user_id"] == str(user.id)
    assert user.refresh_token_hash == hash_token(response.refresh_token)
    assert user.status == UserStatus.online
    assert user.last_login_at is not None
    assert user.id in presence
    mock_uow.users.get_by_email.assert_awaited_once_with(organization.id, "worker@example.com")
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_login_wrong_password(mock_uow):
    organization, _, user = _account(mock_uow)
    mock_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(mock_uow).execute("worker@example.com", "wrong-password", organization.id)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_login_unknown_email(mock_uow):
    result = await LoginUseCase(mock_uow).execute("nobody@example.com", DEFAULT_PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_requires_organization_when_email_is_shared(mock_uow):
    first = make_user(uuid4(), uuid4(), email="shared@example.com")
    second = make_user(uuid4(), uuid4(), email="shared@example.com")
    mock_uow.users.find.return_value = [first, second]

    result = await LoginUseCase(mock_uow).execute("shared@example.com", DEFAULT_PASSWORD)

    assert result.is_err()
    assert result.error.code == "ORGANIZATION_SELECTION_REQUIRED"
    assert set(result.error.details["organizations"]) == {
        str(first.organization_id),
        str(second.organization_id),
    }


@pytest.mark.asyncio
async def test_login_without_organization_skips_platform_accounts(mock_uow):
    _, _, user = _account(mock_uow)
    platform_user = make_user(PLATFORM_ORGANIZATION_ID, uuid4(), email=user.email)
    mock_uow.users.find.return_value = [platform_user, user]

    result = await LoginUseCase(mock_uow).execute(user.email, DEFAULT_PASSWORD)

    assert result.is_ok()
    assert result.value.user.id == str(user.id)


@pytest.mark.asyncio
async def test_login_with_deleted_department(mock_uow):
    organization, department, user = _account(mock_uow)
    department.soft_delete(uuid4())
    mock_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(mock_uow).execute(user.email, DEFAULT_PASSWORD, organization.id)

    assert result.is_err()
    assert result.error.code == "ACCOUNT_DEACTIVATED"
    assert result.error.reason == "department"
