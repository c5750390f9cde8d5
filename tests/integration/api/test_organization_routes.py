import pytest

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.app.services.event_sink import ENTITY_RESTORED, ENTITY_TOMBSTONED
from src.domain.entities import Department, Organization, User
from tests.factories import auth_headers


@pytest.mark.asyncio
async def test_delete_organization_cascades_to_departments_and_users(client, tenants, fetch):
    organization_id = tenants.acme.id
    department_ids = [tenants.operations.id, tenants.sales.id]
    user_ids = [user.id for user in tenants.acme_users]
    actor_id = tenants.platform_admin.id

    response = await client.delete(
        f"/api/organizations/{organization_id}", headers=auth_headers(tenants.platform_admin)
    )

    assert response.status_code == 200
    assert response.json()["cascaded"] == {"Department": 2, "User": 5}

    organization = await fetch(Organization, organization_id)
    assert organization.is_deleted is True
    for department_id in department_ids:
        department = await fetch(Department, department_id)
        assert department.is_deleted is True
        assert department.deleted_at == organization.deleted_at
        assert department.deleted_by == actor_id
    for user_id in user_ids:
        user = await fetch(User, user_id)
        assert user.is_deleted is True
        assert user.deleted_at == organization.deleted_at

    globex = await fetch(Organization, tenants.globex.id)
    assert globex.is_deleted is False


@pytest.mark.asyncio
async def test_deleted_organization_locks_out_its_users(client, tenants):
    worker = tenants.acme_worker
    headers = auth_headers(worker)

    await client.delete(f"/api/organizations/{tenants.acme.id}", headers=auth_headers(tenants.platform_admin))
    response = await client.get("/api/me", headers=headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ACCOUNT_DEACTIVATED"


@pytest.mark.asyncio
async def test_delete_twice(client, tenants):
    headers = auth_headers(tenants.platform_admin)
    url = f"/api/organizations/{tenants.acme.id}"

    await client.delete(url, headers=headers)
    response = await client.delete(url, headers=headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_DELETED"


@pytest.mark.asyncio
async def test_restore_organization_leaves_children_deleted(client, tenants, fetch):
    headers = auth_headers(tenants.platform_admin)
    organization_id = tenants.acme.id
    department_id = tenants.operations.id

    await client.delete(f"/api/organizations/{organization_id}", headers=headers)
    response = await client.post(f"/api/organizations/{organization_id}/restore", headers=headers)

    assert response.status_code == 200
    assert response.json()["is_deleted"] is False
    assert (await fetch(Organization, organization_id)).is_deleted is False
    assert (await fetch(Department, department_id)).is_deleted is True


@pytest.mark.asyncio
async def test_platform_admin_lists_customer_organizations(client, tenants):
    response = await client.get("/api/organizations", headers=auth_headers(tenants.platform_admin))

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["total"] == 2
    assert {item["name"] for item in body["items"]} == {"Acme", "Globex"}


@pytest.mark.asyncio
async def test_customer_super_admin_cannot_list_organizations(client, tenants):
    response = await client.get("/api/organizations", headers=auth_headers(tenants.acme_admin))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_get_organization_with_counts(client, tenants):
    response = await client.get(
        f"/api/organizations/{tenants.acme.id}", headers=auth_headers(tenants.platform_admin)
    )

    assert response.status_code == 200
    assert response.json()["department_count"] == 2
    assert response.json()["user_count"] == 5


@pytest.mark.asyncio
async def test_hard_delete_removes_organization(client, tenants, fetch):
    organization_id = tenants.globex.id
    user_id = tenants.globex_admin.id

    response = await client.delete(
        f"/api/organizations/{organization_id}/permanent", headers=auth_headers(tenants.platform_admin)
    )

    assert response.status_code == 200
    assert response.json()["removed"] == {"User": 1, "Department": 1}
    assert await fetch(Organization, organization_id) is None
    assert await fetch(User, user_id) is None


@pytest.mark.asyncio
async def test_delete_and_restore_are_audited(client, tenants, session_factory):
    headers = auth_headers(tenants.platform_admin)
    organization_id = tenants.acme.id
    actor_id = tenants.platform_admin.id

    await client.delete(f"/api/organizations/{organization_id}", headers=headers)
    await client.post(f"/api/organizations/{organization_id}/restore", headers=headers)

    async with session_factory() as session:
        trail = await AuditEventRepository(session).get_by_entity(organization_id)

    assert [event.action for event in trail] == [ENTITY_TOMBSTONED, ENTITY_RESTORED]
    assert all(event.actor_id == actor_id for event in trail)
    assert trail[0].event_metadata["cascaded"] == {"Department": 2, "User": 5}
