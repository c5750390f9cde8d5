import pytest
from sqlalchemy import update

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.organizations import OrganizationStatisticsUseCase
from src.domain.base import utcnow
from src.domain.entities import Organization, Role, User
from tests.factories import make_context


async def _tombstone(session, model, *ids):
    await session.execute(update(model).where(model.id.in_(ids)).values(is_deleted=True, deleted_at=utcnow()))
    await session.commit()


@pytest.mark.asyncio
async def test_repository_reads_skip_tombstoned_department(session_factory, tenants):
    acme_id = tenants.acme.id
    sales_id = tenants.sales.id

    async with session_factory() as session:
        uow = SqlAlchemyUnitOfWork(session)
        async with uow:
            sales = await uow.departments.get_by_id(sales_id)
            sales.soft_delete(tenants.acme_admin.id)
            await uow.departments.update(sales)
            await uow.commit()

    async with session_factory() as session:
        uow = SqlAlchemyUnitOfWork(session)
        async with uow:
            visible = await uow.departments.find({"organization_id": acme_id})
            active = await uow.departments.count({"organization_id": acme_id})
            total = await uow.departments.count({"organization_id": acme_id}, include_deleted=True)
            hidden = await uow.departments.get_by_id(sales_id)
            tombstone = await uow.departments.get_by_id(sales_id, include_deleted=True)

    assert [department.id for department in visible] == [tenants.operations.id]
    assert (active, total) == (1, 2)
    assert hidden is None
    assert tombstone.is_deleted is True
    assert tombstone.deleted_by == tenants.acme_admin.id
    assert tombstone.deleted_at.tzinfo is None


@pytest.mark.asyncio
async def test_grouped_counts_skip_tombstoned_users(db_session, session_factory, tenants):
    acme_id = tenants.acme.id
    await _tombstone(db_session, User, tenants.acme_worker.id, tenants.acme_sales[0].id)

    async with session_factory() as session:
        uow = SqlAlchemyUnitOfWork(session)
        async with uow:
            by_role = await uow.users.aggregate("role", {"organization_id": acme_id})
            by_department = await uow.users.aggregate("department_id", {"organization_id": acme_id})
            everyone = await uow.users.aggregate("department_id", {"organization_id": acme_id}, include_deleted=True)

    assert {Role(role).value: total for role, total in by_role.items()} == {
        "SuperAdmin": 1,
        "Manager": 1,
        "User": 1,
    }
    assert by_department == {tenants.operations.id: 2, tenants.sales.id: 1}
    assert everyone == {tenants.operations.id: 3, tenants.sales.id: 2}


@pytest.mark.asyncio
async def test_organization_statistics_count_only_active(db_session, session_factory, tenants):
    await _tombstone(db_session, Organization, tenants.globex.id)

    async with session_factory() as session:
        result = await OrganizationStatisticsUseCase(SqlAlchemyUnitOfWork(session)).execute(
            make_context(Role.super_admin, platform=True)
        )

    assert result.is_ok()
    assert result.value["total"] == 2
    assert result.value["active"] == 1
    assert result.value["deleted"] == 1
    assert result.value["recent"] == 1
    assert result.value["by_size"] == {"Small": 1}
