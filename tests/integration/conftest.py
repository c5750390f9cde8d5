from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.soft_delete_filter import INCLUDE_DELETED
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work
from src.domain.entities import Role
from tests.factories import make_department, make_organization, make_platform_organization, make_user


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fetch(session_factory):
    """Re-read a row in a fresh session, tombstoned or not"""

    async def _fetch(model, entity_id):
        async with session_factory() as session:
            stmt = select(model).where(model.id == entity_id).execution_options(**{INCLUDE_DELETED: True})
            result = await session.exec(stmt)
            return result.one_or_none()

    return _fetch


@pytest_asyncio.fixture
async def tenants(db_session):
    """
    Platform organization with its SuperAdmin, plus two customers:
    Acme (Operations and Sales, five users) and Globex (one department, one user).
    """
    platform = make_platform_organization()
    platform_department = make_department(platform.id, name="Platform Operations")
    platform_admin = make_user(
        platform.id, platform_department.id, role=Role.super_admin, email="root@platform.example.com"
    )

    acme = make_organization("Acme")
    operations = make_department(acme.id, name="Operations")
    sales = make_department(acme.id, name="Sales")
    acme_admin = make_user(acme.id, operations.id, role=Role.super_admin, email="boss@acme.example.com")
    acme_manager = make_user(acme.id, operations.id, role=Role.manager, email="manager@acme.example.com")
    acme_worker = make_user(acme.id, operations.id, email="worker@acme.example.com")
    acme_sales = [make_user(acme.id, sales.id) for _ in range(2)]

    globex = make_organization("Globex")
    globex_department = make_department(globex.id, name="Operations")
    globex_admin = make_user(globex.id, globex_department.id, role=Role.super_admin, email="boss@globex.example.com")

    db_session.add_all(
        [
            platform,
            platform_department,
            platform_admin,
            acme,
            operations,
            sales,
            acme_admin,
            acme_manager,
            acme_worker,
            *acme_sales,
            globex,
            globex_department,
            globex_admin,
        ]
    )
    await db_session.commit()

    return SimpleNamespace(
        platform=platform,
        platform_admin=platform_admin,
        acme=acme,
        operations=operations,
        sales=sales,
        acme_admin=acme_admin,
        acme_manager=acme_manager,
        acme_worker=acme_worker,
        acme_sales=acme_sales,
        acme_users=[acme_admin, acme_manager, acme_worker, *acme_sales],
        globex=globex,
        globex_department=globex_department,
        globex_admin=globex_admin,
    )
