import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from admin_panel.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from admin_panel.api.app import create_app
from admin_panel.config import AdminPanelConfig
from admin_panel.depends import get_unit_of_work
from tests.integration.helpers import RecordingMailer

TEST_DB_URI = "sqlite+aiosqlite:///./test.db"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DB_URI)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest_asyncio.fixture
async def make_client(db_session, mailer):
    """Build a client around an app created with the given settings"""
    clients = []

    async def factory(custom_mailer=None, **settings) -> AsyncClient:
        config = AdminPanelConfig(
            DB_URI=TEST_DB_URI, SESSION_SECRET="integration-test-secret", **settings
        )
        app = create_app(config, mailer=custom_mailer or mailer)

        async def override_get_unit_of_work():
            yield SqlAlchemyUnitOfWork(db_session)

        app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

        ac = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(ac)
        return ac

    yield factory

    for ac in clients:
        await ac.aclose()


@pytest_asyncio.fixture
async def client(make_client):
    return await make_client()
