import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.depends import get_unit_of_work, serialize_json
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import generate_jwt
from src.domain.entities import Moderator, ModeratorRole


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///./test.db", json_serializer=serialize_json
    )
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


@pytest_asyncio.fixture
async def uow(db_session):
    async with SqlAlchemyUnitOfWork(db_session) as unit_of_work:
        yield unit_of_work


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def moderator_headers(db_session):
    """Bearer headers per role, one admin_users row each"""
    headers = {}
    async with SqlAlchemyUnitOfWork(db_session) as unit_of_work:
        for role in ModeratorRole:
            user_id = f"{role.value}-user"
            await unit_of_work.moderators.create(Moderator(user_id=user_id, role=role))
            headers[role.value] = {"Authorization": f"Bearer {generate_jwt(user_id)}"}
        await unit_of_work.commit()
    return headers
