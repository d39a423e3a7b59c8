"""
Pytest fixtures - in-memory database, seeded users, API client.
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from accounts.db.base import Base
from accounts.db.models import ROLE_ADMIN, ROLE_MEMBER, ROLE_OWNER, AuthIdentity, User
from accounts.db.session import get_db
from accounts.main import app

# One shared in-memory SQLite connection per test engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def users(session: AsyncSession) -> dict[str, User]:
    """owner, two admins, a member and a shell member (no password)."""
    seeded = {
        "owner": User(email="owner@example.com", password="hash-owner", role=ROLE_OWNER),
        "admin1": User(email="admin1@example.com", password="hash-admin1", role=ROLE_ADMIN),
        "admin2": User(email="admin2@example.com", password="hash-admin2", role=ROLE_ADMIN),
        "member": User(email="member@example.com", password="hash-member", role=ROLE_MEMBER),
        "shell": User(email="shell@example.com", password=None, role=ROLE_MEMBER),
    }
    session.add_all(seeded.values())
    await session.flush()
    session.add(
        AuthIdentity(
            provider_id="owner@example.com",
            provider_type="email",
            user_id=seeded["owner"].id,
        )
    )
    await session.commit()
    # Drop the identity map so later queries materialize fresh objects
    session.expunge_all()
    return seeded


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
