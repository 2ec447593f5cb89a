"""Service test fixtures — async DB, FastAPI test client and seed users.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - get_mailer overridden with a recording fake (no network)

Design Decisions:
    - SQLite in-memory: fast, no external dependency; Postgres-only features are not used
    - Seeded users store a placeholder password unless the test logs in
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from supportdesk.core.domain_types import UserRole
from supportdesk.db.base import Base
from supportdesk.infrastructure.database import get_db
from supportdesk.infrastructure.mailer import get_mailer
from supportdesk.main import app
from tests.services.seed import RecordingMailer, make_user


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
async def client(test_session_factory, mailer):
    """FastAPI test client with DB and mailer dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def admin(test_db):
    return await make_user(test_db, "admin", UserRole.ADMIN)


@pytest.fixture
async def customer(test_db):
    return await make_user(test_db, "carol", UserRole.CUSTOMER)
