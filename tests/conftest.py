import os
import tempfile
from typing import AsyncGenerator

# Point the app at a throwaway database and upload dir before it is imported
_TMP = tempfile.mkdtemp(prefix="foodtruck-tests-")
os.environ.setdefault("DB_PATH", os.path.join(_TMP, "test.db"))
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TMP, "uploads"))
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("MAX_UPLOAD_BYTES", str(64 * 1024))

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi_users.db import SQLAlchemyUserDatabase  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from foodtruck.core.auth import UserManager, get_jwt_strategy, password_helper  # noqa: E402
from foodtruck.db.database import Base, async_session_maker, engine  # noqa: E402
from foodtruck.db.migrations import add_missing_columns  # noqa: E402
from foodtruck.db.users import User  # noqa: E402
from foodtruck.main import app  # noqa: E402
from foodtruck.schemas.users import UserCreate  # noqa: E402

TEST_PASSWORD = "Sup3r-secret!"


@pytest_asyncio.fixture
async def create_test_database():
    """
    Fresh tables for every test function.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await add_missing_columns(engine)
    yield
    # pooled aiosqlite connections belong to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(create_test_database) -> AsyncGenerator[AsyncSession, None]:
    """
    A session on the test database, for arranging data and checking results.
    """
    async with async_session_maker() as session:
        yield session


async def _create_user(email: str, username: str, is_superuser: bool) -> User:
    async with async_session_maker() as session:
        manager = UserManager(SQLAlchemyUserDatabase(session, User), password_helper)
        return await manager.create(
            UserCreate(
                email=email,
                password=TEST_PASSWORD,
                username=username,
                role="owner" if is_superuser else "staff",
                is_superuser=is_superuser,
            ),
            safe=False,
        )


@pytest_asyncio.fixture
async def create_test_user(create_test_database) -> User:
    """
    Superuser the authenticated client acts as.
    """
    return await _create_user("owner@example.com", "owner", is_superuser=True)


@pytest_asyncio.fixture
async def staff_user(create_test_database) -> User:
    return await _create_user("cook@example.com", "cook", is_superuser=False)


@pytest_asyncio.fixture
async def anon_client(create_test_database) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def _client_for(user: User) -> AsyncClient:
    token = await get_jwt_strategy().write_token(user)
    return AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {token}"},
    )


@pytest_asyncio.fixture
async def client(create_test_user: User) -> AsyncGenerator[AsyncClient, None]:
    """
    Client authenticated as the superuser.
    """
    async with await _client_for(create_test_user) as client:
        yield client


@pytest_asyncio.fixture
async def staff_client(staff_user: User) -> AsyncGenerator[AsyncClient, None]:
    async with await _client_for(staff_user) as client:
        yield client


@pytest.fixture
def user_password() -> str:
    return TEST_PASSWORD
