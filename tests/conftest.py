"""
Shared fixtures for the chatrooms test suite.

Every test gets its own SQLite database file (through aiosqlite) with the
schema created from the ORM models. The FastAPI app is exercised in-process
through httpx's ASGI transport with ``get_db`` pointed at that database.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from chatrooms.database import create_tables, get_db
from chatrooms.main import app
from chatrooms.repositories.user_repository import UserRepository
from chatrooms.security import PasswordHasher, get_password_hasher
from chatrooms.tokens import TokenIssuer, get_token_issuer

TEST_SECRET = "test-secret-key"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'chatrooms.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenIssuer(secret=TEST_SECRET, expires_minutes=30)


@pytest.fixture
async def client(session_factory, hasher, tokens):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_issuer] = lambda: tokens

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# User Fixtures
# =============================================================================


async def make_user(db, hasher, username, email, password="password123"):
    user = await UserRepository(db).create(username, email, hasher.hash(password))
    await db.commit()
    return user


@pytest.fixture
async def alice(db, hasher):
    return await make_user(db, hasher, "alice", "a@x.com", "pw123")


@pytest.fixture
async def bob(db, hasher):
    return await make_user(db, hasher, "bob", "b@x.com", "pw456")


@pytest.fixture
async def carol(db, hasher):
    return await make_user(db, hasher, "carol", "c@x.com", "pw789")


# =============================================================================
# HTTP helpers
# =============================================================================


async def register(client, username, email, password):
    response = await client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
