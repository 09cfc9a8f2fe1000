"""
Test fixtures for the Bank Accounts API test suite.

This module provides shared fixtures used across all test files:

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - client: Async HTTP test client wired to the test database
  - user / other_user: Users inserted straight into the database

Key design decisions:
  - In-memory SQLite (sqlite+aiosqlite://) is used for speed and isolation.
    Each test gets a completely fresh database.
  - We override FastAPI's get_db dependency to inject a session on the test
    engine, with the same commit/rollback behaviour as production.
  - Users are inserted directly, since user provisioning lives outside
    this service.
"""

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from bank_accounts.database import Base, get_db
from bank_accounts.main import app
from bank_accounts.models.user import User


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Provide an async session bound to the test engine."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """
    Async HTTP test client with the test database injected.

    Each request gets its own session, committed on success and rolled
    back on any error, exactly like get_db().
    """

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


async def _insert_user(session_factory, name: str) -> User:
    async with session_factory() as session:
        user = User(name=name)
        session.add(user)
        await session.commit()
        return user


@pytest_asyncio.fixture
async def user(session_factory):
    """A committed user with no accounts."""
    return await _insert_user(session_factory, "Pobi")


@pytest_asyncio.fixture
async def other_user(session_factory):
    """A second committed user, for cross-user ownership tests."""
    return await _insert_user(session_factory, "Crong")
