"""Service test fixtures — async DB, credentials, token registry + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for the readiness probe, which bypasses get_db
    - Users alice, bob and admin exist in an in-memory htpasswd store
    - Every test gets its own OneTimeTokenRegistry (exposed as `registry`)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - apr_md5_crypt hashes: pure-python and fast enough for per-test stores
"""

import pytest
from passlib.apache import HtpasswdFile
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from board.api.dependencies import get_token_registry, get_user_store
from board.core.one_time_tokens import OneTimeTokenRegistry
from board.db.base import Base
from board.infrastructure.database import get_db, DatabaseSessionManager
from board.infrastructure.user_store import HtpasswdUserStore
from board.models.post import Post
import board.infrastructure.database as db_module
from board.main import app

ALICE = ("alice", "alice-password")
BOB = ("bob", "bob-password")
ADMIN = ("admin", "admin-password")


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
def user_store():
    htpasswd = HtpasswdFile(new=True, default_scheme="apr_md5_crypt")
    for username, password in (ALICE, BOB, ADMIN):
        htpasswd.set_password(username, password)
    return HtpasswdUserStore(htpasswd)


@pytest.fixture
def registry():
    return OneTimeTokenRegistry()


@pytest.fixture
async def client(test_engine, test_session_factory, user_store, registry):
    """FastAPI test client with DB, user store and registry overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_token_registry] = lambda: registry

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_post(test_db):
    """Insert a post authored by alice."""
    post = Post(
        content="alice's first post",
        posted_by="alice",
        tracking_cookie="12345_abcdef",
    )
    test_db.add(post)
    await test_db.commit()
    await test_db.refresh(post)
    return post
