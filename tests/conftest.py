"""Pytest fixtures and configuration."""

import re
from collections.abc import AsyncGenerator
from typing import Any, Optional
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from folio.api.deps import get_font_loader
from folio.core.permissions import Role
from folio.db.mongodb import get_portfolios_collection
from folio.db.postgres import Base, get_db
from folio.fonts.loader import FontLoader, HttpxStylesheetFetcher
from folio.main import app
from folio.models.sql.user import User

# Test database URL (use SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
)

test_session_factory = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

FAILING_FONT = "Anton"


def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, expected in query.items():
        actual = document.get(key)
        if isinstance(expected, dict) and "$regex" in expected:
            flags = re.IGNORECASE if "i" in expected.get("$options", "") else 0
            if not isinstance(actual, str) or not re.search(expected["$regex"], actual, flags):
                return False
        elif actual != expected:
            return False
    return True


class FakeCursor:
    """Subset of the motor cursor API used by the portfolio routes."""

    def __init__(self, documents: list[dict[str, Any]]):
        self._documents = documents

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def skip(self, count: int) -> "FakeCursor":
        self._documents = self._documents[count:]
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._documents = self._documents[:count]
        return self

    async def to_list(self, length: Optional[int] = None) -> list[dict[str, Any]]:
        return list(self._documents if length is None else self._documents[:length])


class FakeCollection:
    """In-memory stand-in for the portfolios collection."""

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}

    async def insert_one(self, document: dict[str, Any]):
        self.documents[document["_id"]] = dict(document)

    async def find_one(self, query: dict[str, Any]) -> Optional[dict[str, Any]]:
        for document in self.documents.values():
            if _matches(document, query):
                return dict(document)
        return None

    def find(self, query: dict[str, Any]) -> FakeCursor:
        return FakeCursor([dict(d) for d in self.documents.values() if _matches(d, query)])

    async def count_documents(self, query: dict[str, Any]) -> int:
        return sum(1 for d in self.documents.values() if _matches(d, query))

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]):
        for document in self.documents.values():
            if _matches(document, query):
                document.update(update.get("$set", {}))
                return

    async def delete_one(self, query: dict[str, Any]):
        for key, document in list(self.documents.items()):
            if _matches(document, query):
                del self.documents[key]
                return


def font_css_handler(request: httpx.Request) -> httpx.Response:
    """Serve a stylesheet for every family except FAILING_FONT."""
    family = request.url.params.get("family", "")
    if family.startswith(FAILING_FONT):
        return httpx.Response(500, text="upstream error")
    return httpx.Response(200, text=f"/* {family} */ @font-face {{}}")


@pytest.fixture
def portfolio_collection() -> FakeCollection:
    return FakeCollection()


@pytest_asyncio.fixture
async def font_loader() -> AsyncGenerator[FontLoader, None]:
    """Font loader whose stylesheet requests never leave the process."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(font_css_handler)) as http_client:
        yield FontLoader(HttpxStylesheetFetcher(http_client))


@pytest.fixture
def token_store() -> dict[str, str]:
    return {}


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_session_factory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    portfolio_collection: FakeCollection,
    font_loader: FontLoader,
    token_store: dict[str, str],
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    async def fake_cache_get(key):
        return token_store.get(key)

    async def fake_cache_set(key, value, expire=300):
        token_store[key] = value

    async def fake_cache_delete(key):
        token_store.pop(key, None)

    with (
        patch("folio.api.v1.auth.cache_get", AsyncMock(side_effect=fake_cache_get)),
        patch("folio.api.v1.auth.cache_set", AsyncMock(side_effect=fake_cache_set)),
        patch("folio.api.v1.auth.cache_delete", AsyncMock(side_effect=fake_cache_delete)),
    ):
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_portfolios_collection] = lambda: portfolio_collection
        app.dependency_overrides[get_font_loader] = lambda: font_loader

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac

        app.dependency_overrides.clear()


async def _create_user(
    db_session: AsyncSession, email: str, username: str, role: Role = Role.USER
) -> User:
    from folio.core.security import hash_password

    user = User(
        id=uuid4(),
        email=email,
        username=username,
        hashed_password=hash_password("testpass123"),
        full_name=username.title(),
        role=role.value,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _headers_for(user: User) -> dict:
    from folio.core.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    return await _create_user(db_session, "test@example.com", "testuser")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "other@example.com", "otheruser")


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "admin@example.com", "adminuser", Role.ADMIN)


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    """Create authentication headers for test user."""
    return _headers_for(test_user)


@pytest_asyncio.fixture
async def other_headers(other_user: User) -> dict:
    return _headers_for(other_user)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict:
    return _headers_for(admin_user)
