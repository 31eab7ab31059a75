"""
Test infrastructure for the Conduit API.

Strategy
--------
- SQLite in-memory via aiosqlite; StaticPool keeps every task on the one
  connection that owns the in-memory database.
- The app's get_db dependency is overridden so requests use the test
  session factory.
- All tables are created before each test and dropped after, so each test
  starts from an empty schema.
- Service-level tests build ``ArticleService`` directly on a session with
  real repositories; endpoint tests go through httpx + ASGITransport and
  identify the caller with the ``X-User-Id`` header.
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from conduit.database import Base, get_db
from conduit.main import app
from conduit.middleware import install_query_counter
from conduit.models import User
from conduit.repositories import (
    ArticleRepository,
    FavoriteRepository,
    TagRepository,
    UserRepository,
)
from conduit.services.article_service import ArticleService
from conduit.services.slug import SlugGenerator

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def article_service(db_session: AsyncSession) -> ArticleService:
    """ArticleService wired to real repositories on the test session."""
    return ArticleService(
        slug_generator=SlugGenerator(max_attempts=5),
        articles=ArticleRepository(db_session),
        users=UserRepository(db_session),
        tags=TagRepository(db_session),
        favorites=FavoriteRepository(db_session),
    )


@pytest_asyncio.fixture
async def make_user(db_session: AsyncSession):
    """Factory fixture: ``await make_user("alice")`` inserts and returns a User."""

    async def _make_user(username: str, bio: str | None = None) -> User:
        return await UserRepository(db_session).create(
            username=username, email=f"{username}@example.com", bio=bio
        )

    return _make_user


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
