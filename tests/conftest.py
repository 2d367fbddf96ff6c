"""
Knowledge Backlog - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Callable
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, async_sessionmaker
from faker import Faker

# Set testing environment before the settings object is built
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['LOG_FILE'] = ''
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['ADMIN_USERS'] = 'admin'
os.environ['AUTHORIZED_USERS'] = ''

from knowledge_backlog.main import app
from knowledge_backlog.core.database import create_engine_for_url, init_db, get_db
from knowledge_backlog.core.security import Identity, parse_identity
from knowledge_backlog.schemas.article import ArticleCreate
from knowledge_backlog.services.user_service import authorized_user_service

fake = Faker()

AUTH_HEADER = 'X-Auth-User'


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh SQLite file per test, built with the production engine factory"""
    test_engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override (one session per request)"""
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def identity() -> Identity:
    """Caller as the proxy forwards it"""
    return parse_identity('CORP\\Alice')


@pytest.fixture
def other_identity() -> Identity:
    return parse_identity('CORP\\bob')


@pytest_asyncio.fixture
async def authorized_user(db_session: AsyncSession) -> str:
    """Put alice on the allowlist"""
    return await authorized_user_service.add_user(db_session, 'alice')


@pytest.fixture
def auth_headers(authorized_user: str) -> dict:
    """Headers of an allowlisted caller"""
    return {AUTH_HEADER: 'CORP\\Alice'}


@pytest.fixture
def unauthorized_headers() -> dict:
    """Headers of a caller that is not on the allowlist"""
    return {AUTH_HEADER: 'CORP\\mallory'}


@pytest.fixture
def admin_headers() -> dict:
    """Headers of a caller listed in ADMIN_USERS"""
    return {AUTH_HEADER: 'CORP\\admin'}


@pytest.fixture
def make_article() -> Callable[..., ArticleCreate]:
    """Build article input with fake text"""
    def _make(**overrides) -> ArticleCreate:
        data = {
            'title': fake.sentence(nb_words=5),
            'description': fake.text(max_nb_chars=200),
            'status': 'Backlog',
        }
        data.update(overrides)
        return ArticleCreate(**data)
    return _make


@pytest.fixture
def article_payload() -> dict:
    """JSON body for POST /articles"""
    return {
        'title': fake.sentence(nb_words=5),
        'description': fake.text(max_nb_chars=200),
        'status': 'Backlog',
    }
