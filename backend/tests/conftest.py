"""
Pytest configuration and shared fixtures for backend tests.
"""

import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from typing import AsyncGenerator, Callable

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from infrastructure.database.models import Base, BrandStylesheet, Newsroom, User
from infrastructure.database.models.user import UserRole
from infrastructure.database.connection import get_db
from core.security import PasswordHasher, TokenService
from infrastructure.config import get_settings
from adapters.ai.campaign_ai_service import campaign_ai_service
from adapters.ai.providers import AIProvider
from services.prompt_service import prompt_cache

# Low bcrypt cost keeps fixture setup fast
password_hasher = PasswordHasher(rounds=4)
settings = get_settings()
token_service = TokenService(secret_key=settings.jwt_secret_key)

TEST_PASSWORD = "testpassword123"

# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture(autouse=True)
def clear_prompt_cache():
    """Rendered prompts must not leak between tests."""
    prompt_cache.clear()
    yield
    prompt_cache.clear()


# ============================================================================
# Tenants and users
# ============================================================================


async def _add(db_session: AsyncSession, obj):
    db_session.add(obj)
    await db_session.commit()
    await db_session.refresh(obj)
    return obj


@pytest.fixture
async def newsroom(db_session: AsyncSession) -> Newsroom:
    """The tenant most tests act in."""
    return await _add(
        db_session,
        Newsroom(name="Riverside Ledger", slug="riverside-ledger", description="Local news"),
    )


@pytest.fixture
async def other_newsroom(db_session: AsyncSession) -> Newsroom:
    """A second tenant, for cross-tenant access checks."""
    return await _add(db_session, Newsroom(name="Hilltop Herald", slug="hilltop-herald"))


@pytest.fixture
async def test_user(db_session: AsyncSession, newsroom: Newsroom) -> User:
    """Create a regular user in ``newsroom``."""
    return await _add(
        db_session,
        User(
            email="test@example.com",
            password_hash=password_hasher.hash(TEST_PASSWORD),
            name="Test User",
            role=UserRole.USER.value,
            newsroom_id=newsroom.id,
        ),
    )


@pytest.fixture
async def newsroom_admin(db_session: AsyncSession, newsroom: Newsroom) -> User:
    """An admin bound to ``newsroom``; not a super-admin."""
    return await _add(
        db_session,
        User(
            email="editor@example.com",
            password_hash=password_hasher.hash(TEST_PASSWORD),
            name="Newsroom Admin",
            role=UserRole.ADMIN.value,
            newsroom_id=newsroom.id,
        ),
    )


@pytest.fixture
async def super_admin(db_session: AsyncSession) -> User:
    """An admin with no newsroom administers every tenant."""
    return await _add(
        db_session,
        User(
            email="root@example.com",
            password_hash=password_hasher.hash(TEST_PASSWORD),
            name="Super Admin",
            role=UserRole.ADMIN.value,
            newsroom_id=None,
        ),
    )


@pytest.fixture
async def stylesheet(db_session: AsyncSession, newsroom: Newsroom) -> BrandStylesheet:
    """Default brand stylesheet for ``newsroom``."""
    return await _add(
        db_session,
        BrandStylesheet(
            newsroom_id=newsroom.id,
            name="House Voice",
            tone="Warm and direct",
            voice="Neighbourly",
            key_messages=["Reader-funded", "Nonprofit"],
            guidelines="Avoid jargon.",
            materials={"brand_foundation": {"about_us": {"text": "Founded in 2012."}}},
            is_default=True,
        ),
    )


@pytest.fixture
def make_auth_headers() -> Callable[[User], dict]:
    def _make(user: User) -> dict:
        access_token = token_service.create_access_token(
            user.id, role=user.role, newsroom_id=user.newsroom_id
        )
        return {"Authorization": f"Bearer {access_token}"}

    return _make


@pytest.fixture
def auth_headers(test_user: User, make_auth_headers) -> dict:
    """Generate authentication headers for test user."""
    return make_auth_headers(test_user)


@pytest.fixture
def super_admin_headers(super_admin: User, make_auth_headers) -> dict:
    return make_auth_headers(super_admin)


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    # Reset rate limiter state between tests to prevent cross-test 429s
    app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class ScriptedProvider(AIProvider):
    """Answers every prompt with a fixed string and records what it saw."""

    def __init__(self, name: str, answer: str = "{}", configured: bool = True, error=None):
        self.name = name
        self.display_name = name.title()
        self._configured = configured
        self.answer = answer
        self.error = error
        self.prompts = []

    @property
    def is_configured(self) -> bool:
        return self._configured

    async def complete(self, prompt, model, system=None, max_tokens=None, temperature=None):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.answer


@pytest.fixture
def openai_provider(monkeypatch) -> ScriptedProvider:
    """Route every gpt-* model to a scripted provider; other vendors are unconfigured."""
    provider = ScriptedProvider("openai")
    monkeypatch.setattr(
        campaign_ai_service,
        "_providers",
        {
            "openai": provider,
            "anthropic": ScriptedProvider("anthropic", configured=False),
            "gemini": ScriptedProvider("gemini", configured=False),
        },
    )
    return provider
