import os

# Settings are read once at import time, so the test environment must be in
# place before anything from xferlogic is imported.
os.environ.setdefault('TOKEN_SECRET_KEY', 'test-secret-key-for-xferlogic-tests')
os.environ.setdefault('DATABASE_TYPE', 'sqlite')
os.environ.setdefault('DATABASE_SQLITE_PATH', ':memory:')
os.environ.setdefault('USER_PASSWORD_BCRYPT_ROUNDS', '4')
os.environ.setdefault('OPENAI_API_KEY', 'sk-test')
os.environ.setdefault('ANTHROPIC_API_KEY', 'sk-ant-test')

from collections.abc import AsyncGenerator

import pytest

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from xferlogic.common.exception import errors
from xferlogic.src.integrations.image_generation import ImageGenerationResult
from xferlogic.src.llms.base import TextGenerationResult


class FakeGenerationGateway:
    """Stands in for GenerationGateway; records the calls it receives."""

    def __init__(self, fail_with: str | None = None):
        self.fail_with = fail_with
        self.text_calls: list[tuple[str, str | None]] = []
        self.image_calls: list[str] = []

    async def generate_text(self, prompt: str, model: str | None) -> TextGenerationResult:
        self.text_calls.append((prompt, model))
        if self.fail_with:
            raise errors.ProviderError(self.fail_with, provider='openai')
        return TextGenerationResult(text=f'echo: {prompt}', token_count=42, estimated_cost=0.00042)

    async def generate_image(self, prompt: str) -> ImageGenerationResult:
        self.image_calls.append(prompt)
        if self.fail_with:
            raise errors.ProviderError(self.fail_with, provider='openai')
        return ImageGenerationResult(url='https://images.example.com/1.png', estimated_cost=0.04)


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """In-memory SQLite database with all tables created, one per test."""
    import xferlogic.app.gateway.model  # noqa: F401
    from xferlogic.common.model import Base

    engine = create_async_engine(
        'sqlite+aiosqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_gateway() -> FakeGenerationGateway:
    return FakeGenerationGateway()


@pytest.fixture
def app(session_factory, fake_gateway):
    """FastAPI app wired to the in-memory database and the fake gateway."""
    from xferlogic.app.gateway.service.generation_service import get_generation_gateway
    from xferlogic.core.registrar import register_app
    from xferlogic.database.db import get_db

    app = register_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_generation_gateway] = lambda: fake_gateway
    return app


@pytest.fixture
async def client(app) -> AsyncGenerator:
    from httpx import ASGITransport, AsyncClient

    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as c:
        yield c


@pytest.fixture
async def auth_headers(client) -> dict[str, str]:
    """Register and log in a user, returning the Authorization header."""
    await client.post('/api/register', json={'email': 'alice@example.com', 'password': 'pw12345'})
    response = await client.post('/api/login', json={'email': 'alice@example.com', 'password': 'pw12345'})
    return {'Authorization': f"Bearer {response.json()['token']}"}
