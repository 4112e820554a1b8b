"""Pytest configuration and shared fixtures."""

import os

# Keep tests away from any real provider or database configured in .env
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LLM_PROVIDER"] = "cohere"
os.environ["COHERE_API_KEY"] = ""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import recordhub.database.models  # noqa: F401  registers tables on Base.metadata
from recordhub.core.database import Base, build_engine, build_session_maker, get_async_session
from recordhub.dependencies import get_triplet_extraction_service
from recordhub.main import app
from recordhub.services.extraction.triplet_extraction_service import TripletExtractionService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SAMPLE_LOG = (
    "2024-01-15 10:00:01 INFO auth-service User alice logged in\n"
    "2024-01-15 10:00:05 ERROR payment-service Connection to db-primary timed out\n"
    "2024-01-15 10:00:09 WARN payment-service Retrying transaction 4411\n"
)

SAMPLE_MODEL_REPLY = """Here is the analysis:
```json
{
  "triplets": [
    {"subject": "alice", "predicate": "logged_in_to", "object": "auth-service", "confidence": 0.95},
    {"subject": "payment-service", "predicate": "timed_out_on", "object": "db-primary", "confidence": 0.9}
  ],
  "summary": "Login followed by a payment database timeout",
  "agent": "LogAnalyzer-v1"
}
```"""


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest.fixture
def mock_llm_client() -> AsyncMock:
    """LLM client whose ``generate_content`` returns a well-formed extraction.

    Returns:
        AsyncMock: Mocked provider client
    """
    client = AsyncMock()
    client.generate_content.return_value = SAMPLE_MODEL_REPLY
    return client


@pytest.fixture
def extraction_service(mock_llm_client: AsyncMock) -> TripletExtractionService:
    return TripletExtractionService(llm_client=mock_llm_client)


@pytest_asyncio.fixture
async def db_session():
    """Session on a fresh in-memory database with all tables created.

    Yields:
        AsyncSession: Database session
    """
    engine = build_engine(TEST_DATABASE_URL)
    await create_schema(engine)
    session_maker = build_session_maker(engine)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def test_client(extraction_service: TripletExtractionService) -> TestClient:
    """FastAPI test client backed by an isolated in-memory database.

    The client is entered as a context manager so every request runs on the
    same event loop as the schema setup.

    Yields:
        TestClient: FastAPI test client instance
    """
    engine = build_engine(TEST_DATABASE_URL)
    session_maker = build_session_maker(engine)

    async def override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    app.dependency_overrides[get_triplet_extraction_service] = lambda: extraction_service

    with TestClient(app) as client:
        client.portal.call(create_schema, engine)
        yield client
        client.portal.call(engine.dispose)


@pytest.fixture
def sample_log() -> str:
    return SAMPLE_LOG


@pytest.fixture
def sample_model_reply() -> str:
    return SAMPLE_MODEL_REPLY
