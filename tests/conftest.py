"""Shared test fixtures for the chat widget API tests.

Uses an in-memory SQLite async engine so tests run without PostgreSQL.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.main import app

# Import all models to ensure they're registered with Base.metadata
from app.models.website import Website
from app.models.chat_request import ChatRequest
from app.models.prompt_set import PromptSet
from app.models.code_config import CodeConfig


# Use aiosqlite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def override_get_db():
    async with TestSession() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


@pytest_asyncio.fixture
async def client():
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db():
    """Direct DB session for test setup/assertions."""
    async with TestSession() as session:
        yield session


@pytest_asyncio.fixture
async def website(client):
    """A registered website with a small knowledge base."""
    resp = await client.post("/api/v1/websites/", json={
        "website_name": "Pixel Studio",
        "website_url": "https://pixel.example.com",
        "category": ["Web Development", "Digital Marketing"],
        "api_key": "widget-key-123",
    })
    assert resp.status_code == 201
    site = resp.json()

    resp = await client.put(f"/api/v1/websites/{site['id']}/knowledge-base", json={
        "knowledge_base": [
            {"title": "Services", "value": ["Web Design", "SEO", "App Development"]},
            {"title": "Pricing", "value": "Basic, Pro, Enterprise"},
        ]
    })
    assert resp.status_code == 200
    return site
