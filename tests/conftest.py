from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pagewise.database import Base, get_session
from pagewise.app import create_app
from pagewise.dependencies import get_today
import pagewise.models  # noqa: F401

TEST_DB_URL = "sqlite+aiosqlite://"  # in-memory

# Every test runs "on" this date unless it builds its own services
TODAY = date(2025, 1, 1)

engine = create_async_engine(TEST_DB_URL, echo=False)
TestSession = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
async def setup_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def session():
    async with TestSession() as s:
        yield s


@pytest.fixture
async def client():
    app = create_app()

    async def override_session():
        async with TestSession() as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_today] = lambda: (lambda: TODAY)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def book_payload():
    return {
        "title": "Cien años de soledad",
        "author": "Gabriel García Márquez",
        "chapters": [
            {"number": 1, "title": "Macondo", "estimated_pages": 40},
            {"number": 2, "title": "La peste del insomnio", "estimated_pages": 35},
            {"number": 3, "title": "Los diecisiete Aurelianos", "estimated_pages": 25},
        ],
    }


@pytest.fixture
async def book(client, book_payload):
    resp = await client.post("/api/books", json=book_payload)
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
async def plan(client, book):
    resp = await client.post("/api/plans", json={
        "user_id": 1,
        "book_id": book["id"],
        "reading_level": "intermedio",
        "daily_minutes": 30,
        "include_weekends": True,
        "start_date": "2025-01-01",
    })
    assert resp.status_code == 201
    return resp.json()["plan"]
