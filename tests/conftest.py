"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Settings come from env vars set before the app is imported

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route and service tests
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient  # noqa: E402

from gestion_bovina.core.domain_types import Sex  # noqa: E402
from gestion_bovina.db.base import Base  # noqa: E402
from gestion_bovina.infrastructure.database import get_db, DatabaseSessionManager  # noqa: E402
from gestion_bovina.infrastructure.repositories import (  # noqa: E402
    SqlAnimalRepository, SqlUserRepository,
)
from gestion_bovina.services.animal_service import AnimalService  # noqa: E402
from gestion_bovina.services.auth_service import AuthService  # noqa: E402
import gestion_bovina.infrastructure.database as db_module  # noqa: E402
import gestion_bovina.models  # noqa: E402,F401
from gestion_bovina.main import app  # noqa: E402

TEST_SECRET = os.environ["JWT_SECRET"]


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
def animal_service(test_db):
    return AnimalService(SqlAnimalRepository(test_db))


@pytest.fixture
def auth_service(test_db):
    return AuthService(SqlUserRepository(test_db), secret=TEST_SECRET)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

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
async def auth_headers(client):
    """Register a user through the API and return its Authorization header."""
    res = await client.post(
        "/register", json={"email": "rancher@example.com", "password": "s3cret"},
    )
    assert res.status_code == 201
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def make_animal():
    """Factory for valid animal field dicts (Python names)."""
    def _make(**overrides) -> dict:
        fields = {
            "diio": 345671,
            "birth_date": datetime(2022, 5, 11),
            "sex": Sex.FEMALE,
            "breed": "Negra",
            "location": "Talca",
            "sick": None,
        }
        fields.update(overrides)
        return fields
    return _make


@pytest.fixture
def wire_animal():
    """Factory for valid animal payloads using the public wire names."""
    def _make(**overrides) -> dict:
        payload = {
            "diio": 345671,
            "dateBirthday": "2022-05-11T00:00:00",
            "genre": "F",
            "race": "Negra",
            "location": "Talca",
            "sick": None,
        }
        payload.update(overrides)
        return payload
    return _make

