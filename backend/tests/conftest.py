"""
Biodex Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── species_record / other_record: committed records for card tests
    ├── fake_store, notifier, navigator: in-memory card collaborators
    ├── session_factory: real SQLite database (aiosqlite) with seed rows
    └── test_client: HTTPX AsyncClient wired to a fresh app on that database
"""

import os
import tempfile
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any biodex import so no test touches a real database
_TEST_DIR = tempfile.mkdtemp(prefix="biodex_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/biodex.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from biodex.cards.base import DataStore
from biodex.cards.notifications import CallbackNavigator, MemoryNotifier
from biodex.database import Base, get_db_session
from biodex.exceptions import StoreError
from biodex.models.profile import Profile
from biodex.models.species import Species
from biodex.schemas.species import SpeciesRecord


# ══════════════════════════════════════════════════════════════════════════
# Card Collaborators
# ══════════════════════════════════════════════════════════════════════════

class FakeDataStore(DataStore):
    """
    In-memory DataStore that records every call.

    Set `update_error` / `delete_error` to a StoreError to make the next
    writes fail.
    """

    def __init__(self, records: Optional[Dict[int, SpeciesRecord]] = None):
        self.records: Dict[int, SpeciesRecord] = dict(records or {})
        self.update_calls: List[Tuple[int, Dict[str, Any]]] = []
        self.delete_calls: List[int] = []
        self.update_error: Optional[StoreError] = None
        self.delete_error: Optional[StoreError] = None

    async def fetch_record(self, record_id: int) -> SpeciesRecord:
        if record_id not in self.records:
            raise StoreError(message=f"species with ID '{record_id}' was not found", status_code=404)
        return self.records[record_id]

    async def update_record(self, record_id: int, patch: Dict[str, Any]) -> None:
        self.update_calls.append((record_id, dict(patch)))
        if self.update_error is not None:
            raise self.update_error
        self.records[record_id] = self.records[record_id].model_copy(update=patch)

    async def delete_record(self, record_id: int) -> None:
        self.delete_calls.append(record_id)
        if self.delete_error is not None:
            raise self.delete_error
        self.records.pop(record_id, None)


@pytest.fixture
def species_record():
    """The guinea pig owned by viewer u1."""
    return SpeciesRecord(
        id=7,
        scientific_name="Cavia porcellus",
        common_name="Guinea pig",
        kingdom="Animalia",
        total_population=300000,
        image="https://upload.wikimedia.org/wikipedia/commons/George_the_amazing_guinea_pig.jpg",
        description="The guinea pig or domestic guinea pig is a species of rodent.",
        author="u1",
    )


@pytest.fixture
def other_record():
    """A plant owned by viewer u2 with every optional field empty."""
    return SpeciesRecord(
        id=8,
        scientific_name="Quercus robur",
        common_name=None,
        kingdom="Plantae",
        total_population=None,
        image=None,
        description=None,
        author="u2",
    )


@pytest.fixture
def fake_store(species_record, other_record):
    return FakeDataStore({species_record.id: species_record, other_record.id: other_record})


@pytest.fixture
def notifier():
    return MemoryNotifier()


@pytest.fixture
def navigator():
    return CallbackNavigator()


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


def seed_rows():
    return [
        Profile(id="u1", email="ada@example.org", display_name="Ada", biography="Rodent fan"),
        Profile(id="u2", email="bo@example.org", display_name="Bo", biography=None),
        Species(
            id=7,
            scientific_name="Cavia porcellus",
            common_name="Guinea pig",
            kingdom="Animalia",
            total_population=300000,
            image=None,
            description="A domesticated rodent.",
            author="u1",
        ),
        Species(
            id=8,
            scientific_name="Quercus robur",
            common_name="English oak",
            kingdom="Plantae",
            total_population=None,
            image=None,
            description=None,
            author="u2",
        ),
    ]


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """
    A fresh SQLite database per test, schema created and seeded.

    NullPool keeps aiosqlite connections from outliving the test's event loop.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/biodex.db", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        session.add_all(seed_rows())
        await session.commit()

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def test_app(session_factory):
    """A fresh app whose session dependency points at the seeded test database."""
    from biodex.main import create_app

    app = create_app()

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
