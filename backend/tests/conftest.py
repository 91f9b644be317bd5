"""
Noteful Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (scratch database, API client,
       mocked repository, sample data).

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── db_engine:        aiosqlite engine on a temp file with the tables created
    ├── session_factory:  Sessions bound to db_engine
    ├── test_client:      HTTPX AsyncClient talking to a fresh app wired to db_engine
    ├── seeded_folders:   The three folders every note references
    ├── seeded_notes:     The four sample notes (after seeded_folders)
    ├── mock_repository:  AsyncMock standing in for NoteRepository
    └── sample_note:      A transient Note instance
"""

import os
import tempfile

# Override settings for testing BEFORE any noteful imports
# Why: The settings singleton and the engine are built at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="noteful_test_"), "noteful.db"
)
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from noteful.database import Base, get_db_session
from noteful.models.folder import Folder
from noteful.models.note import Note
from noteful.repositories.base import NoteRepository
from noteful.routes.health import get_engine

from notes_fixtures import make_folders, make_notes


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    A scratch SQLite database with the `folders` and `notes` tables.

    Why a file (not :memory:): every connection from the pool must see the
    same database.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def seeded_folders(session_factory):
    async with session_factory() as session:
        session.add_all([Folder(**folder) for folder in make_folders()])
        await session.commit()
    return make_folders()


@pytest_asyncio.fixture
async def seeded_notes(session_factory, seeded_folders):
    async with session_factory() as session:
        session.add_all([Note(**note) for note in make_notes()])
        await session.commit()
    return make_notes()


@pytest_asyncio.fixture
async def test_client(db_engine, session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into a fresh app.

    The app's session and health-check engine dependencies are pointed at the
    scratch database; everything else is the production wiring.
    """
    from noteful.main import create_app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_engine] = lambda: db_engine

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_repository():
    """
    An AsyncMock shaped like NoteRepository.

    Usage:
        mock_repository.get_by_id.return_value = note
        result = await NoteService(mock_repository, sanitizer).get_note(1)
    """
    return AsyncMock(spec=NoteRepository)


@pytest.fixture
def sample_note() -> Note:
    return Note(**make_notes()[0])
