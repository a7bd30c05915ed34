"""Pytest configuration and shared fixtures"""

import pytest
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from backend.app.core.database import Base
from backend.app import models  # noqa: F401
from backend.app.services.candidate_service import CandidateService
from tests.factories import build_candidate_service


@pytest.fixture
async def test_engine(tmp_path):
    """File-backed SQLite engine so separate sessions use separate connections"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test_candidates.db'}",
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Create test session factory"""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session"""
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def candidate_service(db_session: AsyncSession) -> CandidateService:
    return build_candidate_service(db_session)
