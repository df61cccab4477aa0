"""Shared fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from closet.config.settings import Settings
from closet.db.session import create_engine, create_session_factory, init_db


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'closet.db'}",
        openai_api_key="test-openai",
        removebg_api_key="test-removebg",
        preview_debounce_ms=10,
    )


@pytest_asyncio.fixture
async def session(settings: Settings) -> AsyncIterator[AsyncSession]:
    engine = create_engine(settings.database_url)
    await init_db(engine)
    factory = create_session_factory(engine)
    async with factory() as db_session:
        yield db_session
    await engine.dispose()
