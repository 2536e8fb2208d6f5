"""Pytest configuration and fixtures for tests."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Settings are read at import time, so they must be in place before folio is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("EDITOR_USERNAME", "editor")
os.environ.setdefault("EDITOR_PASSWORD", "correct horse battery staple")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from folio.api.db import DBManager  # noqa: E402
from folio.api.repositories import ArchiveRepository  # noqa: E402

ARTICLE_ID = "6ba7b810-9dad-11d1-80b4-00c04fd430c8"


@pytest.fixture
def article_id() -> str:
    """Canonical UUID used by service and router tests."""
    return ARTICLE_ID


@pytest.fixture
def mock_archive() -> AsyncMock:
    """ArchiveRepository whose async methods are AsyncMocks."""
    return AsyncMock(spec=ArchiveRepository)


@pytest_asyncio.fixture
async def db_manager(tmp_path: Path) -> AsyncGenerator[DBManager, None]:
    """DBManager over a throwaway SQLite file with all tables created."""
    manager = DBManager(database_url=f"sqlite+aiosqlite:///{tmp_path / 'folio.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()
