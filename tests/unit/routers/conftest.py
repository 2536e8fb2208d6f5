"""Fixtures for exercising the routers through the ASGI app."""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from folio.api.auth import AuthUser, get_current_editor
from folio.api.repositories import TagsRepository, TopicsRepository
from folio.api.routers.dependencies import (
    get_articles_service,
    get_drafts_service,
    get_patches_service,
    get_tags_service,
    get_topics_service,
)
from folio.api.services import ArticlesService, DraftsService, PatchesService, TagsService, TopicsService


@pytest.fixture
def tags_repository() -> AsyncMock:
    repository = AsyncMock(spec=TagsRepository)
    repository.list.return_value = []
    return repository


@pytest.fixture
def topics_repository() -> AsyncMock:
    repository = AsyncMock(spec=TopicsRepository)
    repository.list.return_value = []
    return repository


@pytest.fixture
def app(
    mock_archive: AsyncMock,
    tags_repository: AsyncMock,
    topics_repository: AsyncMock,
) -> Generator[FastAPI, None, None]:
    """The API with real services over mocked storage."""
    from folio.api.main import app

    tags = TagsService(tags_repository)
    topics = TopicsService(topics_repository)
    articles = ArticlesService(mock_archive, tags=tags, topics=topics)
    drafts = DraftsService(mock_archive)
    patches = PatchesService(mock_archive)

    app.dependency_overrides[get_drafts_service] = lambda: drafts
    app.dependency_overrides[get_patches_service] = lambda: patches
    app.dependency_overrides[get_articles_service] = lambda: articles
    app.dependency_overrides[get_tags_service] = lambda: tags
    app.dependency_overrides[get_topics_service] = lambda: topics
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Anonymous client."""
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def editor_client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Client whose requests are authenticated as the editor."""
    app.dependency_overrides[get_current_editor] = lambda: AuthUser(user_id="editor", roles=["editor"])
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
