"""Tests for PatchesService."""

import logging
from unittest.mock import AsyncMock

import pytest

from folio.api.constants import ABOUT_BLANK
from folio.api.core.errors import NotFoundError
from folio.api.schemas.articles import Article, ArticlePatch, ArticleRevision
from folio.api.services.patches import PatchesService


@pytest.fixture
def service(mock_archive: AsyncMock) -> PatchesService:
    return PatchesService(mock_archive)


class TestPatchesService:
    """Tests for patch operations."""

    @pytest.mark.asyncio
    async def test_revise_derives_from_patched_article(
        self, service: PatchesService, mock_archive: AsyncMock, article_id: str
    ) -> None:
        """The stored patch is overlaid on the article before deriving."""
        mock_archive.get_patch.return_value = ArticlePatch(article_uuid=article_id, title="Patched Title")
        mock_archive.get_by_id.return_value = Article(
            uuid=article_id, title="Original", slug="original", content="one two", is_draft=False
        )

        await service.revise(article_id, ArticleRevision(content="three four five"))

        mock_archive.get_by_id.assert_awaited_once_with(article_id, is_draft=False)
        revision = mock_archive.revise.await_args.args[1]
        assert revision.slug == "patched-title"
        assert revision.read_time == 1
        assert revision.content == "three four five"

    @pytest.mark.asyncio
    async def test_revise_without_patch(self, service: PatchesService, mock_archive: AsyncMock, article_id: str) -> None:
        mock_archive.get_patch.side_effect = NotFoundError(article_id, "article patch")
        with pytest.raises(NotFoundError):
            await service.revise(article_id, ArticleRevision(topic="python"))
        mock_archive.revise.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_revise_topic_only(self, service: PatchesService, mock_archive: AsyncMock, article_id: str) -> None:
        mock_archive.get_patch.return_value = ArticlePatch(article_uuid=article_id)
        await service.revise(article_id, ArticleRevision(topic="python"))
        mock_archive.get_by_id.assert_not_awaited()
        mock_archive.revise.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_share_failure_carries_blank_link(
        self, service: PatchesService, mock_archive: AsyncMock, article_id: str
    ) -> None:
        mock_archive.share.side_effect = NotFoundError(article_id, "draft")
        with pytest.raises(NotFoundError) as exc_info:
            await service.share(article_id)
        assert exc_info.value.extensions["shareable_link"] == ABOUT_BLANK

    @pytest.mark.asyncio
    async def test_discard_requires_patch(self, service: PatchesService, mock_archive: AsyncMock, article_id: str) -> None:
        """Discarding never falls through to deleting a draft."""
        mock_archive.get_patch.side_effect = NotFoundError(article_id, "article patch")
        with pytest.raises(NotFoundError):
            await service.discard(article_id)
        mock_archive.discard.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_release(self, service: PatchesService, mock_archive: AsyncMock, article_id: str) -> None:
        await service.release(article_id.upper())
        mock_archive.release.assert_awaited_once_with(article_id)

    @pytest.mark.asyncio
    async def test_release_logs_canonical_id(
        self,
        service: PatchesService,
        article_id: str,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="folio.api.services.patches"):
            await service.release(f"{{{article_id.upper()}}}")

        assert f"Released patch {article_id}" in caplog.messages

    @pytest.mark.asyncio
    async def test_list(self, service: PatchesService, mock_archive: AsyncMock, article_id: str) -> None:
        mock_archive.list_patches.return_value = [ArticlePatch(article_uuid=article_id)]
        patches = await service.list()
        assert [patch.article_uuid for patch in patches] == [article_id]
