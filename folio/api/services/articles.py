"""Published article management and public reads."""

from __future__ import annotations

import logging

from folio.api.constants import CAPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from folio.api.core.errors import ValidationError
from folio.api.helpers import (
    check_max_length,
    collapse_whitespace,
    estimate_read_minutes,
    normalize_label_id,
    sanitize_url,
    slugify,
)
from folio.api.repositories.base import ArchiveRepository
from folio.api.schemas.articles import Article, ArticleFilter, ArticleRequest, ArticleSummary, Publication

from .common import canonical_id, check_summary, normalize_filter, read_text
from .labels import TagsService, TopicsService

logger = logging.getLogger(__name__)


class ArticlesService:
    """Operations on published articles.

    Writes that change which articles are visible refresh the tag and topic
    listings so cached views stay in step with the archive.
    """

    def __init__(
        self,
        archive: ArchiveRepository,
        tags: TagsService | None = None,
        topics: TopicsService | None = None,
    ):
        self._archive = archive
        self._tags = tags
        self._topics = topics

    async def _refresh_labels(self) -> None:
        if self._tags is not None:
            await self._tags.refresh()
        if self._topics is not None:
            await self._topics.refresh()

    # =========================================================================
    # Reads
    # =========================================================================

    async def list(self, article_filter: ArticleFilter | None = None) -> list[ArticleSummary]:
        return await self._archive.list(normalize_filter(article_filter), hidden=False)

    async def list_hidden(self, article_filter: ArticleFilter | None = None) -> list[ArticleSummary]:
        return await self._archive.list(normalize_filter(article_filter), hidden=True)

    async def publications(self) -> list[Publication]:
        return await self._archive.publications()

    async def get(self, request: ArticleRequest) -> Article:
        """Fetch a visible article by its public address and count the view."""
        request = request.model_copy(update={"topic": slugify(request.topic), "slug": request.slug.strip()})
        return await self._archive.get_published(request)

    async def get_by_id(self, article_id: str) -> Article:
        return await self._archive.get_by_id(canonical_id(article_id), is_draft=False)

    # =========================================================================
    # Writes
    # =========================================================================

    async def amend(self, article_id: str) -> None:
        await self._archive.amend(canonical_id(article_id))

    async def hide(self, article_id: str) -> None:
        await self._archive.set_hidden(canonical_id(article_id), True)
        await self._refresh_labels()

    async def show(self, article_id: str) -> None:
        await self._archive.set_hidden(canonical_id(article_id), False)
        await self._refresh_labels()

    async def pin(self, article_id: str) -> None:
        await self._archive.set_pinned(canonical_id(article_id), True)

    async def unpin(self, article_id: str) -> None:
        await self._archive.set_pinned(canonical_id(article_id), False)

    async def remove(self, article_id: str) -> None:
        await self._archive.remove(canonical_id(article_id))
        await self._refresh_labels()

    async def set_slug(self, article_id: str, slug: str) -> None:
        """Replace the slug with the kebab-case form of ``slug``."""
        article_id = canonical_id(article_id)
        slug = slugify(slug.strip())
        if not slug:
            raise ValidationError("slug", "required")
        check_max_length("slug", slug, TITLE_MAX_LENGTH)
        await self._archive.set_slug(article_id, slug)

    async def set_summary(self, article_id: str, summary: str) -> None:
        """Replace the summary and recompute the read time."""
        article_id = canonical_id(article_id)
        summary = summary.strip()
        if not summary:
            raise ValidationError("summary", "required")
        check_summary(summary)

        current = await self._archive.get_by_id(article_id, is_draft=False)
        read_time = estimate_read_minutes(
            read_text(current.title, summary, current.cover_caption, current.content)
        )
        await self._archive.set_summary(article_id, summary, read_time)

    async def set_cover(self, article_id: str, cover_url: str, cover_caption: str = "") -> None:
        """Replace the cover URL, its caption or both; empty values keep what is stored."""
        article_id = canonical_id(article_id)
        (cover_url,) = sanitize_url(cover_url)
        cover_caption = collapse_whitespace(cover_caption)
        check_max_length("cover_caption", cover_caption, CAPTION_MAX_LENGTH)
        if not cover_url and not cover_caption:
            logger.info(f"Cover of {article_id} left unchanged")
            return

        current = await self._archive.get_by_id(article_id, is_draft=False)
        read_time = estimate_read_minutes(
            read_text(current.title, current.summary, cover_caption or current.cover_caption, current.content)
        )
        await self._archive.set_cover(article_id, cover_url, cover_caption, read_time)

    async def add_tag(self, article_id: str, tag_id: str) -> None:
        await self._archive.add_tag(canonical_id(article_id), normalize_label_id(tag_id, "tag_id"))
        await self._refresh_labels()

    async def remove_tag(self, article_id: str, tag_id: str) -> None:
        await self._archive.remove_tag(canonical_id(article_id), normalize_label_id(tag_id, "tag_id"))
        await self._refresh_labels()
