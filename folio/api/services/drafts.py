"""Draft lifecycle: start, revise, share, publish and discard."""

from __future__ import annotations

import logging

from folio.api.constants import CONTENT_MAX_BYTES, TITLE_MAX_LENGTH
from folio.api.core.errors import InternalError, InvalidIdentifierError, ValidationError
from folio.api.helpers import (
    check_max_bytes,
    check_max_length,
    collapse_whitespace,
    estimate_read_minutes,
    normalize_id,
    normalize_label_id,
    slugify,
)
from folio.api.repositories.base import ArchiveRepository
from folio.api.schemas.articles import Article, ArticleCreation, ArticleFilter, ArticleRevision, ArticleSummary

from .common import canonical_id, derive_revision, normalize_filter, prepare_revision, share_or_blank

logger = logging.getLogger(__name__)


class DraftsService:
    """Editorial operations on articles that are not published yet.

    Every identifier is normalized and every payload validated before the
    repository is called.
    """

    def __init__(self, archive: ArchiveRepository):
        self._archive = archive

    async def draft(self, creation: ArticleCreation | None) -> str:
        """Start a new draft and return its canonical UUID.

        Raises:
            InternalError: ``creation`` is missing or storage returned a malformed id
            ValidationError: Missing title, title over 256 chars or content over 3 MiB
        """
        if creation is None:
            raise InternalError("Cannot start a draft from a missing creation payload.")

        title = collapse_whitespace(creation.title)
        content = creation.content.strip()

        if not title:
            raise ValidationError("title", "required")
        check_max_length("title", title, TITLE_MAX_LENGTH)
        check_max_bytes("content", content, CONTENT_MAX_BYTES)

        prepared = creation.model_copy(
            update={
                "title": title,
                "content": content,
                "slug": slugify(title),
                "read_time": estimate_read_minutes(f"{title}\n{content}"),
            }
        )

        raw_id = await self._archive.draft(prepared)
        try:
            return normalize_id(raw_id)
        except InvalidIdentifierError as e:
            logger.error(f"Storage returned a malformed draft id: {raw_id!r}")
            raise InternalError("The new draft was stored under a malformed identifier.") from e

    async def publish(self, draft_id: str) -> None:
        await self._archive.publish(canonical_id(draft_id))

    async def list(self, article_filter: ArticleFilter | None = None) -> list[ArticleSummary]:
        return await self._archive.list(normalize_filter(article_filter), drafts_only=True)

    async def get(self, draft_id: str) -> Article:
        return await self._archive.get_by_id(canonical_id(draft_id), is_draft=True)

    async def get_by_link(self, link: str) -> Article:
        return await self._archive.get_by_link(link.strip())

    async def add_tag(self, draft_id: str, tag_id: str) -> None:
        await self._archive.add_tag(canonical_id(draft_id), normalize_label_id(tag_id, "tag_id"), is_draft=True)

    async def remove_tag(self, draft_id: str, tag_id: str) -> None:
        await self._archive.remove_tag(canonical_id(draft_id), normalize_label_id(tag_id, "tag_id"), is_draft=True)

    async def share(self, draft_id: str) -> str:
        """Return a shareable link; failures carry ``shareable_link="about:blank"``."""
        return await share_or_blank(self._archive, draft_id)

    async def discard(self, draft_id: str) -> None:
        await self._archive.discard(canonical_id(draft_id))

    async def revise(self, draft_id: str, revision: ArticleRevision | None) -> None:
        """Apply a partial revision to a draft.

        When a content-bearing field changes, the current draft is read first
        so the slug and read time reflect the merged result.
        """
        draft_id = canonical_id(draft_id)
        revision = prepare_revision(revision)

        if revision.touches_content():
            current = await self._archive.get_by_id(draft_id, is_draft=True)
            revision = derive_revision(revision, current)

        await self._archive.revise(draft_id, revision)
