"""Patch lifecycle for published articles: revise, share, discard and release."""

from __future__ import annotations

import logging

from folio.api.repositories.base import ArchiveRepository
from folio.api.schemas.articles import ArticlePatch, ArticleRevision

from .common import canonical_id, derive_revision, prepare_revision, share_or_blank

logger = logging.getLogger(__name__)


class PatchesService:
    """Operations on the open patches of published articles.

    A patch is addressed by the UUID of the article it amends.
    """

    def __init__(self, archive: ArchiveRepository):
        self._archive = archive

    async def list(self) -> list[ArticlePatch]:
        return await self._archive.list_patches()

    async def revise(self, patch_id: str, revision: ArticleRevision | None) -> None:
        """Apply a partial revision to an open patch.

        Slug and read time are derived from the patch overlaid on its article
        merged with the new fields.

        Raises:
            NotFoundError: No open patch for this article
        """
        patch_id = canonical_id(patch_id)
        revision = prepare_revision(revision)

        patch = await self._archive.get_patch(patch_id)
        if revision.touches_content():
            article = await self._archive.get_by_id(patch_id, is_draft=False)
            revision = derive_revision(revision, patch.overlay(article))

        await self._archive.revise(patch_id, revision)

    async def share(self, patch_id: str) -> str:
        """Return a shareable link; failures carry ``shareable_link="about:blank"``."""
        return await share_or_blank(self._archive, patch_id)

    async def discard(self, patch_id: str) -> None:
        """Drop the patch; the published article stays as it is."""
        patch_id = canonical_id(patch_id)
        await self._archive.get_patch(patch_id)
        await self._archive.discard(patch_id)

    async def release(self, patch_id: str) -> None:
        """Merge the patch into its article and close it."""
        patch_id = canonical_id(patch_id)
        await self._archive.release(patch_id)
        logger.info(f"Released patch {patch_id}")
