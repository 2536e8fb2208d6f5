"""Storage interfaces for the archive.

Services depend only on these abstract base classes so the lifecycle rules
stay independent of the database engine. Implementations raise the
``Problem`` subclasses from ``folio.api.core.errors`` and never return
partially applied writes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from folio.api.schemas.articles import (
    Article,
    ArticleCreation,
    ArticleFilter,
    ArticlePatch,
    ArticleRequest,
    ArticleRevision,
    ArticleSummary,
    Publication,
)
from folio.api.schemas.labels import Label


class ArchiveRepository(ABC):
    """Persistence of drafts, published articles, patches and links."""

    # =========================================================================
    # Drafts
    # =========================================================================

    @abstractmethod
    async def draft(self, creation: ArticleCreation) -> str:
        """Insert a new draft and return its UUID."""
        ...

    @abstractmethod
    async def publish(self, draft_id: str) -> None:
        """Turn a draft into a published article.

        Publishing an already published article is a no-op.

        Raises:
            NotFoundError: Unknown identifier
            ActionRefusedError: The draft has no topic
        """
        ...

    # =========================================================================
    # Reads
    # =========================================================================

    @abstractmethod
    async def list(
        self,
        article_filter: ArticleFilter,
        *,
        hidden: bool = False,
        drafts_only: bool = False,
    ) -> list[ArticleSummary]:
        """List drafts, or published articles with the given visibility."""
        ...

    @abstractmethod
    async def get_by_id(self, article_id: str, *, is_draft: bool) -> Article:
        """Fetch a draft (``is_draft``) or a published article.

        Raises:
            NotFoundError: No article in the requested state
        """
        ...

    @abstractmethod
    async def get_by_link(self, link: str) -> Article:
        """Fetch the draft or patched article behind a shareable link.

        Raises:
            GoneError: The link is unknown or expired
        """
        ...

    @abstractmethod
    async def get_published(self, request: ArticleRequest) -> Article:
        """Fetch a visible published article by its public address and count a view."""
        ...

    @abstractmethod
    async def publications(self) -> list[Publication]:
        """Distinct (month, year) pairs with visible publications, newest first."""
        ...

    # =========================================================================
    # Tags
    # =========================================================================

    @abstractmethod
    async def add_tag(self, article_id: str, tag_id: str, *, is_draft: bool = False) -> None:
        """Attach a tag.

        Raises:
            NotFoundError: Unknown article or tag
            ConflictError: The tag is already attached
        """
        ...

    @abstractmethod
    async def remove_tag(self, article_id: str, tag_id: str, *, is_draft: bool = False) -> None:
        """Detach a tag.

        Raises:
            NotFoundError: Unknown article, or the tag is not attached
        """
        ...

    # =========================================================================
    # Drafts and patches
    # =========================================================================

    @abstractmethod
    async def share(self, article_id: str) -> str:
        """Return an unexpired shareable link for a draft or patch, issuing one if needed."""
        ...

    @abstractmethod
    async def discard(self, article_id: str) -> None:
        """Drop a patch if one is open, otherwise drop the draft."""
        ...

    @abstractmethod
    async def revise(self, article_id: str, revision: ArticleRevision) -> None:
        """Apply the non-empty fields of ``revision`` to a patch or draft."""
        ...

    @abstractmethod
    async def release(self, article_id: str) -> None:
        """Merge a patch into its article and drop the patch in one transaction."""
        ...

    @abstractmethod
    async def get_patch(self, article_id: str) -> ArticlePatch:
        """Fetch the open patch of a published article."""
        ...

    @abstractmethod
    async def list_patches(self) -> list[ArticlePatch]:
        """List every open patch."""
        ...

    # =========================================================================
    # Published articles
    # =========================================================================

    @abstractmethod
    async def amend(self, article_id: str) -> None:
        """Open an empty patch on a published article.

        Raises:
            ConflictError: A patch is already open
        """
        ...

    @abstractmethod
    async def remove(self, article_id: str) -> None:
        """Delete a published article."""
        ...

    @abstractmethod
    async def set_hidden(self, article_id: str, hidden: bool) -> None:
        ...

    @abstractmethod
    async def set_pinned(self, article_id: str, pinned: bool) -> None:
        ...

    @abstractmethod
    async def set_slug(self, article_id: str, slug: str) -> None:
        ...

    @abstractmethod
    async def set_summary(self, article_id: str, summary: str, read_time: int) -> None:
        ...

    @abstractmethod
    async def set_cover(self, article_id: str, cover_url: str, cover_caption: str, read_time: int) -> None:
        """Set the non-empty cover fields and the recomputed read time."""


class LabelsRepository(ABC):
    """Persistence of tags or topics."""

    @abstractmethod
    async def create(self, label_id: str, name: str) -> None:
        """Insert a label.

        Raises:
            ConflictError: The id or name is taken
        """
        ...

    @abstractmethod
    async def list(self) -> list[Label]:
        """List every label ordered by name."""
        ...

    @abstractmethod
    async def update(self, label_id: str, new_id: str, name: str) -> None:
        """Rename a label, carrying its article associations to ``new_id``."""
        ...

    @abstractmethod
    async def remove(self, label_id: str) -> None:
        """Delete a label and detach it from every article."""
        ...


class TagsRepository(LabelsRepository):
    """Persistence of tags."""


class TopicsRepository(LabelsRepository):
    """Persistence of topics."""
