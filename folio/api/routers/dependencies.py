"""Shared router dependencies.

Service getters import from ``folio.api.main`` lazily to avoid circular
imports; tests replace them through ``app.dependency_overrides``.
"""

import logging

from fastapi import Query

from folio.api.constants import DEFAULT_PAGE, DEFAULT_RECORDS_PER_PAGE, MAX_RECORDS_PER_PAGE
from folio.api.schemas.articles import ArticleFilter, Publication

logger = logging.getLogger(__name__)


# =============================================================================
# Lazy imports
# =============================================================================


def get_drafts_service() -> "DraftsService":
    """Get drafts service."""
    from folio.api.main import get_drafts_service as _get

    return _get()


def get_patches_service() -> "PatchesService":
    """Get patches service."""
    from folio.api.main import get_patches_service as _get

    return _get()


def get_articles_service() -> "ArticlesService":
    """Get articles service."""
    from folio.api.main import get_articles_service as _get

    return _get()


def get_tags_service() -> "TagsService":
    """Get tags service."""
    from folio.api.main import get_tags_service as _get

    return _get()


def get_topics_service() -> "TopicsService":
    """Get topics service."""
    from folio.api.main import get_topics_service as _get

    return _get()


# Type aliases for lazy import
DraftsService = object
PatchesService = object
ArticlesService = object
TagsService = object
TopicsService = object


# =============================================================================
# Query parsing
# =============================================================================


def parse_publication(value: str) -> Publication | None:
    """Parse a ``YYYY/MM`` publication window; malformed input means no window."""
    parts = value.strip().split("/")
    if len(parts) != 2:
        return None
    try:
        year, month = int(parts[0]), int(parts[1])
    except ValueError:
        logger.debug(f"Ignoring malformed publication window: {value!r}")
        return None
    if year < 1 or not 1 <= month <= 12:
        return None
    return Publication(month=month, year=year)


def article_filter(
    search: str = Query(default="", description="Words that must appear in the title"),
    topic: str = Query(default="", description="Topic identifier"),
    tag: str = Query(default="", description="Tag identifier"),
    publication: str = Query(default="", alias="from", description="Publication window as YYYY/MM"),
    page: int = Query(default=DEFAULT_PAGE),
    rpp: int = Query(default=DEFAULT_RECORDS_PER_PAGE),
) -> ArticleFilter:
    """Build an ``ArticleFilter`` from query parameters.

    Non-positive page sizes fall back to the defaults.
    """
    return ArticleFilter(
        search=search,
        topic=topic,
        tag=tag,
        publication=parse_publication(publication) if publication else None,
        page=page if page > 0 else DEFAULT_PAGE,
        rpp=min(rpp, MAX_RECORDS_PER_PAGE) if rpp > 0 else DEFAULT_RECORDS_PER_PAGE,
    )
