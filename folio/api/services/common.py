"""Rules shared by the drafts, patches and articles services."""

import logging

from folio.api.constants import (
    ABOUT_BLANK,
    CAPTION_MAX_LENGTH,
    CONTENT_MAX_BYTES,
    SUMMARY_MAX_LENGTH,
    SUMMARY_MIN_LENGTH,
    TITLE_MAX_LENGTH,
)
from folio.api.core.errors import InternalError, Problem
from folio.api.helpers import (
    check_max_bytes,
    check_max_length,
    check_min_length,
    collapse_whitespace,
    estimate_read_minutes,
    normalize_id,
    sanitize_url,
    search_words,
    slugify,
)
from folio.api.observability.logger import set_context
from folio.api.repositories.base import ArchiveRepository
from folio.api.schemas.articles import Article, ArticleFilter, ArticleRevision

logger = logging.getLogger(__name__)


def canonical_id(raw: str) -> str:
    """Normalize an article UUID and tag the logging context with it."""
    value = normalize_id(raw)
    set_context(article_id=value)
    return value


def normalize_filter(article_filter: ArticleFilter | None) -> ArticleFilter:
    """Strip search input down to bare words and kebab-case the label filters."""
    article_filter = article_filter or ArticleFilter()
    return article_filter.model_copy(
        update={
            "search": " ".join(search_words(article_filter.search)),
            "topic": slugify(article_filter.topic),
            "tag": slugify(article_filter.tag),
        }
    )


def check_summary(summary: str) -> None:
    check_min_length("summary", summary, SUMMARY_MIN_LENGTH)
    check_max_length("summary", summary, SUMMARY_MAX_LENGTH)


def prepare_revision(revision: ArticleRevision | None) -> ArticleRevision:
    """Trim every field of ``revision`` and enforce the length rules.

    Derived fields (slug, read time) are reset; see ``derive_revision``.

    Raises:
        InternalError: ``revision`` is missing
        ValidationError: A field is over (or, for summaries, under) its limit
        UnprocessableURLError: The cover URL is not an absolute request URI
    """
    if revision is None:
        raise InternalError("Cannot revise an article from a missing revision payload.")

    title = collapse_whitespace(revision.title)
    summary = revision.summary.strip()
    cover_caption = collapse_whitespace(revision.cover_caption)
    content = revision.content.strip()

    check_max_length("title", title, TITLE_MAX_LENGTH)
    check_max_bytes("content", content, CONTENT_MAX_BYTES)
    check_summary(summary)
    check_max_length("cover_caption", cover_caption, CAPTION_MAX_LENGTH)
    (cover_url,) = sanitize_url(revision.cover_url)

    return revision.model_copy(
        update={
            "title": title,
            "summary": summary,
            "cover_url": cover_url,
            "cover_caption": cover_caption,
            "content": content,
            "topic": slugify(revision.topic),
            "slug": "",
            "read_time": 0,
        }
    )


def read_text(title: str, summary: str, cover_caption: str, content: str) -> str:
    """Text measured for read time, in reading order."""
    return "\n".join((title, summary, cover_caption, content))


def derive_revision(revision: ArticleRevision, current: Article) -> ArticleRevision:
    """Fill slug and read time from the revision merged over ``current``."""
    title = revision.title or current.title
    text = read_text(
        title,
        revision.summary or current.summary,
        revision.cover_caption or current.cover_caption,
        revision.content or current.content,
    )
    return revision.model_copy(update={"slug": slugify(title), "read_time": estimate_read_minutes(text)})


async def share_or_blank(archive: ArchiveRepository, raw_id: str) -> str:
    """Share a draft or patch.

    Failures are re-raised with ``shareable_link`` set to ``about:blank`` so
    API consumers always receive a usable link value.
    """
    try:
        link = await archive.share(canonical_id(raw_id))
    except Problem as e:
        e.extensions["shareable_link"] = ABOUT_BLANK
        raise
    except Exception as e:
        logger.error(f"Unexpected failure while sharing {raw_id}: {e}", exc_info=True)
        raise InternalError(shareable_link=ABOUT_BLANK) from e

    if not link:
        raise InternalError("No shareable link was issued.", shareable_link=ABOUT_BLANK)
    return link
