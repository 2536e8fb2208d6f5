"""SQLAlchemy implementation of the archive repository.

Each public method runs in its own session and transaction obtained from
``DBManager.get_session``; a raised ``Problem`` rolls the whole call back.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import Select, delete, exists, extract, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from folio.api.constants import (
    ABOUT_BLANK,
    EXISTENCE_CHECK_TIMEOUT_SECONDS,
    SHARE_LINK_PREFIX,
    SHARE_LINK_TTL_DAYS,
)
from folio.api.core.errors import ActionRefusedError, ConflictError, GoneError, NotFoundError
from folio.api.db import models
from folio.api.db.manager import DBManager
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
from folio.api.schemas.labels import Label, LabelRef

from .base import ArchiveRepository

logger = logging.getLogger(__name__)

# Patch columns that override the article when set
PATCH_FIELDS: tuple[str, ...] = (
    "title",
    "slug",
    "content",
    "summary",
    "cover_url",
    "cover_caption",
    "topic_id",
)


# =============================================================================
# Row conversion
# =============================================================================


def to_label(row: models.Tag | models.Topic) -> Label:
    return Label(id=row.id, name=row.name, created_at=row.created_at, updated_at=row.updated_at)


def to_article(row: models.Article) -> Article:
    return Article(
        uuid=row.uuid,
        title=row.title,
        slug=row.slug,
        content=row.content,
        summary=row.summary,
        cover_url=row.cover_url,
        cover_caption=row.cover_caption,
        read_time=row.read_time,
        views=row.views,
        is_draft=row.draft,
        is_pinned=row.pinned,
        is_hidden=row.hidden,
        topic=to_label(row.topic) if row.topic else None,
        tags=[to_label(tag) for tag in row.tags],
        drafted_at=row.drafted_at,
        published_at=row.published_at,
        modified_at=row.modified_at,
        updated_at=row.updated_at,
    )


def to_patch(row: models.ArticlePatch) -> ArticlePatch:
    return ArticlePatch(
        article_uuid=row.article_uuid,
        title=row.title,
        slug=row.slug,
        topic=row.topic_id,
        summary=row.summary,
        cover_url=row.cover_url,
        cover_caption=row.cover_caption,
        content=row.content,
        read_time=row.read_time,
    )


def article_url(row: models.Article) -> str:
    """Public address ``/archive/{topic}/{year}/{month}/{slug}`` of a published article."""
    if row.draft or row.topic_id is None or row.published_at is None:
        return ABOUT_BLANK
    published = row.published_at
    return f"/archive/{row.topic_id}/{published.year}/{published.month}/{row.slug}"


def to_summary(row: models.Article) -> ArticleSummary:
    return ArticleSummary(
        uuid=row.uuid,
        title=row.title,
        slug=row.slug,
        summary=row.summary,
        cover_url=row.cover_url,
        read_time=row.read_time,
        is_pinned=row.pinned,
        topic=LabelRef(id=row.topic_id, url=f"/archive/{row.topic_id}") if row.topic_id else None,
        published_at=row.published_at,
        url=article_url(row),
    )


def new_shareable_link(article_id: str, now: datetime) -> str:
    digest = hashlib.sha1(f"{article_id} at {now.isoformat()}".encode("utf-8")).hexdigest()
    return f"{SHARE_LINK_PREFIX}{digest}"


class SQLArchiveRepository(ArchiveRepository):
    """Archive repository backed by an async SQLAlchemy engine."""

    def __init__(self, db: DBManager):
        self._db = db

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    async def _exists(session: AsyncSession, *criteria: Any) -> bool:
        """Bounded existence check used before inserts."""
        result = await asyncio.wait_for(
            session.scalar(select(exists().where(*criteria))),
            timeout=EXISTENCE_CHECK_TIMEOUT_SECONDS,
        )
        return bool(result)

    @staticmethod
    async def _get_article(session: AsyncSession, article_id: str, *, is_draft: bool) -> models.Article:
        row = await session.get(models.Article, article_id)
        if row is None or row.draft != is_draft:
            raise NotFoundError(article_id, "draft" if is_draft else "article")
        return row

    @staticmethod
    async def _flush_unique(session: AsyncSession, article_id: str) -> None:
        """Flush pending writes, reporting title/slug collisions as conflicts."""
        try:
            await session.flush()
        except IntegrityError as e:
            logger.warning(f"Unique constraint violated for article {article_id}: {e.orig}")
            raise ConflictError(
                "Another article already uses this title or slug.",
                title="Duplicate article.",
            ) from e

    @staticmethod
    async def _drop_link(session: AsyncSession, article_id: str) -> None:
        await session.execute(delete(models.ArticleLink).where(models.ArticleLink.article_uuid == article_id))

    @staticmethod
    async def _count_view(session: AsyncSession, article_id: str) -> None:
        # Keep updated_at untouched; views are not edits
        await session.execute(
            update(models.Article)
            .where(models.Article.uuid == article_id)
            .values(views=models.Article.views + 1, updated_at=models.Article.updated_at)
        )

    # =========================================================================
    # Drafts
    # =========================================================================

    async def draft(self, creation: ArticleCreation) -> str:
        async with self._db.get_session() as session:
            row = models.Article(
                uuid=models.new_uuid(),
                title=creation.title,
                slug=creation.slug,
                content=creation.content,
                read_time=creation.read_time,
                draft=True,
            )
            session.add(row)
            await self._flush_unique(session, row.uuid)
            logger.info(f"Draft created: {row.uuid}")
            return row.uuid

    async def publish(self, draft_id: str) -> None:
        async with self._db.get_session() as session:
            row = await session.get(models.Article, draft_id)
            if row is None:
                raise NotFoundError(draft_id, "draft")

            if not row.draft:
                logger.info(f"Article already published, nothing to do: {draft_id}")
                return

            if row.topic_id is None:
                raise ActionRefusedError(
                    "Cannot publish a draft without making it belong to a topic first.",
                    title="Could not publish draft.",
                )

            now = datetime.now()
            row.draft = False
            row.published_at = now
            row.updated_at = now
            await self._drop_link(session, draft_id)
            logger.info(f"Draft published: {draft_id}")

    # =========================================================================
    # Reads
    # =========================================================================

    def _list_statement(
        self,
        article_filter: ArticleFilter,
        *,
        hidden: bool,
        drafts_only: bool,
    ) -> Select[tuple[models.Article]]:
        stmt = select(models.Article)

        if drafts_only:
            stmt = stmt.where(models.Article.draft.is_(True), models.Article.published_at.is_(None))
        else:
            stmt = stmt.where(
                models.Article.draft.is_(False),
                models.Article.published_at.is_not(None),
                models.Article.hidden.is_(hidden),
            )
            if article_filter.publication is not None:
                stmt = stmt.where(
                    extract("year", models.Article.published_at) == article_filter.publication.year,
                    extract("month", models.Article.published_at) == article_filter.publication.month,
                )
            if article_filter.topic:
                stmt = stmt.where(models.Article.topic_id == article_filter.topic)

        if article_filter.tag:
            stmt = stmt.where(models.Article.tags.any(models.Tag.id == article_filter.tag))

        for word in article_filter.search.split():
            stmt = stmt.where(models.Article.title.ilike(f"%{word}%"))

        return (
            stmt.order_by(
                models.Article.pinned.desc(),
                models.Article.published_at.desc(),
                models.Article.drafted_at.desc(),
            )
            .limit(article_filter.rpp)
            .offset(article_filter.rpp * (article_filter.page - 1))
        )

    async def list(
        self,
        article_filter: ArticleFilter,
        *,
        hidden: bool = False,
        drafts_only: bool = False,
    ) -> list[ArticleSummary]:
        stmt = self._list_statement(article_filter, hidden=hidden, drafts_only=drafts_only)
        async with self._db.get_session() as session:
            rows = (await session.scalars(stmt)).all()
            return [to_summary(row) for row in rows]

    async def get_by_id(self, article_id: str, *, is_draft: bool) -> Article:
        async with self._db.get_session() as session:
            row = await self._get_article(session, article_id, is_draft=is_draft)
            return to_article(row)

    async def get_by_link(self, link: str) -> Article:
        async with self._db.get_session() as session:
            shared = await session.scalar(
                select(models.ArticleLink).where(models.ArticleLink.shareable_link == link)
            )
            if shared is None:
                raise GoneError(
                    "The requested shareable link does not point to any article.",
                    title="Orphan shareable link.",
                )
            if shared.expires_at <= datetime.now():
                raise GoneError(
                    "The requested shareable link has expired.",
                    title="Broken shareable link.",
                    expired_at=shared.expires_at.isoformat(),
                )

            row = await session.get(models.Article, shared.article_uuid)
            if row is None:
                raise GoneError(
                    "The requested shareable link does not point to any article.",
                    title="Orphan shareable link.",
                )

            article = to_article(row)
            patch = await session.get(models.ArticlePatch, row.uuid)
            if patch is not None:
                article = to_patch(patch).overlay(article)
                if patch.topic_id:
                    topic = await session.get(models.Topic, patch.topic_id)
                    if topic is not None:
                        article = article.model_copy(update={"topic": to_label(topic)})

            await self._count_view(session, row.uuid)
            return article.model_copy(update={"views": article.views + 1})

    async def get_published(self, request: ArticleRequest) -> Article:
        async with self._db.get_session() as session:
            row = await session.scalar(
                select(models.Article).where(
                    models.Article.draft.is_(False),
                    models.Article.hidden.is_(False),
                    models.Article.topic_id == request.topic,
                    models.Article.slug == request.slug,
                    extract("year", models.Article.published_at) == request.year,
                    extract("month", models.Article.published_at) == request.month,
                )
            )
            if row is None:
                raise NotFoundError(request.slug, "article")

            article = to_article(row)
            await self._count_view(session, row.uuid)
            return article.model_copy(update={"views": article.views + 1})

    async def publications(self) -> list[Publication]:
        year = extract("year", models.Article.published_at).label("year")
        month = extract("month", models.Article.published_at).label("month")
        stmt = (
            select(year, month)
            .where(
                models.Article.draft.is_(False),
                models.Article.hidden.is_(False),
                models.Article.published_at.is_not(None),
            )
            .group_by(year, month)
            .order_by(year.desc(), month.desc())
        )
        async with self._db.get_session() as session:
            result = await session.execute(stmt)
            return [Publication(month=int(m), year=int(y)) for y, m in result.all()]

    # =========================================================================
    # Tags
    # =========================================================================

    async def add_tag(self, article_id: str, tag_id: str, *, is_draft: bool = False) -> None:
        async with self._db.get_session() as session:
            await self._get_article(session, article_id, is_draft=is_draft)

            if await session.get(models.Tag, tag_id) is None:
                raise NotFoundError(tag_id, "tag")

            attached = await self._exists(
                session,
                models.article_tag.c.article_uuid == article_id,
                models.article_tag.c.tag_id == tag_id,
            )
            if attached:
                target = "article draft" if is_draft else "article"
                raise ConflictError(
                    f"The tag '{tag_id}' is already added to the current {target}.",
                    title="Could not add a tag.",
                    tag_id=tag_id,
                )

            await session.execute(insert(models.article_tag).values(article_uuid=article_id, tag_id=tag_id))
            logger.info(f"Tag {tag_id} added to {article_id}")

    async def remove_tag(self, article_id: str, tag_id: str, *, is_draft: bool = False) -> None:
        async with self._db.get_session() as session:
            await self._get_article(session, article_id, is_draft=is_draft)

            result = await session.execute(
                delete(models.article_tag).where(
                    models.article_tag.c.article_uuid == article_id,
                    models.article_tag.c.tag_id == tag_id,
                )
            )
            if result.rowcount == 0:
                raise NotFoundError(tag_id, "article tag")
            logger.info(f"Tag {tag_id} removed from {article_id}")

    # =========================================================================
    # Drafts and patches
    # =========================================================================

    async def share(self, article_id: str) -> str:
        async with self._db.get_session() as session:
            row = await session.get(models.Article, article_id)
            patched = row is not None and await session.get(models.ArticlePatch, article_id) is not None
            if row is None or not (row.draft or patched):
                raise NotFoundError(article_id, "draft")

            now = datetime.now()
            shared = await session.get(models.ArticleLink, article_id)
            if shared is not None:
                if shared.expires_at > now:
                    return shared.shareable_link
                await session.delete(shared)
                await session.flush()

            shared = models.ArticleLink(
                article_uuid=article_id,
                shareable_link=new_shareable_link(article_id, now),
                created_at=now,
                expires_at=now + timedelta(days=SHARE_LINK_TTL_DAYS),
            )
            session.add(shared)
            logger.info(f"Shareable link issued for {article_id}")
            return shared.shareable_link

    async def discard(self, article_id: str) -> None:
        async with self._db.get_session() as session:
            patch = await session.get(models.ArticlePatch, article_id)
            if patch is not None:
                await session.delete(patch)
                await self._drop_link(session, article_id)
                logger.info(f"Patch discarded: {article_id}")
                return

            row = await self._get_article(session, article_id, is_draft=True)
            await self._drop_link(session, article_id)
            await session.delete(row)
            logger.info(f"Draft discarded: {article_id}")

    async def revise(self, article_id: str, revision: ArticleRevision) -> None:
        async with self._db.get_session() as session:
            if revision.topic and await session.get(models.Topic, revision.topic) is None:
                raise NotFoundError(revision.topic, "topic")

            target: models.ArticlePatch | models.Article | None
            target = await session.get(models.ArticlePatch, article_id)
            if target is None:
                target = await self._get_article(session, article_id, is_draft=True)

            changes = {
                "title": revision.title,
                "summary": revision.summary,
                "cover_url": revision.cover_url,
                "cover_caption": revision.cover_caption,
                "content": revision.content,
                "topic_id": revision.topic,
                "slug": revision.slug,
            }
            for field, value in changes.items():
                if value:
                    setattr(target, field, value)
            if revision.slug:
                target.read_time = revision.read_time

            await self._flush_unique(session, article_id)
            logger.info(f"Revised {type(target).__tablename__} {article_id}")

    async def release(self, article_id: str) -> None:
        async with self._db.get_session() as session:
            patch = await session.get(models.ArticlePatch, article_id)
            if patch is None:
                raise NotFoundError(article_id, "article patch")

            row = await self._get_article(session, article_id, is_draft=False)
            for field in PATCH_FIELDS:
                value = getattr(patch, field)
                if value:
                    setattr(row, field, value)
            if patch.slug and patch.read_time is not None:
                row.read_time = patch.read_time

            now = datetime.now()
            row.modified_at = now
            row.updated_at = now

            await session.delete(patch)
            await self._drop_link(session, article_id)
            await self._flush_unique(session, article_id)
            logger.info(f"Patch released: {article_id}")

    async def get_patch(self, article_id: str) -> ArticlePatch:
        async with self._db.get_session() as session:
            patch = await session.get(models.ArticlePatch, article_id)
            if patch is None:
                raise NotFoundError(article_id, "article patch")
            return to_patch(patch)

    async def list_patches(self) -> list[ArticlePatch]:
        async with self._db.get_session() as session:
            rows = await session.scalars(select(models.ArticlePatch).order_by(models.ArticlePatch.created_at))
            return [to_patch(row) for row in rows]

    # =========================================================================
    # Published articles
    # =========================================================================

    async def amend(self, article_id: str) -> None:
        async with self._db.get_session() as session:
            await self._get_article(session, article_id, is_draft=False)

            if await self._exists(session, models.ArticlePatch.article_uuid == article_id):
                raise ConflictError(
                    "This article is already being amended. Release or discard the open patch first.",
                    title="Could not amend article.",
                )

            session.add(models.ArticlePatch(article_uuid=article_id))
            logger.info(f"Article amended: {article_id}")

    async def remove(self, article_id: str) -> None:
        async with self._db.get_session() as session:
            row = await self._get_article(session, article_id, is_draft=False)
            await session.execute(delete(models.ArticlePatch).where(models.ArticlePatch.article_uuid == article_id))
            await self._drop_link(session, article_id)
            await session.delete(row)
            logger.info(f"Article removed: {article_id}")

    async def _set_published(self, article_id: str, **values: Any) -> None:
        async with self._db.get_session() as session:
            row = await self._get_article(session, article_id, is_draft=False)
            for field, value in values.items():
                setattr(row, field, value)
            await self._flush_unique(session, article_id)
            logger.info(f"Article {article_id} updated: {', '.join(values)}")

    async def set_hidden(self, article_id: str, hidden: bool) -> None:
        await self._set_published(article_id, hidden=hidden)

    async def set_pinned(self, article_id: str, pinned: bool) -> None:
        await self._set_published(article_id, pinned=pinned)

    async def set_slug(self, article_id: str, slug: str) -> None:
        await self._set_published(article_id, slug=slug)

    async def set_summary(self, article_id: str, summary: str, read_time: int) -> None:
        await self._set_published(article_id, summary=summary, read_time=read_time)

    async def set_cover(self, article_id: str, cover_url: str, cover_caption: str, read_time: int) -> None:
        values: dict[str, Any] = {"read_time": read_time}
        if cover_url:
            values["cover_url"] = cover_url
        if cover_caption:
            values["cover_caption"] = cover_caption
        await self._set_published(article_id, **values)
