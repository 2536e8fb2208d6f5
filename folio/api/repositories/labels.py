"""SQLAlchemy implementations of the tag and topic repositories."""

from __future__ import annotations

import logging
from abc import abstractmethod

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from folio.api.core.errors import ConflictError, NotFoundError
from folio.api.db import models
from folio.api.db.manager import DBManager
from folio.api.schemas.labels import Label

from .archive import to_label
from .base import LabelsRepository, TagsRepository, TopicsRepository

logger = logging.getLogger(__name__)


class SQLLabelsRepository(LabelsRepository):
    """Shared CRUD for tags and topics.

    Subclasses say how articles reference the label through ``_reassign``
    and ``_detach``.
    """

    model: type[models.Tag] | type[models.Topic]
    record_type: str

    def __init__(self, db: DBManager):
        self._db = db

    @abstractmethod
    async def _reassign(self, session: AsyncSession, old_id: str, new_id: str) -> None:
        """Point every article reference at ``new_id``."""

    @abstractmethod
    async def _detach(self, session: AsyncSession, label_id: str) -> None:
        """Drop every article reference to ``label_id``."""

    async def _check_free(self, session: AsyncSession, label_id: str | None, name: str, *, ignore: str = "") -> None:
        criteria = [func.lower(self.model.name) == name.lower()]
        if label_id is not None:
            criteria.append(self.model.id == label_id)
        taken = await session.scalar(select(self.model.id).where(or_(*criteria), self.model.id != ignore).limit(1))
        if taken is not None:
            raise ConflictError(
                f"The {self.record_type} '{name}' already exists.",
                title=f"Duplicate {self.record_type}.",
                record_id=taken,
            )

    async def create(self, label_id: str, name: str) -> None:
        async with self._db.get_session() as session:
            await self._check_free(session, label_id, name)
            session.add(self.model(id=label_id, name=name))
            logger.info(f"{self.record_type.capitalize()} created: {label_id}")

    async def list(self) -> list[Label]:
        async with self._db.get_session() as session:
            rows = await session.scalars(select(self.model).order_by(func.lower(self.model.name)))
            return [to_label(row) for row in rows]

    async def update(self, label_id: str, new_id: str, name: str) -> None:
        async with self._db.get_session() as session:
            row = await session.get(self.model, label_id)
            if row is None:
                raise NotFoundError(label_id, self.record_type)

            await self._check_free(session, new_id if new_id != label_id else None, name, ignore=label_id)

            if new_id == label_id:
                row.name = name
            else:
                session.add(self.model(id=new_id, name=name, created_at=row.created_at))
                await session.flush()
                await self._reassign(session, label_id, new_id)
                await session.delete(row)
            logger.info(f"{self.record_type.capitalize()} updated: {label_id} -> {new_id}")

    async def remove(self, label_id: str) -> None:
        async with self._db.get_session() as session:
            row = await session.get(self.model, label_id)
            if row is None:
                raise NotFoundError(label_id, self.record_type)
            await self._detach(session, label_id)
            await session.delete(row)
            logger.info(f"{self.record_type.capitalize()} removed: {label_id}")


class SQLTagsRepository(SQLLabelsRepository, TagsRepository):
    model = models.Tag
    record_type = "tag"

    async def _reassign(self, session: AsyncSession, old_id: str, new_id: str) -> None:
        await session.execute(
            update(models.article_tag).where(models.article_tag.c.tag_id == old_id).values(tag_id=new_id)
        )

    async def _detach(self, session: AsyncSession, label_id: str) -> None:
        await session.execute(delete(models.article_tag).where(models.article_tag.c.tag_id == label_id))


class SQLTopicsRepository(SQLLabelsRepository, TopicsRepository):
    model = models.Topic
    record_type = "topic"

    async def _set_topic(self, session: AsyncSession, old_id: str, new_id: str | None) -> None:
        await session.execute(
            update(models.Article)
            .where(models.Article.topic_id == old_id)
            .values(topic_id=new_id, updated_at=models.Article.updated_at)
        )
        await session.execute(
            update(models.ArticlePatch).where(models.ArticlePatch.topic_id == old_id).values(topic_id=new_id)
        )

    async def _reassign(self, session: AsyncSession, old_id: str, new_id: str) -> None:
        await self._set_topic(session, old_id, new_id)

    async def _detach(self, session: AsyncSession, label_id: str) -> None:
        await self._set_topic(session, label_id, None)
