"""SQLAlchemy models for the archive database.

Tables: article, article_patch, article_link, article_tag, tag, topic
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from folio.api.constants import ABOUT_BLANK, CAPTION_MAX_LENGTH, LABEL_NAME_MAX_LENGTH, TITLE_MAX_LENGTH

# =============================================================================
# Base Class
# =============================================================================


class Base(DeclarativeBase):
    """Base class for archive models."""

    pass


def new_uuid() -> str:
    """Generate a canonical UUID string primary key."""
    return str(uuid.uuid4())


# =============================================================================
# Labels
# =============================================================================


class Topic(Base):
    """Topic an article belongs to (one-to-many)."""

    __tablename__ = "topic"

    id: Mapped[str] = mapped_column(String(LABEL_NAME_MAX_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(String(LABEL_NAME_MAX_LENGTH), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )


class Tag(Base):
    """Tag attached to articles (many-to-many)."""

    __tablename__ = "tag"

    id: Mapped[str] = mapped_column(String(LABEL_NAME_MAX_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(String(LABEL_NAME_MAX_LENGTH), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )


article_tag = Table(
    "article_tag",
    Base.metadata,
    Column("article_uuid", String(36), ForeignKey("article.uuid", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(LABEL_NAME_MAX_LENGTH), ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime, default=datetime.now, nullable=False),
)


# =============================================================================
# Articles
# =============================================================================


class Article(Base):
    """Draft or published article.

    ``draft`` and ``published_at`` move together: drafts have no
    publication date, published articles always have one.
    """

    __tablename__ = "article"

    uuid: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    topic_id: Mapped[str | None] = mapped_column(
        String(LABEL_NAME_MAX_LENGTH), ForeignKey("topic.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    summary: Mapped[str] = mapped_column(Text, default="", nullable=False)
    cover_url: Mapped[str] = mapped_column(Text, default=ABOUT_BLANK, nullable=False)
    cover_caption: Mapped[str] = mapped_column(String(CAPTION_MAX_LENGTH), default="", nullable=False)
    read_time: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    draft: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    pinned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    hidden: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    drafted_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    modified_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )

    topic: Mapped[Topic | None] = relationship(lazy="selectin")
    tags: Mapped[list[Tag]] = relationship(
        secondary=article_tag, lazy="selectin", order_by=Tag.name
    )


class ArticlePatch(Base):
    """Open amendment of a published article. NULL columns keep the article's value."""

    __tablename__ = "article_patch"

    article_uuid: Mapped[str] = mapped_column(
        String(36), ForeignKey("article.uuid", ondelete="CASCADE"), primary_key=True
    )
    topic_id: Mapped[str | None] = mapped_column(
        String(LABEL_NAME_MAX_LENGTH), ForeignKey("topic.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str | None] = mapped_column(String(TITLE_MAX_LENGTH), nullable=True)
    slug: Mapped[str | None] = mapped_column(String(TITLE_MAX_LENGTH), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_caption: Mapped[str | None] = mapped_column(String(CAPTION_MAX_LENGTH), nullable=True)
    read_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)


class ArticleLink(Base):
    """Expiring shareable link to a draft or patch."""

    __tablename__ = "article_link"

    article_uuid: Mapped[str] = mapped_column(
        String(36), ForeignKey("article.uuid", ondelete="CASCADE"), primary_key=True
    )
    shareable_link: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
