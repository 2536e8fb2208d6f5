"""Article transfer models.

These are the plain payloads exchanged between routers, services and
repositories. ORM models never leave the repository layer.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from folio.api.constants import ABOUT_BLANK, DEFAULT_PAGE, DEFAULT_RECORDS_PER_PAGE, MAX_RECORDS_PER_PAGE
from folio.api.schemas.labels import Label, LabelRef


class ArticleCreation(BaseModel):
    """Payload for starting a new draft."""

    title: str = Field(default="", description="Draft title")
    content: str = Field(default="", description="Markdown/HTML body")

    # Derived by the drafts service, never taken from clients
    slug: str = Field(default="", exclude=True)
    read_time: int = Field(default=0, ge=0, exclude=True)


class ArticleRevision(BaseModel):
    """Partial update for a draft or patch. Empty fields are left unchanged."""

    title: str = Field(default="", description="New title")
    summary: str = Field(default="", description="New summary")
    cover_url: str = Field(default="", description="New cover image URL")
    cover_caption: str = Field(default="", description="New cover caption")
    content: str = Field(default="", description="New body")
    topic: str = Field(default="", description="Topic identifier")

    # Derived by the services when a content-bearing field changes
    slug: str = Field(default="", exclude=True)
    read_time: int = Field(default=0, ge=0, exclude=True)

    def touches_content(self) -> bool:
        """Whether the slug and read time must be re-derived."""
        return bool(self.title or self.content or self.summary or self.cover_caption)


class Publication(BaseModel):
    """A (month, year) publication window."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1)


class ArticleFilter(BaseModel):
    """Listing filter for drafts and published articles."""

    search: str = Field(default="", description="Space separated title words")
    topic: str = Field(default="", description="Topic identifier")
    tag: str = Field(default="", description="Tag identifier")
    publication: Publication | None = Field(default=None)
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    rpp: int = Field(default=DEFAULT_RECORDS_PER_PAGE, ge=1, le=MAX_RECORDS_PER_PAGE)


class ArticleRequest(BaseModel):
    """Public address of a published article."""

    topic: str
    year: int
    month: int = Field(..., ge=1, le=12)
    slug: str


class ArticleSummary(BaseModel):
    """Listing entry."""

    uuid: str
    title: str
    slug: str
    summary: str = ""
    cover_url: str = ABOUT_BLANK
    read_time: int = 0
    is_pinned: bool = False
    topic: LabelRef | None = None
    published_at: datetime | None = None
    url: str = ABOUT_BLANK


class Article(BaseModel):
    """Full article, draft or published."""

    uuid: str
    title: str
    slug: str
    content: str = ""
    summary: str = ""
    cover_url: str = ABOUT_BLANK
    cover_caption: str = ""
    read_time: int = 0
    views: int = 0
    is_draft: bool = True
    is_pinned: bool = False
    is_hidden: bool = False
    topic: Label | None = None
    tags: list[Label] = Field(default_factory=list)
    drafted_at: datetime | None = None
    published_at: datetime | None = None
    modified_at: datetime | None = None
    updated_at: datetime | None = None


class ArticlePatch(BaseModel):
    """Pending revision of a published article."""

    article_uuid: str
    title: str | None = None
    slug: str | None = None
    topic: str | None = None
    summary: str | None = None
    cover_url: str | None = None
    cover_caption: str | None = None
    content: str | None = None
    read_time: int | None = None

    def overlay(self, article: Article) -> Article:
        """Return ``article`` as it would look once this patch is released."""
        changes = {
            field: value
            for field in ("title", "slug", "summary", "cover_url", "cover_caption", "content", "read_time")
            if (value := getattr(self, field))
        }
        return article.model_copy(update=changes)


class ShareableLink(BaseModel):
    """Result of sharing a draft or patch."""

    shareable_link: str
