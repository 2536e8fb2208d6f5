"""Articles API router.

Public reads of published articles and shared links, plus editor-only
management endpoints.
"""

import logging

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, Field

from folio.api.auth import get_current_editor
from folio.api.constants import SHARE_LINK_PREFIX
from folio.api.schemas.articles import Article, ArticleFilter, ArticleRequest, ArticleSummary, Publication

from .dependencies import (
    ArticlesService,
    DraftsService,
    article_filter,
    get_articles_service,
    get_drafts_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["articles"])

editor_only = [Depends(get_current_editor)]


# =============================================================================
# Request Models
# =============================================================================


class ArticleRef(BaseModel):
    """Identifies a published article."""

    article_uuid: str = Field(..., description="Article UUID")


class ArticleTagRequest(ArticleRef):
    tag_id: str = Field(..., description="Tag identifier")


class SlugRequest(ArticleRef):
    slug: str = Field(..., description="New slug")


class SummaryRequest(ArticleRef):
    summary: str = Field(..., description="New summary")


class CoverRequest(ArticleRef):
    cover_url: str = Field(default="", description="Cover image URL")
    cover_caption: str = Field(default="", description="Cover caption")


# =============================================================================
# Public endpoints
# =============================================================================


@router.get("/archive.articles.list", response_model=list[ArticleSummary])
async def list_articles(
    filter_: ArticleFilter = Depends(article_filter),
    service: ArticlesService = Depends(get_articles_service),
) -> list[ArticleSummary]:
    """List visible published articles, pinned first."""
    return await service.list(filter_)


@router.get("/archive.articles.info", response_model=Article)
async def get_article(
    article_uuid: str = Query(..., description="Article UUID"),
    service: ArticlesService = Depends(get_articles_service),
) -> Article:
    return await service.get_by_id(article_uuid)


@router.get("/archive.articles.publications", response_model=list[Publication])
async def list_publications(service: ArticlesService = Depends(get_articles_service)) -> list[Publication]:
    """Months with at least one visible publication."""
    return await service.publications()


@router.get("/archive/s/{token}", response_model=Article)
async def get_shared_article(
    token: str,
    service: DraftsService = Depends(get_drafts_service),
) -> Article:
    """Read a draft or patched article through its shareable link."""
    return await service.get_by_link(f"{SHARE_LINK_PREFIX}{token}")


@router.get("/archive/{topic}/{year}/{month}/{slug}", response_model=Article)
async def read_article(
    topic: str,
    slug: str,
    year: int = Path(..., ge=1),
    month: int = Path(..., ge=1, le=12),
    service: ArticlesService = Depends(get_articles_service),
) -> Article:
    """Read a published article by its public address."""
    request = ArticleRequest(topic=topic, year=year, month=month, slug=slug)
    return await service.get(request)


# =============================================================================
# Editor endpoints
# =============================================================================


@router.get("/archive.articles.hidden.list", response_model=list[ArticleSummary], dependencies=editor_only)
async def list_hidden_articles(
    filter_: ArticleFilter = Depends(article_filter),
    service: ArticlesService = Depends(get_articles_service),
) -> list[ArticleSummary]:
    return await service.list_hidden(filter_)


@router.post("/archive.articles.amend", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def amend_article(
    request: ArticleRef,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    """Open a patch on a published article."""
    await service.amend(request.article_uuid)


@router.post("/archive.articles.hide", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def hide_article(
    request: ArticleRef,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.hide(request.article_uuid)


@router.post("/archive.articles.show", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def show_article(
    request: ArticleRef,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.show(request.article_uuid)


@router.post("/archive.articles.pin", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def pin_article(
    request: ArticleRef,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.pin(request.article_uuid)


@router.post("/archive.articles.unpin", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def unpin_article(
    request: ArticleRef,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.unpin(request.article_uuid)


@router.post("/archive.articles.remove", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def remove_article(
    request: ArticleRef,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.remove(request.article_uuid)


@router.post("/archive.articles.setSlug", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def set_article_slug(
    request: SlugRequest,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.set_slug(request.article_uuid, request.slug)


@router.post("/archive.articles.setSummary", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def set_article_summary(
    request: SummaryRequest,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.set_summary(request.article_uuid, request.summary)


@router.post("/archive.articles.setCover", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def set_article_cover(
    request: CoverRequest,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.set_cover(request.article_uuid, request.cover_url, request.cover_caption)


@router.post("/archive.articles.tags.add", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def add_article_tag(
    request: ArticleTagRequest,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.add_tag(request.article_uuid, request.tag_id)


@router.post("/archive.articles.tags.remove", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def remove_article_tag(
    request: ArticleTagRequest,
    service: ArticlesService = Depends(get_articles_service),
) -> None:
    await service.remove_tag(request.article_uuid, request.tag_id)
