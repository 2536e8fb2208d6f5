"""Drafts API router.

Editor-only endpoints for starting, revising, sharing, publishing and
discarding drafts.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from folio.api.auth import get_current_editor
from folio.api.schemas.articles import (
    Article,
    ArticleCreation,
    ArticleFilter,
    ArticleRevision,
    ArticleSummary,
    ShareableLink,
)

from .dependencies import DraftsService, article_filter, get_drafts_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["drafts"], dependencies=[Depends(get_current_editor)])


# =============================================================================
# Request/Response Models
# =============================================================================


class DraftRef(BaseModel):
    """Identifies a draft."""

    draft_uuid: str = Field(..., description="Draft UUID")


class DraftTagRequest(DraftRef):
    """Tag (de)attachment request."""

    tag_id: str = Field(..., description="Tag identifier")


class DraftRevisionRequest(ArticleRevision):
    """Revision of a draft."""

    draft_uuid: str = Field(..., description="Draft UUID")


class DraftCreated(BaseModel):
    """Response for a started draft."""

    draft_uuid: str


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/archive.drafts.start", response_model=DraftCreated, status_code=status.HTTP_201_CREATED)
async def start_draft(
    creation: ArticleCreation,
    service: DraftsService = Depends(get_drafts_service),
) -> DraftCreated:
    """Start a new draft."""
    draft_uuid = await service.draft(creation)
    logger.info(f"Draft started: {draft_uuid}")
    return DraftCreated(draft_uuid=draft_uuid)


@router.post("/archive.drafts.publish", status_code=status.HTTP_204_NO_CONTENT)
async def publish_draft(
    request: DraftRef,
    service: DraftsService = Depends(get_drafts_service),
) -> None:
    """Publish a draft. Publishing twice is a no-op."""
    await service.publish(request.draft_uuid)


@router.get("/archive.drafts.list", response_model=list[ArticleSummary])
async def list_drafts(
    filter_: ArticleFilter = Depends(article_filter),
    service: DraftsService = Depends(get_drafts_service),
) -> list[ArticleSummary]:
    """List drafts."""
    return await service.list(filter_)


@router.get("/archive.drafts.info", response_model=Article)
async def get_draft(
    draft_uuid: str = Query(..., description="Draft UUID"),
    service: DraftsService = Depends(get_drafts_service),
) -> Article:
    """Get a draft."""
    return await service.get(draft_uuid)


@router.post("/archive.drafts.share", response_model=ShareableLink)
async def share_draft(
    request: DraftRef,
    service: DraftsService = Depends(get_drafts_service),
) -> ShareableLink:
    """Get or issue a shareable link for a draft."""
    return ShareableLink(shareable_link=await service.share(request.draft_uuid))


@router.post("/archive.drafts.revise", status_code=status.HTTP_204_NO_CONTENT)
async def revise_draft(
    request: DraftRevisionRequest,
    service: DraftsService = Depends(get_drafts_service),
) -> None:
    """Apply a partial revision to a draft."""
    await service.revise(request.draft_uuid, request)


@router.post("/archive.drafts.discard", status_code=status.HTTP_204_NO_CONTENT)
async def discard_draft(
    request: DraftRef,
    service: DraftsService = Depends(get_drafts_service),
) -> None:
    """Delete a draft."""
    await service.discard(request.draft_uuid)


@router.post("/archive.drafts.tags.add", status_code=status.HTTP_204_NO_CONTENT)
async def add_draft_tag(
    request: DraftTagRequest,
    service: DraftsService = Depends(get_drafts_service),
) -> None:
    """Attach a tag to a draft."""
    await service.add_tag(request.draft_uuid, request.tag_id)


@router.post("/archive.drafts.tags.remove", status_code=status.HTTP_204_NO_CONTENT)
async def remove_draft_tag(
    request: DraftTagRequest,
    service: DraftsService = Depends(get_drafts_service),
) -> None:
    """Detach a tag from a draft."""
    await service.remove_tag(request.draft_uuid, request.tag_id)
