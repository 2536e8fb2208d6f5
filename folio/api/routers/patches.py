"""Patches API router.

Editor-only endpoints for the open amendments of published articles.
"""

import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from folio.api.auth import get_current_editor
from folio.api.schemas.articles import ArticlePatch, ArticleRevision, ShareableLink

from .dependencies import PatchesService, get_patches_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["patches"], dependencies=[Depends(get_current_editor)])


class PatchRef(BaseModel):
    """Identifies a patch by the UUID of the article it amends."""

    article_uuid: str = Field(..., description="Article UUID")


class PatchRevisionRequest(ArticleRevision):
    """Revision of a patch."""

    article_uuid: str = Field(..., description="Article UUID")


@router.get("/archive.patches.list", response_model=list[ArticlePatch])
async def list_patches(service: PatchesService = Depends(get_patches_service)) -> list[ArticlePatch]:
    """List open patches."""
    return await service.list()


@router.post("/archive.patches.revise", status_code=status.HTTP_204_NO_CONTENT)
async def revise_patch(
    request: PatchRevisionRequest,
    service: PatchesService = Depends(get_patches_service),
) -> None:
    await service.revise(request.article_uuid, request)


@router.post("/archive.patches.share", response_model=ShareableLink)
async def share_patch(
    request: PatchRef,
    service: PatchesService = Depends(get_patches_service),
) -> ShareableLink:
    return ShareableLink(shareable_link=await service.share(request.article_uuid))


@router.post("/archive.patches.discard", status_code=status.HTTP_204_NO_CONTENT)
async def discard_patch(
    request: PatchRef,
    service: PatchesService = Depends(get_patches_service),
) -> None:
    await service.discard(request.article_uuid)


@router.post("/archive.patches.release", status_code=status.HTTP_204_NO_CONTENT)
async def release_patch(
    request: PatchRef,
    service: PatchesService = Depends(get_patches_service),
) -> None:
    """Merge a patch into its article."""
    await service.release(request.article_uuid)
