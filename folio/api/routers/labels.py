"""Tags and topics API routers.

Listings are public and served from the service cache; writes are
editor-only.
"""

import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from folio.api.auth import get_current_editor
from folio.api.schemas.labels import Label, LabelCreation

from .dependencies import TagsService, TopicsService, get_tags_service, get_topics_service

logger = logging.getLogger(__name__)

tags_router = APIRouter(tags=["tags"])
topics_router = APIRouter(tags=["topics"])

editor_only = [Depends(get_current_editor)]


# =============================================================================
# Request/Response Models
# =============================================================================


class TagRef(BaseModel):
    tag_id: str = Field(..., description="Tag identifier")


class TagUpdateRequest(LabelCreation):
    tag_id: str = Field(..., description="Tag identifier")


class TagCreated(BaseModel):
    tag_id: str


class TopicRef(BaseModel):
    topic_id: str = Field(..., description="Topic identifier")


class TopicUpdateRequest(LabelCreation):
    topic_id: str = Field(..., description="Topic identifier")


class TopicCreated(BaseModel):
    topic_id: str


# =============================================================================
# Tags
# =============================================================================


@tags_router.get("/archive.tags.list", response_model=list[Label])
async def list_tags(service: TagsService = Depends(get_tags_service)) -> list[Label]:
    return await service.list()


@tags_router.post(
    "/archive.tags.add",
    response_model=TagCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=editor_only,
)
async def add_tag(
    request: LabelCreation,
    service: TagsService = Depends(get_tags_service),
) -> TagCreated:
    return TagCreated(tag_id=await service.create(request))


@tags_router.post("/archive.tags.set", response_model=TagCreated, dependencies=editor_only)
async def set_tag(
    request: TagUpdateRequest,
    service: TagsService = Depends(get_tags_service),
) -> TagCreated:
    """Rename a tag; the response carries its new id."""
    return TagCreated(tag_id=await service.update(request.tag_id, request))


@tags_router.post("/archive.tags.remove", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def remove_tag(
    request: TagRef,
    service: TagsService = Depends(get_tags_service),
) -> None:
    await service.remove(request.tag_id)


# =============================================================================
# Topics
# =============================================================================


@topics_router.get("/archive.topics.list", response_model=list[Label])
async def list_topics(service: TopicsService = Depends(get_topics_service)) -> list[Label]:
    return await service.list()


@topics_router.post(
    "/archive.topics.add",
    response_model=TopicCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=editor_only,
)
async def add_topic(
    request: LabelCreation,
    service: TopicsService = Depends(get_topics_service),
) -> TopicCreated:
    return TopicCreated(topic_id=await service.create(request))


@topics_router.post("/archive.topics.set", response_model=TopicCreated, dependencies=editor_only)
async def set_topic(
    request: TopicUpdateRequest,
    service: TopicsService = Depends(get_topics_service),
) -> TopicCreated:
    """Rename a topic; the response carries its new id."""
    return TopicCreated(topic_id=await service.update(request.topic_id, request))


@topics_router.post("/archive.topics.remove", status_code=status.HTTP_204_NO_CONTENT, dependencies=editor_only)
async def remove_topic(
    request: TopicRef,
    service: TopicsService = Depends(get_topics_service),
) -> None:
    await service.remove(request.topic_id)
