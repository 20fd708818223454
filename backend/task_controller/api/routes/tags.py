"""Tag Routes — HTTP surface of the tag service."""

import logging

from fastapi import APIRouter, Depends, Query, status

from task_controller.api.dependencies import get_tag_service
from task_controller.schemas.base import IdResponse, SuccessResponse
from task_controller.schemas.tag import (
    TagCreate, TagEnvelope, TagListResponse, TagResponse,
)
from task_controller.services.tag_service import TagService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


@router.post(
    "", response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_tag(
    body: TagCreate, service: TagService = Depends(get_tag_service),
):
    tag_id = await service.create_tag(body.name)
    return IdResponse(id=tag_id)


@router.get("", response_model=TagListResponse)
async def list_tags(
    limit: int = Query(0, ge=0),
    offset: int = Query(0, ge=0),
    service: TagService = Depends(get_tag_service),
):
    tags = await service.list_tags(limit=limit, offset=offset)
    return TagListResponse(tags=[TagResponse.from_tag(t) for t in tags])


@router.get("/{tag_id}", response_model=TagEnvelope)
async def get_tag(
    tag_id: str, service: TagService = Depends(get_tag_service),
):
    tag = await service.get_tag(tag_id)
    return TagEnvelope(tag=TagResponse.from_tag(tag))


@router.delete("/{tag_id}", response_model=SuccessResponse)
async def delete_tag(
    tag_id: str, service: TagService = Depends(get_tag_service),
):
    """Delete a tag. Unknown ids succeed."""
    success = await service.delete_tag(tag_id)
    return SuccessResponse(success=success)
