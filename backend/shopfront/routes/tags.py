"""
Shopfront Backend: Tag Route Handlers
=====================================

What:  CRUD endpoints for tags; responses include the products carrying each tag.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.database import get_db_session
from shopfront.schemas.common import DeleteResponse, ErrorResponse
from shopfront.schemas.tag import TagBody, TagResponse
from shopfront.services.tag_service import tag_service

router = APIRouter(prefix="/tags", tags=["Tags"])

_NOT_FOUND = {404: {"description": "Tag not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "tag_name missing or blank", "model": ErrorResponse}}


@router.get("", response_model=List[TagResponse], summary="List all tags")
async def list_tags(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[TagResponse]:
    return await tag_service.list_all(db)


@router.get(
    "/{tag_id}",
    response_model=TagResponse,
    responses=_NOT_FOUND,
    summary="Get a single tag by id",
)
async def get_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> TagResponse:
    return await tag_service.get(db, tag_id)


@router.post(
    "",
    status_code=201,
    response_model=TagResponse,
    responses=_INVALID,
    summary="Create a tag",
)
async def create_tag(
    body: TagBody,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> TagResponse:
    return await tag_service.create(db, body.tag_name)


@router.put(
    "/{tag_id}",
    response_model=TagResponse,
    responses={**_INVALID, **_NOT_FOUND},
    summary="Rename a tag",
)
async def update_tag(
    tag_id: int,
    body: TagBody,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> TagResponse:
    return await tag_service.update(db, tag_id, body.tag_name)


@router.delete(
    "/{tag_id}",
    response_model=DeleteResponse,
    responses=_NOT_FOUND,
    summary="Delete a tag",
    description="The tag's product associations are removed with it.",
)
async def delete_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> DeleteResponse:
    return await tag_service.delete(db, tag_id)
