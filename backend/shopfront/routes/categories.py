"""
Shopfront Backend: Category Route Handlers
==========================================

What:  CRUD endpoints for categories; responses include each category's products.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.database import get_db_session
from shopfront.schemas.category import CategoryBody, CategoryResponse
from shopfront.schemas.common import DeleteResponse, ErrorResponse
from shopfront.services.category_service import category_service

router = APIRouter(prefix="/categories", tags=["Categories"])

_NOT_FOUND = {404: {"description": "Category not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "category_name missing or blank", "model": ErrorResponse}}


@router.get("", response_model=List[CategoryResponse], summary="List all categories")
async def list_categories(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[CategoryResponse]:
    return await category_service.list_all(db)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses=_NOT_FOUND,
    summary="Get a single category by id",
)
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> CategoryResponse:
    return await category_service.get(db, category_id)


@router.post(
    "",
    status_code=201,
    response_model=CategoryResponse,
    responses=_INVALID,
    summary="Create a category",
)
async def create_category(
    body: CategoryBody,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> CategoryResponse:
    return await category_service.create(db, body.category_name)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={**_INVALID, **_NOT_FOUND},
    summary="Rename a category",
)
async def update_category(
    category_id: int,
    body: CategoryBody,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> CategoryResponse:
    return await category_service.update(db, category_id, body.category_name)


@router.delete(
    "/{category_id}",
    response_model=DeleteResponse,
    responses=_NOT_FOUND,
    summary="Delete a category",
    description="Products in the category are kept with category_id set to null.",
)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> DeleteResponse:
    return await category_service.delete(db, category_id)
