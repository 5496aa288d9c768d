"""
Shopfront Backend: Product Route Handlers
=========================================

What:  The five product endpoints (list, get, create, update, delete).
How:   Extracts the path id / JSON body, delegates to ProductService.
Who:   Storefront and admin clients.

Error responses (rendered by the global exception handlers):
    HTTP 400: Required field missing or set to null (ValidationError)
    HTTP 404: No product with this id (NotFoundError)
    HTTP 422: Body or path failed schema validation (FastAPI)
    HTTP 500: Store failure (DatabaseError), generic message only
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.database import get_db_session
from shopfront.schemas.common import DeleteResponse, ErrorResponse
from shopfront.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from shopfront.services.product_service import product_service


# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=List[ProductResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all products",
    description="Returns every product with its category and tags. No pagination.",
)
async def list_products(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[ProductResponse]:
    return await product_service.list_products(db)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single product by id",
)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> ProductResponse:
    return await product_service.get_product(db, product_id)


@router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    responses={
        400: {"description": "product_name, price or stock missing", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a product",
    description=(
        "Creates a product from product_name, price and stock, optionally filed under "
        "category_id and tagged with tagIds. Returns the stored product with its associations."
    ),
)
async def create_product(
    body: ProductCreate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> ProductResponse:
    """
    Create a product.

    Example:
        POST /api/products
        {"product_name": "Widget", "price": 9.99, "stock": 5, "category_id": 1, "tagIds": [1, 2]}
    """
    return await product_service.create_product(db, body)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"description": "product_name, price or stock set to null", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a product",
    description=(
        "Updates the supplied fields. A tagIds list (even empty) replaces the product's "
        "tags; omitting tagIds leaves them unchanged."
    ),
)
async def update_product(
    product_id: int,
    body: ProductUpdate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> ProductResponse:
    return await product_service.update_product(db, product_id, body)


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a product",
)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> DeleteResponse:
    return await product_service.delete_product(db, product_id)
