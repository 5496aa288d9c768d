"""
Shopfront Backend: Product Service (Product Resource Handler)
=============================================================

What:  List / get / create / update / delete products together with their
       category and tag associations.
How:   Issues SQLAlchemy statements on the request's AsyncSession and maps
       outcomes onto the application exception hierarchy.
Who:   Called by the /products route handlers.

Store interaction per operation:

    list    SELECT product (+ selectin category, tags)
    get     SELECT product WHERE id (+ selectin category, tags)
    create  INSERT product → INSERT product_tag × n → re-fetch
    update  UPDATE product WHERE id (rowcount) → [DELETE product_tag WHERE
            product_id → INSERT product_tag × n] → re-fetch
    delete  DELETE product WHERE id (rowcount)

Error Handling Strategy:
    ValidationError is raised before any statement is issued. NotFoundError
    is raised after a definitive lookup or a zero rowcount. Any other
    exception is logged with its traceback and re-raised as DatabaseError,
    whose client-facing message is generic. The session dependency rolls the
    transaction back whenever an exception leaves the handler.

Deleting a product issues no statement against product_tag; the join
rows are removed by the store's ON DELETE CASCADE rule.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shopfront.exceptions import DatabaseError, NotFoundError, ShopfrontError, ValidationError
from shopfront.models import Product, ProductTag
from shopfront.schemas.common import DeleteResponse
from shopfront.schemas.product import ProductCreate, ProductResponse, ProductUpdate

logger = logging.getLogger(__name__)


def _with_associations(statement):
    # populate_existing: objects already in the identity map (e.g. the row just
    # inserted) get their collections reloaded instead of served stale
    return statement.options(
        selectinload(Product.category),
        selectinload(Product.tags),
    ).execution_options(populate_existing=True)


class ProductService:
    """
    Business logic layer for product operations.

    Stateless: every method receives the request's session.
    """

    async def list_products(self, db: AsyncSession) -> List[ProductResponse]:
        """
        Return every product with its category and tags, in id order.

        No pagination, filtering or sorting options.

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(_with_associations(select(Product).order_by(Product.id)))
            products = result.scalars().all()
            return [ProductResponse.model_validate(product) for product in products]

        except Exception as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while retrieving products.",
                context={"error_type": type(e).__name__},
            )

    async def get_product(self, db: AsyncSession, product_id: int) -> ProductResponse:
        """
        Retrieve a single product by id.

        Raises:
            NotFoundError: No product with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            product = await self._fetch(db, product_id)
            if product is None:
                raise NotFoundError(resource="product", resource_id=str(product_id))
            return ProductResponse.model_validate(product)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while retrieving the product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

    async def create_product(self, db: AsyncSession, body: ProductCreate) -> ProductResponse:
        """
        Insert a product and its tag pairs, then return it re-fetched.

        Workflow Steps:
            1. Check product_name, price and stock are present (zero counts
               as present); otherwise ValidationError, no statement issued
            2. INSERT the product row; flush to obtain its id
            3. INSERT one product_tag row per distinct tag id (if any)
            4. Re-fetch with category and tags so the response reflects the
               stored associations

        Raises:
            ValidationError: Required field missing (→ 400)
            DatabaseError: Insert failed, e.g. unknown category/tag id (→ 500)
        """
        missing = body.missing_required_fields()
        if missing:
            raise ValidationError(
                message="Please provide product name, price, and stock.",
                context={"missing_fields": missing},
            )

        try:
            product = Product(**body.column_values())
            db.add(product)
            await db.flush()
            logger.info("Product created: %s", product.id)

            tag_ids = body.unique_tag_ids()
            if tag_ids:
                await self._attach_tags(db, product.id, tag_ids)

            created = await self._fetch(db, product.id)
            return ProductResponse.model_validate(created)

        except ShopfrontError:
            raise
        except Exception as e:
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while creating the product.",
                context={"error_type": type(e).__name__},
            )

    async def update_product(
        self,
        db: AsyncSession,
        product_id: int,
        body: ProductUpdate,
    ) -> ProductResponse:
        """
        Update the supplied columns and, when tagIds is given, replace the tag set.

        Tag replacement is wholesale: all existing pairs are deleted, then the
        new list is inserted (nothing inserted for an empty list, which leaves
        the product untagged). An absent tagIds leaves the pairs untouched.

        Raises:
            ValidationError: name/price/stock supplied as null or blank (→ 400)
            NotFoundError: No product with this id (→ 404)
            DatabaseError: Statement failed (→ 500)
        """
        invalid = body.invalid_fields()
        if invalid:
            raise ValidationError(
                message="Product name, price, and stock cannot be empty.",
                context={"invalid_fields": invalid},
            )

        try:
            values = body.column_values()
            if values:
                result = await db.execute(
                    update(Product).where(Product.id == product_id).values(**values)
                )
                affected = result.rowcount
            else:
                # Tags-only (or empty) body: nothing to UPDATE, so count the row instead
                affected = await db.scalar(
                    select(func.count()).select_from(Product).where(Product.id == product_id)
                )

            if not affected:
                raise NotFoundError(resource="product", resource_id=str(product_id))

            if body.tags_supplied:
                await db.execute(delete(ProductTag).where(ProductTag.product_id == product_id))
                tag_ids = body.unique_tag_ids()
                if tag_ids:
                    await self._attach_tags(db, product_id, tag_ids)

            logger.info(
                "Product %s updated: fields=%s, tags_replaced=%s",
                product_id,
                sorted(values),
                body.tags_supplied,
            )

            updated = await self._fetch(db, product_id)
            return ProductResponse.model_validate(updated)

        except ShopfrontError:
            raise
        except Exception as e:
            logger.error("Database error updating product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while updating the product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

    async def delete_product(self, db: AsyncSession, product_id: int) -> DeleteResponse:
        """
        Delete a product row.

        Raises:
            NotFoundError: No row removed (→ 404)
            DatabaseError: Statement failed (→ 500)
        """
        try:
            result = await db.execute(delete(Product).where(Product.id == product_id))
            if result.rowcount == 0:
                raise NotFoundError(resource="product", resource_id=str(product_id))

            logger.info("Product %s deleted", product_id)
            return DeleteResponse(deleted=result.rowcount)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while deleting the product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _fetch(self, db: AsyncSession, product_id: int) -> Optional[Product]:
        result = await db.execute(_with_associations(select(Product).where(Product.id == product_id)))
        return result.scalar_one_or_none()

    async def _attach_tags(self, db: AsyncSession, product_id: int, tag_ids: Iterable[int]) -> None:
        await db.execute(
            insert(ProductTag),
            [{"product_id": product_id, "tag_id": tag_id} for tag_id in tag_ids],
        )


product_service = ProductService()
