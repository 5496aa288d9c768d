"""
Shopfront Backend: Named Resource Service Base
==============================================

What:  Shared CRUD logic for the catalogue's single-column lookup entities
       (Category, Tag): an integer id, one required name column, and a
       products collection returned alongside each record.
How:   Concrete services set the class attributes below; every operation is
       written once here.
Who:   Subclassed by CategoryService and TagService.

Contract (identical for both resources):
    list    → every record with its products, id order
    get     → NotFoundError when absent
    create  → ValidationError when the name is absent, null or blank
    update  → ValidationError as above; NotFoundError on zero rowcount
    delete  → NotFoundError on zero rowcount; products/join rows are handled
              by the store's ON DELETE rules
"""

import logging
from typing import Any, ClassVar, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shopfront.database import Base
from shopfront.exceptions import DatabaseError, NotFoundError, ShopfrontError, ValidationError
from shopfront.schemas.common import DeleteResponse

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
ResponseType = TypeVar("ResponseType", bound=BaseModel)


class NamedResourceService(Generic[ModelType, ResponseType]):
    """
    CRUD for a table with an id and a single required name column.

    Subclass attributes:
        model:          ORM class (must have `id` and a `products` relationship)
        name_field:     Name of the required string column
        resource:       Singular label used in messages ("category")
        plural:         Plural label used in messages ("categories")
        response_model: Pydantic schema built from the ORM object
    """

    model: ClassVar[Type[Any]]
    name_field: ClassVar[str]
    resource: ClassVar[str]
    plural: ClassVar[str]
    response_model: ClassVar[Type[BaseModel]]

    async def list_all(self, db: AsyncSession) -> List[ResponseType]:
        try:
            result = await db.execute(self._select().order_by(self.model.id))
            return [self.response_model.model_validate(row) for row in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing %s: %s", self.plural, str(e), exc_info=True)
            raise DatabaseError(
                message=f"An error occurred while retrieving {self.plural}.",
                context={"error_type": type(e).__name__},
            )

    async def get(self, db: AsyncSession, record_id: int) -> ResponseType:
        try:
            record = await self._fetch(db, record_id)
            if record is None:
                raise NotFoundError(resource=self.resource, resource_id=str(record_id))
            return self.response_model.model_validate(record)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching %s %s: %s", self.resource, record_id, str(e), exc_info=True)
            raise DatabaseError(
                message=f"An error occurred while retrieving the {self.resource}.",
                context={"id": record_id, "error_type": type(e).__name__},
            )

    async def create(self, db: AsyncSession, name: Optional[str]) -> ResponseType:
        self._require_name(name)

        try:
            record = self.model(**{self.name_field: name})
            db.add(record)
            await db.flush()
            logger.info("%s created: %s", self.resource.capitalize(), record.id)

            created = await self._fetch(db, record.id)
            return self.response_model.model_validate(created)

        except ShopfrontError:
            raise
        except Exception as e:
            logger.error("Database error creating %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"An error occurred while creating the {self.resource}.",
                context={"error_type": type(e).__name__},
            )

    async def update(self, db: AsyncSession, record_id: int, name: Optional[str]) -> ResponseType:
        self._require_name(name)

        try:
            result = await db.execute(
                update(self.model)
                .where(self.model.id == record_id)
                .values(**{self.name_field: name})
            )
            if result.rowcount == 0:
                raise NotFoundError(resource=self.resource, resource_id=str(record_id))

            logger.info("%s %s updated", self.resource.capitalize(), record_id)
            updated = await self._fetch(db, record_id)
            return self.response_model.model_validate(updated)

        except ShopfrontError:
            raise
        except Exception as e:
            logger.error("Database error updating %s %s: %s", self.resource, record_id, str(e), exc_info=True)
            raise DatabaseError(
                message=f"An error occurred while updating the {self.resource}.",
                context={"id": record_id, "error_type": type(e).__name__},
            )

    async def delete(self, db: AsyncSession, record_id: int) -> DeleteResponse:
        try:
            result = await db.execute(delete(self.model).where(self.model.id == record_id))
            if result.rowcount == 0:
                raise NotFoundError(resource=self.resource, resource_id=str(record_id))

            logger.info("%s %s deleted", self.resource.capitalize(), record_id)
            return DeleteResponse(deleted=result.rowcount)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error deleting %s %s: %s", self.resource, record_id, str(e), exc_info=True)
            raise DatabaseError(
                message=f"An error occurred while deleting the {self.resource}.",
                context={"id": record_id, "error_type": type(e).__name__},
            )

    # ── Helpers ───────────────────────────────────────────────────────────

    def _require_name(self, name: Optional[str]) -> None:
        if name is None or not name.strip():
            raise ValidationError(
                message=f"Please provide a {self.resource} name.",
                field=self.name_field,
            )

    def _select(self):
        return (
            select(self.model)
            .options(selectinload(self.model.products))
            .execution_options(populate_existing=True)
        )

    async def _fetch(self, db: AsyncSession, record_id: int) -> Optional[ModelType]:
        result = await db.execute(self._select().where(self.model.id == record_id))
        return result.scalar_one_or_none()
