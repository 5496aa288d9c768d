"""
Shopfront Backend: Product Schemas
==================================

What:  Request bodies for product create/update and the product response shape.

Presence semantics (create and update bodies):
    absent   -> the field is not in `model_fields_set`
    null     -> in `model_fields_set`, value None
    zero     -> in `model_fields_set`, value 0 (a real value, never "missing")

Every body field is declared Optional so that FastAPI accepts partial
bodies; the service layer applies the presence rules above instead of
truthiness checks. Shape errors (wrong JSON type, negative price or stock)
still fail FastAPI's request validation with 422.

Wire names follow the catalogue's JSON: product_name, price, stock,
category_id, tagIds. `name` and `category` are accepted as input aliases.
"""

from decimal import Decimal
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CategorySummary(BaseModel):
    id: int
    category_name: str

    model_config = {"from_attributes": True}


class TagSummary(BaseModel):
    id: int
    tag_name: str

    model_config = {"from_attributes": True}


class ProductSummary(BaseModel):
    """Product columns only; nested inside category and tag responses."""
    id: int = Field(description="Product identifier")
    product_name: str = Field(description="Display name")
    price: float = Field(description="Unit price")
    stock: int = Field(description="Units in stock")
    category_id: Optional[int] = Field(default=None, description="Owning category, if any")

    model_config = {"from_attributes": True}


class ProductResponse(ProductSummary):
    """
    What:  Full product representation with its associations.
    Who:   Returned by every /products endpoint except DELETE.
    """
    category: Optional[CategorySummary] = Field(
        default=None,
        description="The product's category (null when unassigned)",
    )
    tags: List[TagSummary] = Field(default_factory=list, description="Tags attached via product_tag")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class _ProductBody(BaseModel):
    product_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("product_name", "name"),
        max_length=255,
        description="Display name",
    )
    price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Unit price",
    )
    stock: Optional[int] = Field(default=None, ge=0, description="Units in stock")
    category_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("category_id", "category"),
        description="Category to file the product under (null clears it on update)",
    )
    tag_ids: Optional[List[int]] = Field(
        default=None,
        validation_alias=AliasChoices("tagIds", "tag_ids"),
        description="Complete list of tag ids for the product",
    )

    def is_present(self, field: str) -> bool:
        """True when `field` was supplied with a non-null value."""
        return field in self.model_fields_set and getattr(self, field) is not None

    def unique_tag_ids(self) -> List[int]:
        """Tag ids in first-seen order with duplicates dropped (a pair is the join row's key)."""
        return list(dict.fromkeys(self.tag_ids or []))


class ProductCreate(_ProductBody):
    """Body of POST /products. product_name, price and stock must be present."""

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("product_name", "price", "stock")

    def missing_required_fields(self) -> List[str]:
        missing = [field for field in self.REQUIRED_FIELDS if not self.is_present(field)]
        if "product_name" not in missing and not self.product_name.strip():
            missing.insert(0, "product_name")
        return missing

    def column_values(self) -> Dict[str, Any]:
        return {
            "product_name": self.product_name,
            "price": self.price,
            "stock": self.stock,
            "category_id": self.category_id,
        }


class ProductUpdate(_ProductBody):
    """
    Body of PUT /products/{id}. Every field is optional.

    `tags_supplied` distinguishes "replace the tag set" (tagIds is a list,
    possibly empty) from "leave tags alone" (tagIds absent or null).
    """

    NON_NULLABLE_FIELDS: ClassVar[Tuple[str, ...]] = ("product_name", "price", "stock")

    @property
    def tags_supplied(self) -> bool:
        return self.is_present("tag_ids")

    def invalid_fields(self) -> List[str]:
        """Supplied fields whose value cannot be stored (null or blank)."""
        invalid = [
            field for field in self.NON_NULLABLE_FIELDS
            if field in self.model_fields_set and getattr(self, field) is None
        ]
        if self.is_present("product_name") and not self.product_name.strip():
            invalid.append("product_name")
        return invalid

    def column_values(self) -> Dict[str, Any]:
        """The supplied product columns; category_id may legitimately be None."""
        fields = ("product_name", "price", "stock", "category_id")
        return {field: getattr(self, field) for field in fields if field in self.model_fields_set}
