"""
Shopfront Backend: Category Schemas
===================================
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from shopfront.schemas.product import ProductSummary


class CategoryBody(BaseModel):
    """Body of POST and PUT /categories; presence of category_name is checked by the service."""
    category_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("category_name", "name"),
        max_length=255,
    )


class CategoryResponse(BaseModel):
    id: int
    category_name: str
    products: List[ProductSummary] = Field(
        default_factory=list,
        description="Products filed under this category",
    )

    model_config = {"from_attributes": True}
