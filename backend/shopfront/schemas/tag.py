"""
Shopfront Backend: Tag Schemas
==============================
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from shopfront.schemas.product import ProductSummary


class TagBody(BaseModel):
    """Body of POST and PUT /tags; presence of tag_name is checked by the service."""
    tag_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("tag_name", "name"),
        max_length=255,
    )


class TagResponse(BaseModel):
    id: int
    tag_name: str
    products: List[ProductSummary] = Field(
        default_factory=list,
        description="Products carrying this tag",
    )

    model_config = {"from_attributes": True}
