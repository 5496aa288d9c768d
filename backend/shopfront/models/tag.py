"""
Shopfront Backend: Tag SQLAlchemy Model
=======================================

What:  ORM model representing the `tag` table, linked to products many-to-many.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shopfront.database import Base

if TYPE_CHECKING:
    from shopfront.models.product import Product


class Tag(Base):
    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    tag_name: Mapped[str] = mapped_column(String(255), nullable=False)

    products: Mapped[List["Product"]] = relationship(
        secondary="product_tag",
        back_populates="tags",
        order_by="Product.id",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, tag_name='{self.tag_name}')>"
