"""
Shopfront Backend: Category SQLAlchemy Model
============================================

What:  ORM model representing the `category` table.
Who:   Read by ProductService (eager-loaded onto each product) and managed by
       CategoryService.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shopfront.database import Base

if TYPE_CHECKING:
    from shopfront.models.product import Product


class Category(Base):
    """A product grouping. Deleting it nulls out product.category_id at the store."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    category_name: Mapped[str] = mapped_column(String(255), nullable=False)

    products: Mapped[List["Product"]] = relationship(
        back_populates="category",
        order_by="Product.id",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, category_name='{self.category_name}')>"
