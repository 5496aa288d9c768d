"""
Shopfront Backend: Product SQLAlchemy Model
===========================================

What:  ORM model representing the `product` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by ProductService for CRUD operations and by the seed loader.

Table Design:
    - Integer autoincrement primary key
    - product_name: required, non-empty (enforced by the service layer)
    - price: NUMERIC(10, 2), returned by the ORM as Decimal
    - stock: integer, zero allowed
    - category_id: nullable FK; ON DELETE SET NULL so removing a category
      keeps its products
    - tags: many-to-many through product_tag (rows cascade away with the product)

Relationships are declared lazy="raise": an async session cannot lazy-load,
so every query must eager-load what it serializes (see ProductService).
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shopfront.database import Base

if TYPE_CHECKING:
    from shopfront.models.category import Category
    from shopfront.models.tag import Tag


class Product(Base):
    """A sellable item, optionally in one Category and carrying any number of Tags."""

    __tablename__ = "product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    product_name: Mapped[str] = mapped_column(String(255), nullable=False)

    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    stock: Mapped[int] = mapped_column(Integer, nullable=False)

    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("category.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    category: Mapped[Optional["Category"]] = relationship(
        back_populates="products",
        lazy="raise",
    )

    tags: Mapped[List["Tag"]] = relationship(
        secondary="product_tag",
        back_populates="products",
        order_by="Tag.id",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, product_name='{self.product_name}', "
            f"price={self.price}, stock={self.stock})>"
        )
