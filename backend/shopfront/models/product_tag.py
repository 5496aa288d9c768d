"""
Shopfront Backend: ProductTag Join Model
========================================

What:  The `product_tag` join table pairing products with tags.
How:   Composite primary key (product_id, tag_id); a row's existence means
       "this product has this tag". Both foreign keys cascade on delete, so
       removing a product or a tag removes its pairs at the store.
Who:   Written only by ProductService (create/update tag replacement);
       read through Product.tags / Tag.products.
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from shopfront.database import Base


class ProductTag(Base):
    __tablename__ = "product_tag"

    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("product.id", ondelete="CASCADE"),
        primary_key=True,
    )

    tag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tag.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<ProductTag(product_id={self.product_id}, tag_id={self.tag_id})>"
