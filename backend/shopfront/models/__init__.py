"""
Shopfront Backend: ORM Models
=============================

Importing this package registers every table on Base.metadata
(used by Alembic autogenerate, create_tables() and the seed loader).
"""

from shopfront.models.category import Category
from shopfront.models.product import Product
from shopfront.models.product_tag import ProductTag
from shopfront.models.tag import Tag

__all__ = ["Category", "Product", "ProductTag", "Tag"]
