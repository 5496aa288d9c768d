"""
Shopfront Backend: Demo Catalogue Seed Loader
=============================================

What:  Creates the schema (if missing) and loads a small demo catalogue.
How:   Inserts categories and tags, then products referencing them by the
       ids the store assigned, then the product/tag pairs.
Who:   Developers and demo environments.

Usage:
    python -m shopfront.seeds           # refuses if products already exist
    python -m shopfront.seeds --force   # clears all four tables first
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.config import Settings
from shopfront.database import build_engine, build_session_factory, create_tables, dispose_engine
from shopfront.exceptions import ShopfrontError
from shopfront.main import setup_logging
from shopfront.models import Category, Product, ProductTag, Tag

logger = logging.getLogger(__name__)


CATEGORIES: List[str] = ["Shirts", "Shorts", "Music", "Hats", "Shoes"]

TAGS: List[str] = [
    "rock music",
    "pop music",
    "blue",
    "red",
    "green",
    "white",
    "gold",
    "pop culture",
]

# (product_name, price, stock, category_name, tag_names)
PRODUCTS: List[Tuple[str, Decimal, int, str, Sequence[str]]] = [
    ("Plain T-Shirt", Decimal("14.99"), 14, "Shirts", ("pop culture", "white", "red")),
    ("Running Sneakers", Decimal("90.00"), 25, "Shoes", ("red", "white", "green")),
    ("Branded Baseball Hat", Decimal("22.99"), 12, "Hats", ("pop culture", "gold", "blue")),
    ("Top 40 Music Compilation Vinyl Record", Decimal("12.99"), 50, "Music", ("pop music",)),
    ("Cargo Shorts", Decimal("29.99"), 22, "Shorts", ("blue", "green")),
]


class SeedRefusedError(ShopfrontError):
    """Raised when seeding would mix demo rows into an existing catalogue."""


async def seed_database(db: AsyncSession, force: bool = False) -> Dict[str, int]:
    """
    Load the demo catalogue into `db` (caller commits).

    Args:
        db:    Session to write through
        force: Delete existing product/category/tag rows first

    Returns:
        Row counts inserted per table.

    Raises:
        SeedRefusedError: Products exist and force is False
    """
    existing = await db.scalar(select(func.count()).select_from(Product))
    if existing and not force:
        raise SeedRefusedError(
            message=f"Refusing to seed: {existing} products already exist (use --force to replace them).",
            context={"existing_products": existing},
        )

    if force:
        for model in (ProductTag, Product, Tag, Category):
            await db.execute(delete(model))
        logger.info("Cleared existing catalogue")

    categories = {name: Category(category_name=name) for name in CATEGORIES}
    tags = {name: Tag(tag_name=name) for name in TAGS}
    db.add_all([*categories.values(), *tags.values()])
    await db.flush()

    pairs = []
    for name, price, stock, category_name, tag_names in PRODUCTS:
        product = Product(
            product_name=name,
            price=price,
            stock=stock,
            category_id=categories[category_name].id,
        )
        db.add(product)
        await db.flush()
        pairs.extend({"product_id": product.id, "tag_id": tags[tag].id} for tag in tag_names)

    await db.execute(insert(ProductTag), pairs)

    counts = {
        "categories": len(categories),
        "tags": len(tags),
        "products": len(PRODUCTS),
        "product_tags": len(pairs),
    }
    logger.info("Seeded catalogue: %s", counts)
    return counts


async def run(settings: Settings, force: bool = False) -> Dict[str, int]:
    """Create tables if needed and seed them in a single transaction."""
    engine = build_engine(settings)
    try:
        await create_tables(engine)
        session_factory = build_session_factory(engine)
        async with session_factory() as session:
            async with session.begin():
                return await seed_database(session, force=force)
    finally:
        await dispose_engine(engine)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m shopfront.seeds",
        description="Load the demo product catalogue into the configured database (DATABASE_URL).",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Delete existing products, categories and tags before seeding",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    setup_logging(settings.log_level)

    try:
        counts = asyncio.run(run(settings, force=args.force))
    except SeedRefusedError as e:
        logger.error(e.message)
        return 1

    print(
        "Seeded {categories} categories, {tags} tags, {products} products, "
        "{product_tags} product tags.".format(**counts)
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
