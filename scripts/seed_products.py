#!/usr/bin/env python3
"""Seed product catalog script.

Clears the catalog and inserts fixture products with their images.

Usage:
    python scripts/seed_products.py
    python scripts/seed_products.py --file products.json
    python scripts/seed_products.py --no-clear
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from product_catalog.domain.exceptions import DuplicateKeyError
from product_catalog.infrastructure.database import Base, async_session_factory, engine
from product_catalog.products import ProductCreate, ProductsService

SEED_PRODUCTS: list[dict] = [
    {
        "title": "Men's Chill Crew Neck Sweatshirt",
        "description": "Soft fleece sweatshirt with a relaxed fit.",
        "price": 75,
        "stock": 7,
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "gender": "men",
        "tags": ["sweatshirt"],
        "images": ["1740176-00-A_0_2000.jpg", "1740176-00-A_1.jpg"],
    },
    {
        "title": "Women's Cropped Puffer Jacket",
        "description": "Quilted puffer jacket with a cropped silhouette.",
        "price": 225,
        "stock": 85,
        "sizes": ["XS", "S", "M"],
        "gender": "women",
        "tags": ["jacket"],
        "images": ["1740535-00-A_0_2000.jpg", "1740535-00-A_1.jpg"],
    },
    {
        "title": "Kids Cyberquad Bomber Jacket",
        "description": "Water-resistant bomber jacket for kids.",
        "price": 65,
        "stock": 10,
        "sizes": ["XS", "S", "M"],
        "gender": "kid",
        "tags": ["jacket"],
        "images": ["1742702-00-A_0_2000.jpg"],
    },
    {
        "title": "Relaxed T Logo Hat",
        "description": "Curved-brim cap with embroidered logo.",
        "price": 30,
        "stock": 11,
        "sizes": [],
        "gender": "unisex",
        "tags": ["hat"],
        "images": ["1657932-00-A_0_2000.jpg", "1657932-00-A_1.jpg"],
    },
]


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def load_products(path: Path | None) -> list[ProductCreate]:
    """Load seed products from a JSON file or the built-in fixtures.

    Args:
        path: JSON file holding a list of product objects, or None.

    Returns:
        Validated product inputs.
    """
    raw = json.loads(path.read_text(encoding="utf-8")) if path else SEED_PRODUCTS
    return [ProductCreate.model_validate(item) for item in raw]


async def seed(products: list[ProductCreate], clear: bool = True) -> dict:
    """Seed the catalog.

    Args:
        products: Products to insert.
        clear: Whether to delete existing products first.

    Returns:
        Seeding result.
    """
    service = ProductsService(async_session_factory)
    deleted = (await service.delete_all_products()).deleted if clear else 0

    created = 0
    skipped = 0
    for product in products:
        try:
            await service.create(product)
            created += 1
        except DuplicateKeyError as e:
            print(f"  - Skipped {product.title!r}: {e.message}")
            skipped += 1

    return {"deleted": deleted, "created": created, "skipped": skipped}


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog",
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="JSON file with a list of products (default: built-in fixtures)",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear existing products before seeding",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Product Catalog Seeder")
    print("=" * 60)
    print(f"Source: {args.file or 'built-in fixtures'}")
    print(f"Clear existing: {not args.no_clear}")
    print()

    products = load_products(args.file)

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    try:
        result = await seed(products, clear=not args.no_clear)
    finally:
        await engine.dispose()

    print(f"  ✓ Deleted: {result['deleted']} existing products")
    print(f"  ✓ Created: {result['created']} products")
    print(f"  ✓ Skipped: {result['skipped']} duplicates")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
