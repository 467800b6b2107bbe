#!/usr/bin/env python3
"""Seed product catalog script.

Creates a deterministic set of demo products through the catalog
service, so seeded rows obey the same validation as API writes.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --per-category 20 --seed 7
"""

import argparse
import asyncio
import random
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.catalog.mapper import ProductMapper
from app.catalog.repository import ProductRepository
from app.catalog.schemas import ProductRequest
from app.catalog.service import CatalogService
from app.infrastructure.database import async_session_factory, init_models

ADJECTIVES = ["Classic", "Compact", "Deluxe", "Essential", "Pro", "Smart", "Ultra"]

# category -> (nouns, min price, max price)
CATEGORIES = {
    "Electronics": (["Headphones", "Speaker", "Charger", "Webcam"], 15, 400),
    "Home": (["Lamp", "Kettle", "Blanket", "Clock"], 10, 150),
    "Tools": (["Drill", "Hammer", "Wrench Set", "Tape Measure"], 5, 250),
    "Clothing": (["Jacket", "T-Shirt", "Hoodie", "Sneakers"], 8, 180),
    "Books": (["Cookbook", "Novel", "Atlas", "Field Guide"], 6, 60),
}


def build_requests(per_category: int, seed: int) -> list[ProductRequest]:
    """Generate demo product requests.

    Args:
        per_category: Products per category.
        seed: Random seed; the same seed yields the same catalog.

    Returns:
        Product requests.
    """
    rng = random.Random(seed)
    requests = []

    for category, (nouns, low, high) in CATEGORIES.items():
        for i in range(per_category):
            name = f"{rng.choice(ADJECTIVES)} {rng.choice(nouns)} {i + 1:03d}"
            cents = rng.randint(low * 100, high * 100)
            requests.append(
                ProductRequest(
                    name=name,
                    description=f"{name} from the {category.lower()} range",
                    price=Decimal(cents) / 100,
                    category=category,
                    # Roughly one in five seeded products is out of stock
                    inventory_count=0 if rng.random() < 0.2 else rng.randint(1, 250),
                    image_url=f"https://images.example.com/{category.lower()}/{i + 1}.jpg",
                )
            )

    return requests


async def seed(per_category: int, seed_value: int) -> dict[str, int]:
    """Create demo products.

    Args:
        per_category: Products per category.
        seed_value: Random seed.

    Returns:
        Counts of created and rejected products.
    """
    created = 0
    failed = 0

    async with async_session_factory() as session:
        service = CatalogService(ProductRepository(session), ProductMapper())
        for request in build_requests(per_category, seed_value):
            result = await service.create(request)
            if result.success:
                created += 1
            else:
                failed += 1

    return {"created": created, "failed": failed}


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with demo products",
    )
    parser.add_argument(
        "--per-category",
        type=int,
        default=10,
        help=f"Products per category ({len(CATEGORIES)} categories, default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for deterministic output (default: 42)",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Product Catalog Seeder")
    print("=" * 60)
    print(f"Products per category: {args.per_category}")
    print(f"Seed: {args.seed}")
    print()

    print("Creating database tables...")
    await init_models()
    print("Tables ready.")
    print()

    result = await seed(args.per_category, args.seed)

    print(f"  ✓ Created: {result['created']} products")
    if result["failed"]:
        print(f"  ✗ Failed: {result['failed']} products")
    print()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
