#!/usr/bin/env python3
"""Seed a demo store script.

Creates the catalog tables, a store with one administrator and a handful
of flowers, plus a bouquet made of them. Products are created through
ProductService so every shape rule applies.

Usage:
    python scripts/seed_stores.py
    python scripts/seed_stores.py --store-name "Rose Garden" --admin-phone +15550100
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flowershop.application.product_service import ProductService
from flowershop.domain.value_objects import (
    AdminId,
    Color,
    FlowerQuantity,
    FragranceIntensity,
    PackagingMode,
    ProductDraft,
)
from flowershop.infrastructure.config import settings
from flowershop.infrastructure.database import Base, async_session_factory, engine
from flowershop.infrastructure.models import AdminModel, StoreModel
from flowershop.infrastructure.observability import configure_logging
from flowershop.infrastructure.repositories import SqlAdminDirectory, SqlProductStore

DEMO_FLOWERS = [
    ProductDraft(
        shape="flower",
        name="Red Rose",
        price_cents=350,
        variety="Rose",
        colors=frozenset({Color.RED}),
        origin_country="Ecuador",
        fragrance_intensity=FragranceIntensity.MEDIUM,
    ),
    ProductDraft(
        shape="flower",
        name="White Tulip",
        price_cents=220,
        variety="Tulip",
        colors=frozenset({Color.WHITE}),
        origin_country="Netherlands",
        fragrance_intensity=FragranceIntensity.LIGHT,
    ),
    ProductDraft(
        shape="flower",
        name="Eucalyptus",
        price_cents=150,
        variety="Eucalyptus",
        colors=frozenset({Color.GREEN}),
        fragrance_intensity=FragranceIntensity.STRONG,
    ),
]


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def create_store(store_name: str, admin_phone: str | None) -> str:
    """Insert a store and its administrator.

    Returns:
        The new administrator's ID.
    """
    async with async_session_factory() as session:
        store = StoreModel(name=store_name)
        session.add(store)
        await session.flush()

        admin = AdminModel(name=f"{store_name} admin", phone=admin_phone, store_id=store.id)
        session.add(admin)
        await session.commit()
        return admin.id


async def seed_products(admin_id: str) -> dict:
    """Create the demo flowers and a bouquet for the admin's store."""
    async with async_session_factory() as session:
        service = ProductService(SqlAdminDirectory(session), SqlProductStore(session))
        admin = AdminId(admin_id)

        flower_ids = []
        for draft in DEMO_FLOWERS:
            result = await service.create_product(admin, draft)
            if not result.success:
                raise RuntimeError(f"{draft.name}: {result.error}")
            flower_ids.append(result.product.id)

        bouquet = await service.create_product(
            admin,
            ProductDraft(
                shape="bouquet",
                name="Spring Mix",
                price_cents=2900,
                flowers_count=11,
                is_packaging_required=True,
                packaging_mode=PackagingMode.CRAFT_PAPER,
                packaging_color=Color.CREAM,
            ),
        )
        if not bouquet.success:
            raise RuntimeError(f"Spring Mix: {bouquet.error}")

        added = await service.add_flowers_to_product(
            admin,
            bouquet.product.id,
            [
                FlowerQuantity(flower_id=flower_ids[0], quantity=5),
                FlowerQuantity(flower_id=flower_ids[1], quantity=4),
                FlowerQuantity(flower_id=flower_ids[2], quantity=2),
            ],
        )
        if not added.success:
            raise RuntimeError(f"Spring Mix flowers: {added.error}")

        return {
            "flowers_created": len(flower_ids),
            "bouquet_id": str(bouquet.product.id),
            "edges_created": added.added,
        }


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed a demo flower store",
    )
    parser.add_argument(
        "--store-name",
        default="Demo Flowers",
        help="Name of the store to create (default: Demo Flowers)",
    )
    parser.add_argument(
        "--admin-phone",
        default=None,
        help="Phone number of the store administrator",
    )

    args = parser.parse_args()
    configure_logging(settings.log_level, json_logs=False)

    print("=" * 60)
    print("Flowershop Store Seeder")
    print("=" * 60)

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    admin_id = await create_store(args.store_name, args.admin_phone)
    print(f"Store '{args.store_name}' created, admin ID: {admin_id}")

    result = await seed_products(admin_id)
    print(f"  ✓ Flowers: {result['flowers_created']}")
    print(f"  ✓ Bouquet: {result['bouquet_id']}")
    print(f"  ✓ Composition edges: {result['edges_created']}")

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
