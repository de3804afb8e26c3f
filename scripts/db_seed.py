"""Seed the store with demo products.

Idempotent: tables are created if missing and a product is only inserted
when no product with the same name exists yet.

Usage:
    python scripts/db_seed.py

Connection settings come from DATABASE_URL or DB_HOST / DB_PORT / DB_USER /
DB_PASSWORD / DB_NAME / DB_ENCRYPT (see storefront/config.py).
"""
import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Ensure project root is on sys.path so the script runs from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.exc import SQLAlchemyError

from storefront.config import get_settings
from storefront.database import Database
from storefront.exceptions import StorefrontException
from storefront.services import CatalogService

FIXED_PRODUCTS = [
    {"item_name": "Pen", "item_price": Decimal("1.50"), "item_description": "Blue pen",
     "item_rating": 4, "item_image": "pen.png"},
    {"item_name": "Notebook", "item_price": Decimal("3.25"), "item_description": "A5 ruled notebook, 80 sheets",
     "item_rating": 5, "item_image": "notebook.png"},
    {"item_name": "Pencil case", "item_price": Decimal("6.90"), "item_description": "Zip pencil case",
     "item_rating": 4, "item_image": "pencil-case.png"},
    {"item_name": "Highlighter set", "item_price": Decimal("4.75"), "item_description": "Four pastel highlighters",
     "item_rating": 3, "item_image": "highlighters.png"},
    {"item_name": "Desk lamp", "item_price": Decimal("24.99"), "item_description": "LED desk lamp with dimmer",
     "item_rating": 5, "item_image": "desk-lamp.png"},
]


async def seed_products(database: Database) -> int:
    created = 0
    async with database.session_maker() as session:
        catalog = CatalogService(session)
        existing = {p.item_name for p in await catalog.list_products()}
        for item in FIXED_PRODUCTS:
            if item["item_name"] in existing:
                continue
            product_id = await catalog.add_product(**item)
            print(f"Added {item['item_name']!r} -> id {product_id}")
            created += 1
    return created


async def main() -> int:
    settings = get_settings()
    database = Database(settings.url, **settings.engine_options())
    print("DB seed starting, store =", settings.url.render_as_string(hide_password=True))
    try:
        await database.connect()
        created = await seed_products(database)
    except (SQLAlchemyError, OSError, StorefrontException) as e:
        print(f"DB seed failed: {e}")
        return 1
    finally:
        await database.dispose()

    print(f"DB seed complete, {created} new product(s)")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
