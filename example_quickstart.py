"""
Pymeerkat Quick Start Example

Features covered:
- Collection names derived from class names
- Index markers and automatic index creation
- Timestamps and case transforms
- CRUD operations and querying

Run with: python example_quickstart.py
"""

import asyncio
from datetime import datetime
from typing import Annotated, Optional

from pymeerkat import (
    CompoundIndex,
    Document,
    GeospatialIndex,
    GeospatialIndexType,
    IndexOrder,
    Lowercase,
    SingleFieldIndex,
    UniqueIndex,
    Uppercase,
    build_index_plans,
    connect,
    disconnect,
)


# ============================================================================
# 1. DEFINE YOUR DOCUMENTS
# ============================================================================


class Category(Document):
    """Stored in "categories"."""

    slug: Annotated[str, Lowercase(), UniqueIndex()]
    title: str


class Store(Document):
    """A shop with a location and an uppercase country code."""

    name: Annotated[str, UniqueIndex(name="unique_store_name")]
    country: Annotated[str, Uppercase()] = ""
    rating: Annotated[int, SingleFieldIndex(IndexOrder.DESCENDING)] = 0
    location: Annotated[list[float], GeospatialIndex(GeospatialIndexType.TWO_D_SPHERE)] = []
    region: Annotated[str, CompoundIndex("region_opened")] = ""
    opened_at: Annotated[
        Optional[datetime], CompoundIndex("region_opened", IndexOrder.DESCENDING)
    ] = None

    class Settings:
        collection = "retail stores"
        track_timestamps = True


# ============================================================================
# 2. ASYNC MAIN FUNCTION
# ============================================================================


async def main():
    """Run the quickstart example."""

    await connect("mongodb://localhost:27017/meerkat_demo")
    print("Connected to MongoDB\n")

    try:
        print("1. NAMES - Where documents are stored")
        print(f"   Category -> {Category.collection_name()}")
        print(f"   Store    -> {Store.collection_name()}")

        print("\n2. INDEXES - Planned from field markers")
        for spec in build_index_plans(Store):
            print(f"   {spec.name or '(generated)'}: {list(spec.keys)}")

        print("\n3. SAVE - Case transforms and timestamps")
        category = Category(slug="Coffee-Shops", title="Coffee shops")
        await category.save()
        store = Store(name="Beanery", country="nz", rating=5, location=[174.76, -36.85])
        await store.save()
        print(f"   slug={category.slug} country={store.country}")
        print(f"   created_at={store.created_at}")

        print("\n4. BULK - Upserting several stores at once")
        await Store.save_all(
            [Store(name="Roastery", country="au"), Store(name="Drip", country="nz")]
        )

        print("\n5. QUERY - Best rated stores in NZ")
        best = await Store.query(country="NZ").order_by("-rating").limit(5).to_list()
        print(f"   Found {len(best)} stores")

        print("\n6. COUNT / EXISTS")
        print(f"   Stores: {await Store.count()}")
        print(f"   Has Drip: {await Store.exists(name='Drip')}")

        print("\n7. DELETE")
        removed = await Store.remove(country="AU")
        await Store.remove_by_id(store.id)
        print(f"   Removed {removed + 1} stores")

        print("\nAll operations completed successfully!")

    finally:
        await disconnect()
        print("\nDisconnected from MongoDB")


# ============================================================================
# 3. RUN THE EXAMPLE
# ============================================================================

if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("PYMEERKAT QUICKSTART EXAMPLE")
    print("=" * 60 + "\n")

    asyncio.run(main())
