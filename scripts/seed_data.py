"""Seed the property store with sample listings.

Run from the repository root:
    python -m scripts.seed_data
"""

import asyncio

from property_listings.config import settings
from property_listings.services.property_store import PropertyStore

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

PROPERTIES = [
    {
        "name": "Lakeside Villa",
        "address": "1 Lake Rd, Queenstown",
        "price": 1250000.0,
        "description": (
            "Four-bedroom villa on the lake shore with a private jetty, "
            "floor-to-ceiling windows, and a detached guest studio."
        ),
        "images": [
            "https://images.example.com/lakeside-villa/front.jpg",
            "https://images.example.com/lakeside-villa/jetty.jpg",
        ],
        "owner_name": "Hana Watanabe",
        "owner_email": "hana.watanabe@example.com",
        "owner_phone": "+64 21 555 0101",
        "documents": ["https://docs.example.com/lakeside-villa/title.pdf"],
        "available_for_visit": True,
    },
    {
        "name": "Harbour View Apartment",
        "address": "12/48 Wharf St, Wellington",
        "price": 685000.0,
        "description": "Two-bedroom top-floor apartment with harbour views and secure parking.",
        "images": ["https://images.example.com/harbour-view/living.jpg"],
        "owner_name": "Tom Fraser",
        "owner_email": "tom.fraser@example.com",
        "owner_phone": "+64 27 555 0188",
        "documents": [],
        "available_for_visit": True,
    },
    {
        "name": "Hillcrest Cottage",
        "address": "7 Orchard Lane, Nelson",
        "price": 449000.0,
        "description": "Renovated 1920s cottage on a quarter-acre section with fruit trees.",
        "images": [],
        "owner_name": "Priya Nair",
        "owner_email": "priya.nair@example.com",
        "owner_phone": "",
        "documents": [
            "https://docs.example.com/hillcrest/building-report.pdf",
            "https://docs.example.com/hillcrest/lim.pdf",
        ],
        "available_for_visit": False,
    },
]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed(store: PropertyStore) -> int:
    """Insert the sample listings into an empty store.

    Idempotent: does nothing if the table already holds rows. Returns the
    number of properties inserted.
    """
    await store.create_table()

    existing = await store.get_all()
    if existing:
        print(f"⚠️  Store already holds {len(existing)} properties. Skipping seed.")
        return 0

    for prop_data in PROPERTIES:
        property_id = await store.insert(prop_data)
        print(f"   🏠 #{property_id} {prop_data['name']} at {prop_data['address']} (${prop_data['price']:,.0f})")

    print(f"✅ Created {len(PROPERTIES)} properties")
    return len(PROPERTIES)


async def main() -> None:
    store = PropertyStore.open(settings.async_database_url)
    try:
        await seed(store)
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
