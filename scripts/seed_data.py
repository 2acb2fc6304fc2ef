"""Script to create the tables and seed demo data into the database."""

import asyncio

from components.core.init_db import db_manager, get_db
from components.setup.seed import seed_demo_data


async def seed_data():
    """Create missing tables and seed demo data."""
    await db_manager.create_tables()
    async for db in get_db():
        result = await seed_demo_data(db)
        print(result.message)
        if result.credentials:
            print("\nDemo credentials:")
            for role, credentials in result.credentials.items():
                print(f"  {role}: {credentials}")

if __name__ == "__main__":
    asyncio.run(seed_data())
