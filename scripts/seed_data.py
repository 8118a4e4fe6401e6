"""
Seed Database with Fest Data.
Populates departments and events from the built-in knowledge base.
"""

import asyncio
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from citro.db.database import init_db, close_db
from citro.db.seed import seed_knowledge_base
from citro.voice.event_knowledge import DEPARTMENTS


async def main():
    """Seed all data."""
    print("🌱 Starting database seeding...\n")

    await init_db()

    print("🎪 Seeding departments and events...")
    inserted = await seed_knowledge_base()

    if inserted:
        print(f"   ✅ Added {len(DEPARTMENTS)} departments and {inserted} events")
    else:
        print("   ⏭️  Events already present, nothing to do")

    await close_db()

    print("\n✅ Database seeding complete!")


if __name__ == "__main__":
    asyncio.run(main())
