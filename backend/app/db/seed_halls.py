"""
Hall seeding

Creates any missing tables, then inserts the halls listed in
DEFAULT_HALLS_STR (``CODE:Name`` pairs) that do not exist yet.
Run with: python -m app.db.seed_halls
"""
import asyncio

from app.core.config import settings
from app.core.database import AsyncSessionLocal, init_db, close_db
from app.core.logging_config import logger
from app.services.hall_service import hall_service


async def seed_halls() -> int:
    """Seed default halls; returns how many were created"""
    await init_db()
    async with AsyncSessionLocal() as session:
        created = await hall_service.seed_default_halls(session, settings.get_default_halls())
    logger.info(f"Hall seeding complete: {created} created")
    return created


async def main():
    try:
        await seed_halls()
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
