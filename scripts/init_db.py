"""
Database initialization script

Creates the users indexes without starting the server:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cafehub.core.logging import setup_logging, get_logger
from cafehub.db.mongo import connect_to_mongo, close_mongo_connection
from cafehub.db.indexes import create_indexes

setup_logging()
logger = get_logger("scripts.init_db")


async def main():
    logger.info("=" * 60)
    logger.info("  CafeHub Database Setup")
    logger.info("=" * 60)

    await connect_to_mongo()
    try:
        await create_indexes()
        logger.info("Database initialization complete")
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    asyncio.run(main())
