"""
Quick check of the MongoDB connection and collection sizes

Run: python scripts/check_db.py
"""

import asyncio
import os
import logging

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

load_dotenv()

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

MONGODB_URL = os.getenv("MONGODB_URL")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME", "cafeHubDB")

if not MONGODB_URL:
    raise ValueError("MONGODB_URL must be set in .env file")


async def check_connection():
    print("=" * 60)
    print("  MongoDB Connection Check")
    print("=" * 60 + "\n")

    client = AsyncIOMotorClient(MONGODB_URL, serverSelectionTimeoutMS=5000)
    try:
        await client.admin.command('ping')
        logger.info("Connection successful")

        db = client[MONGODB_DB_NAME]
        collections = await db.list_collection_names()
        logger.info(f"Collections: {collections if collections else '(none yet)'}")

        for name in ("coffees", "users"):
            count = await db[name].count_documents({})
            logger.info(f"  {name}: {count} documents")

    except Exception as e:
        logger.error(f"Check failed: {e}")
        raise

    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(check_connection())
