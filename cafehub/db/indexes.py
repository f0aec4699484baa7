"""
cafehub/db/indexes.py

Purpose: Database index management

- Lookup indexes for the user-delete cascade and sign-in updates
- Non-unique: documents are stored without validation
"""

from pymongo import ASCENDING
from cafehub.db.mongo import get_users_collection
from cafehub.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(users=None):
    """
    Creates the users indexes. Idempotent, safe to run on every startup.
    """
    users = users if users is not None else get_users_collection()

    try:
        # PATCH /users matches on exact email
        await users.create_index([("email", ASCENDING)], name="idx_email", sparse=True)
        logger.debug("Created index on users.email")

        await users.create_index([("firebaseUid", ASCENDING)], name="idx_firebase_uid", sparse=True)
        logger.debug("Created index on users.firebaseUid")

        user_indexes = await users.index_information()
        logger.info(f"Index summary: Users={len(user_indexes)}")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise
