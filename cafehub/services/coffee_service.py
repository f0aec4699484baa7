"""
cafehub/services/coffee_service.py

Purpose: Coffee CRUD

- Documents are stored and returned as submitted (no schema)
- Replace is a full-document upsert keyed by the path id
"""

from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from cafehub.core.logging import get_logger
from cafehub.schemas.response import InsertAck, UpdateAck, DeleteAck
from cafehub.utils.serialization_utils import serialize_document
from cafehub.utils.validation_utils import parse_object_id

logger = get_logger(__name__)


async def create_coffee(coffees: AsyncIOMotorCollection, document: Dict[str, Any]) -> InsertAck:
    result = await coffees.insert_one(document)
    logger.info(f"Coffee created: {result.inserted_id}", extra={"resource": "coffees"})
    return InsertAck.from_result(result)


async def list_coffees(coffees: AsyncIOMotorCollection) -> List[Dict[str, Any]]:
    documents = await coffees.find().to_list(length=None)
    return [serialize_document(document) for document in documents]


async def get_coffee(coffees: AsyncIOMotorCollection, coffee_id: str) -> Optional[Dict[str, Any]]:
    """
    Returns the coffee or None when no document has this id.

    Raises:
        InvalidIdentifierError: If coffee_id is malformed
    """
    document = await coffees.find_one({"_id": parse_object_id(coffee_id)})
    return serialize_document(document)


async def replace_coffee(
    coffees: AsyncIOMotorCollection,
    coffee_id: str,
    document: Dict[str, Any]
) -> UpdateAck:
    """
    Replaces the whole coffee document, creating it under coffee_id if absent.

    An ``_id`` in the body is dropped; the path id always wins.
    """
    object_id = parse_object_id(coffee_id)
    replacement = {key: value for key, value in document.items() if key != "_id"}

    result = await coffees.replace_one({"_id": object_id}, replacement, upsert=True)

    if result.upserted_id is not None:
        logger.info(f"Coffee upserted: {coffee_id}", extra={"resource": "coffees"})
    return UpdateAck.from_result(result)


async def delete_coffee(coffees: AsyncIOMotorCollection, coffee_id: str) -> DeleteAck:
    result = await coffees.delete_one({"_id": parse_object_id(coffee_id)})
    if result.deleted_count:
        logger.info(f"Coffee deleted: {coffee_id}", extra={"resource": "coffees"})
    return DeleteAck.from_result(result)
