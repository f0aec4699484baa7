"""
cafehub/utils/serialization_utils.py

Purpose: Make raw MongoDB documents JSON-safe without reshaping them
"""

from typing import Any, Dict, Optional

from bson import ObjectId


def serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Returns the document with every ObjectId rendered as its hex string.
    Other BSON types (datetime, etc.) are left for FastAPI's encoder.
    """
    if document is None:
        return None
    return serialize_value(document)
