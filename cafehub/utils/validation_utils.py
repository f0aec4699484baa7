"""
cafehub/utils/validation_utils.py

Purpose: Request parsing helpers

- ObjectId parsing for path identifiers
- Case-insensitive substring search filter for users
"""

import re
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId

from cafehub.core.exceptions import InvalidIdentifierError

USER_SEARCH_FIELDS = ("name", "email", "phoneNumber", "address")


def parse_object_id(value: str) -> ObjectId:
    """
    Converts a path identifier to an ObjectId.

    Raises:
        InvalidIdentifierError: If the value is not a 24-char hex string
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(
            message=f"'{value}' is not a valid identifier",
            details=str(e)
        ) from e


def build_user_search_filter(search_query: Optional[str]) -> Dict[str, Any]:
    """
    Builds the users filter for ``GET /users``.

    An empty or missing query matches every document. Otherwise a document
    matches when any searchable field contains the query, ignoring case.
    The query is a literal substring, not a regex.
    """
    if not search_query:
        return {}

    pattern = {"$regex": re.escape(search_query), "$options": "i"}
    return {"$or": [{field: pattern} for field in USER_SEARCH_FIELDS]}
