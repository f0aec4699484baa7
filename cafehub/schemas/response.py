"""
cafehub/schemas/response.py

Purpose: Response bodies

- Error envelope shared by every exception handler
- Write acknowledgments mirroring the MongoDB driver result objects
"""

from pydantic import BaseModel
from typing import Optional, Any


class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    message: str
    code: str
    error: Optional[Any] = None


class InsertAck(BaseModel):
    acknowledged: bool
    insertedId: str

    @classmethod
    def from_result(cls, result) -> "InsertAck":
        return cls(acknowledged=result.acknowledged, insertedId=str(result.inserted_id))


class UpdateAck(BaseModel):
    """
    Result of ``update_one``/``replace_one``. ``upsertedId`` is set only when
    the write created a new document.
    """
    acknowledged: bool
    matchedCount: int
    modifiedCount: int
    upsertedCount: int
    upsertedId: Optional[str] = None

    @classmethod
    def from_result(cls, result) -> "UpdateAck":
        upserted_id = result.upserted_id
        return cls(
            acknowledged=result.acknowledged,
            matchedCount=result.matched_count,
            modifiedCount=result.modified_count,
            upsertedCount=0 if upserted_id is None else 1,
            upsertedId=None if upserted_id is None else str(upserted_id),
        )


class DeleteAck(BaseModel):
    acknowledged: bool
    deletedCount: int

    @classmethod
    def from_result(cls, result) -> "DeleteAck":
        return cls(acknowledged=result.acknowledged, deletedCount=result.deleted_count)
