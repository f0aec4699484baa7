"""
cafehub/api/users.py

Purpose: User endpoints

- Create, search and sign-in time updates on the users collection
- DELETE cascades to the Firebase account; the only handler with its
  own error boundary
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from motor.motor_asyncio import AsyncIOMotorCollection

from cafehub.core.exceptions import InvalidIdentifierError, ResourceNotFoundError, UserDeletionError
from cafehub.core.logging import get_logger
from cafehub.db.mongo import get_users_collection
from cafehub.schemas.response import InsertAck, UpdateAck, DeleteAck
from cafehub.services import user_service
from cafehub.services.identity_service import IdentityProvider, get_identity_provider

logger = get_logger(__name__)
router = APIRouter(prefix="/users")


@router.post("", response_model=InsertAck)
async def create_user(
    document: Dict[str, Any] = Body(...),
    users: AsyncIOMotorCollection = Depends(get_users_collection),
):
    return await user_service.create_user(users, document)


@router.get("", response_model=List[Dict[str, Any]])
async def list_users(
    searchQuery: Optional[str] = Query(None, description="Substring matched against name, email, phoneNumber, address"),
    users: AsyncIOMotorCollection = Depends(get_users_collection),
):
    return await user_service.search_users(users, searchQuery)


@router.patch("", response_model=UpdateAck)
async def update_last_sign_in(
    payload: Dict[str, Any] = Body(...),
    users: AsyncIOMotorCollection = Depends(get_users_collection),
):
    """
    Body: {"email": ..., "lastSignInTime": ...}
    """
    return await user_service.update_last_sign_in(
        users,
        payload.get("email"),
        payload.get("lastSignInTime"),
    )


@router.delete("/{user_id}", response_model=DeleteAck)
async def delete_user(
    user_id: str,
    users: AsyncIOMotorCollection = Depends(get_users_collection),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """
    Deletes the user's Firebase account, then the user document.

    404 when the user does not exist; any other failure is a 500 carrying
    the underlying error text.
    """
    try:
        return await user_service.delete_user(users, identity, user_id)
    except (InvalidIdentifierError, ResourceNotFoundError):
        raise
    except Exception as e:
        logger.error(f"Error deleting user {user_id}: {e}", exc_info=True)
        raise UserDeletionError(details=str(e)) from e
