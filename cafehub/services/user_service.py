"""
cafehub/services/user_service.py

Purpose: User data management

- Create and search user records
- Record last sign-in time by email
- Cascading delete: Firebase account first, then the user document
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from cafehub.core.exceptions import ResourceNotFoundError
from cafehub.core.logging import get_logger, LogContext
from cafehub.models.user import UserIdentityLink
from cafehub.schemas.response import InsertAck, UpdateAck, DeleteAck
from cafehub.services.identity_service import IdentityProvider
from cafehub.utils.serialization_utils import serialize_document
from cafehub.utils.validation_utils import build_user_search_filter, parse_object_id

logger = get_logger(__name__)


class FailureSeverity(str, Enum):
    """How a failed identity cleanup affects the rest of the delete."""
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class CleanupAction(str, Enum):
    DELETE_BY_UID = "delete_by_uid"
    DELETE_BY_EMAIL = "delete_by_email"
    SKIPPED = "skipped"


@dataclass
class CleanupOutcome:
    """
    Result of the identity-account cleanup step of a user delete.

    A uid-linked account that cannot be deleted is FATAL: the user document
    is kept. An email-linked account is resolved best-effort, so its failures
    are RECOVERABLE and the delete proceeds.
    """
    action: CleanupAction
    firebase_uid: Optional[str] = None
    error: Optional[Exception] = None
    severity: Optional[FailureSeverity] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


async def create_user(users: AsyncIOMotorCollection, document: Dict[str, Any]) -> InsertAck:
    result = await users.insert_one(document)
    logger.info(f"User created: {result.inserted_id}", extra={"resource": "users"})
    return InsertAck.from_result(result)


async def search_users(users: AsyncIOMotorCollection, search_query: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Lists users, optionally filtered by a case-insensitive substring matched
    against name, email, phoneNumber and address.
    """
    documents = await users.find(build_user_search_filter(search_query)).to_list(length=None)
    return [serialize_document(document) for document in documents]


async def update_last_sign_in(users: AsyncIOMotorCollection, email: Optional[str], last_sign_in_time: Any) -> UpdateAck:
    """
    Sets lastSignInTime on the user with this exact email.
    An unknown email is a zero-count acknowledgment, not an error.
    """
    result = await users.update_one(
        {"email": email},
        {"$set": {"lastSignInTime": last_sign_in_time}}
    )

    if result.matched_count == 0:
        logger.debug(f"No user with email {email} to update", extra={"resource": "users"})
    return UpdateAck.from_result(result)


async def cleanup_identity_account(identity: IdentityProvider, link: UserIdentityLink) -> CleanupOutcome:
    """
    Deletes the Firebase account linked to a user.

    Priority: firebaseUid, then a lookup by email, then nothing.
    Failures are returned, not raised; the caller decides from the severity.
    """
    if link.firebase_uid:
        try:
            await identity.delete_user(link.firebase_uid)
        except Exception as e:
            return CleanupOutcome(
                action=CleanupAction.DELETE_BY_UID,
                firebase_uid=link.firebase_uid,
                error=e,
                severity=FailureSeverity.FATAL,
            )
        return CleanupOutcome(action=CleanupAction.DELETE_BY_UID, firebase_uid=link.firebase_uid)

    if link.email:
        try:
            account = await identity.get_user_by_email(link.email)
            await identity.delete_user(account.uid)
        except Exception as e:
            return CleanupOutcome(
                action=CleanupAction.DELETE_BY_EMAIL,
                error=e,
                severity=FailureSeverity.RECOVERABLE,
            )
        return CleanupOutcome(action=CleanupAction.DELETE_BY_EMAIL, firebase_uid=account.uid)

    return CleanupOutcome(action=CleanupAction.SKIPPED)


async def delete_user(
    users: AsyncIOMotorCollection,
    identity: IdentityProvider,
    user_id: str
) -> DeleteAck:
    """
    Deletes a user and its Firebase account.

    Steps:
        1. Find the user (ResourceNotFoundError if absent)
        2. Clean up the identity account (see cleanup_identity_account)
        3. Delete the user document

    The two systems are not updated atomically. A FATAL cleanup failure
    re-raises the underlying error and leaves the user document in place.

    Raises:
        InvalidIdentifierError: If user_id is malformed
        ResourceNotFoundError: If no user has this id
    """
    object_id = parse_object_id(user_id)

    with LogContext(user_id=user_id):
        user = await users.find_one({"_id": object_id})
        if user is None:
            logger.info("User not found for delete")
            raise ResourceNotFoundError(message="User not found")

        outcome = await cleanup_identity_account(identity, UserIdentityLink.from_document(user))

        if outcome.severity is FailureSeverity.FATAL:
            logger.error(f"Identity cleanup failed, user kept: {outcome.error}")
            raise outcome.error

        if outcome.severity is FailureSeverity.RECOVERABLE:
            logger.warning(f"Identity account not removed, continuing: {outcome.error}")
        elif outcome.action is CleanupAction.SKIPPED:
            logger.info("User has no linked identity account")

        result = await users.delete_one({"_id": object_id})
        logger.info(f"User deleted ({outcome.action.value})")
        return DeleteAck.from_result(result)
