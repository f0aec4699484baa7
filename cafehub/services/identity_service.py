"""
cafehub/services/identity_service.py

Purpose: Firebase Authentication client

- Initializes the firebase_admin app once per process
- Async wrappers around the blocking Admin SDK calls
- Account lookup by email and deletion by uid
"""

from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool

from cafehub.core.config import Settings, settings
from cafehub.core.exceptions import IdentityProviderError
from cafehub.core.logging import get_logger

logger = get_logger(__name__)


class IdentityProvider:
    """
    Thin async facade over ``firebase_admin.auth``.

    The Admin SDK is synchronous, so each call runs in Starlette's threadpool
    to keep the event loop free.
    """

    def __init__(self, app: Optional[firebase_admin.App] = None):
        self._app = app

    async def get_user_by_email(self, email: str) -> auth.UserRecord:
        try:
            return await run_in_threadpool(auth.get_user_by_email, email, app=self._app)
        except (FirebaseError, ValueError) as e:
            raise IdentityProviderError(
                message=f"Could not resolve identity account for {email}",
                details=str(e)
            ) from e

    async def delete_user(self, uid: str) -> None:
        try:
            await run_in_threadpool(auth.delete_user, uid, app=self._app)
        except (FirebaseError, ValueError) as e:
            raise IdentityProviderError(
                message=f"Could not delete identity account {uid}",
                details=str(e)
            ) from e
        logger.info("Identity account deleted", extra={"firebase_uid": uid})


_provider: Optional[IdentityProvider] = None


def initialize_firebase(current: Optional[Settings] = None) -> IdentityProvider:
    """
    Initializes the default Firebase app (if needed) and the shared provider.
    Called during application startup.
    """
    global _provider
    current = current or settings

    try:
        app = firebase_admin.get_app()
        logger.info("Firebase app already initialized.")
    except ValueError:
        logger.info("Initializing Firebase app...")
        if current.FIREBASE_CREDENTIALS_PATH:
            cred = credentials.Certificate(current.FIREBASE_CREDENTIALS_PATH)
        else:
            # Cloud Run / GCE: implicit service account
            cred = credentials.ApplicationDefault()

        options = {"projectId": current.FIREBASE_PROJECT_ID} if current.FIREBASE_PROJECT_ID else None
        app = firebase_admin.initialize_app(cred, options)
        logger.info("Firebase app initialized successfully.")

    _provider = IdentityProvider(app)
    return _provider


def get_identity_provider() -> IdentityProvider:
    """
    Returns the shared identity provider.

    Raises:
        RuntimeError: If Firebase was not initialized during startup
    """
    if _provider is None:
        raise RuntimeError(
            "Identity provider not initialized. Call initialize_firebase() during startup."
        )
    return _provider
