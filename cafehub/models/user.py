"""
cafehub/models/user.py

Purpose: Typed view of the identity fields on a user document

- firebaseUid links a user to its Firebase account
- email is the fallback link (best-effort, not guaranteed unique)
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UserIdentityLink:
    user_id: str
    firebase_uid: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserIdentityLink":
        return cls(
            user_id=str(document.get("_id")),
            firebase_uid=document.get("firebaseUid") or None,
            email=document.get("email") or None,
        )
