"""
Credential Store - seed-only users in Firestore.

Decoupled from reports and device tokens; the HTTP API does not use it.
Populated out of band by scripts/seed_user.py.
"""

from firebase_admin import firestore
from app.core.exceptions import StorageError
from app.models.user import UserCreate, UserRecord
from app.utils.firestore_helpers import snapshot_to_dict, where_filter
from app.utils.security import hash_password, verify_password
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Service for user management in Firestore.
    """

    def __init__(self, db, collection: str = "users"):
        self.db = db
        self.collection = collection

    def _find(self, username: str) -> Optional[Dict]:
        users_ref = self.db.collection(self.collection)
        query = where_filter(users_ref, "username", "==", username).limit(1)
        docs = list(query.stream())
        if docs:
            return snapshot_to_dict(docs[0])
        return None

    def get_user(self, username: str) -> Optional[UserRecord]:
        """
        Get user by username, or None if not found.
        """
        try:
            data = self._find(username)
        except Exception as e:
            logger.error(f"Failed to get user {username}: {e}", exc_info=True)
            raise StorageError("Failed to load user") from e

        if data is None:
            return None
        return UserRecord(
            id=data["id"],
            username=data["username"],
            role=data["role"],
            created_at=data.get("created_at"),
        )

    def create_user(self, user: UserCreate) -> UserRecord:
        """
        Create a user with a hashed password.

        Idempotent on username: an existing user is returned unchanged.
        """
        existing = self.get_user(user.username)
        if existing:
            logger.info(f"User {user.username} already exists, leaving it unchanged")
            return existing

        try:
            user_ref = self.db.collection(self.collection).document()
            user_ref.set({
                "username": user.username,
                "password": hash_password(user.password),
                "role": user.role.value,
                "created_at": firestore.SERVER_TIMESTAMP,
            })
            created = snapshot_to_dict(user_ref.get())
        except Exception as e:
            logger.error(f"Failed to create user {user.username}: {e}", exc_info=True)
            raise StorageError("Failed to create user") from e

        logger.info(f"✅ User created: {user.username} ({user.role.value})")
        return UserRecord(
            id=created["id"],
            username=created["username"],
            role=created["role"],
            created_at=created.get("created_at"),
        )

    def verify(self, username: str, password: str) -> bool:
        try:
            data = self._find(username)
        except Exception as e:
            logger.error(f"Failed to get user {username}: {e}", exc_info=True)
            raise StorageError("Failed to load user") from e

        if data is None:
            return False
        return verify_password(password, data.get("password"))
