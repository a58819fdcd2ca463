"""
Device Registry - FCM registration tokens in Firestore.

Uniqueness is best-effort: an equality query runs before every insert.
Two concurrent registrations of the same token may both insert; the only
effect is a duplicate push, which clients already tolerate.
"""

from firebase_admin import firestore
from app.core.exceptions import StorageError, ValidationError
from app.utils.firestore_helpers import where_filter
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class DeviceRegistry:

    def __init__(self, db, collection: str = "device_tokens"):
        self.db = db
        self.collection = collection

    def register_if_absent(self, token: Optional[str]) -> bool:
        """
        Store a device token unless it is already registered.

        Returns:
            True if a new token document was written

        Raises:
            ValidationError: token missing or blank
            StorageError: Firestore query or write failed
        """
        if not token or not token.strip():
            raise ValidationError("Token is required")

        tokens_ref = self.db.collection(self.collection)
        try:
            existing = list(where_filter(tokens_ref, "token", "==", token).limit(1).stream())
            if existing:
                logger.info("Device token already registered")
                return False

            tokens_ref.document().set({
                "token": token,
                "created_at": firestore.SERVER_TIMESTAMP,
            })
        except Exception as e:
            logger.error(f"Failed to save device token: {e}", exc_info=True)
            raise StorageError("Failed to save token") from e

        logger.info("✅ Device token registered")
        return True

    def all_tokens(self) -> List[str]:
        """
        Every registered token, order unspecified.

        Raises:
            StorageError: Firestore query failed
        """
        try:
            docs = list(self.db.collection(self.collection).stream())
        except Exception as e:
            logger.error(f"Failed to load device tokens: {e}", exc_info=True)
            raise StorageError("Failed to load device tokens") from e

        tokens = []
        for doc in docs:
            token = (doc.to_dict() or {}).get("token")
            if token:
                tokens.append(token)
        return tokens
