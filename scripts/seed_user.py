"""
Seed script for the clinic dashboard user.

Usage:
  - Dry run (default): python -m scripts.seed_user
  - Apply to configured Firestore: python -m scripts.seed_user --apply
  - Custom user: python -m scripts.seed_user --apply --username desk --password s3cret --role reporter

Behavior:
  - Connects to Firestore with the same settings as the API.
  - Creates the user with a hashed password unless the username already exists.

NOTE: Change the default password after seeding a shared environment.
"""

import argparse
import logging
from typing import List, Optional

from app.config.firebase import get_firestore_client, initialize_firebase, shutdown_firebase
from app.core.logging import configure_logging
from app.core.settings import settings
from app.models.user import UserCreate, UserRole
from app.services.user_service import CredentialStore

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the dashboard login user")
    parser.add_argument("--apply", action="store_true", help="Write the user instead of dry-run")
    parser.add_argument("--username", default="clinic")
    parser.add_argument("--password", default="123456")
    parser.add_argument("--role", default=UserRole.CLINIC.value, choices=[r.value for r in UserRole])
    return parser.parse_args(argv)


def seed(db, args: argparse.Namespace) -> Optional[str]:
    """Returns the user's document ID, or None on a dry run."""
    user = UserCreate(username=args.username, password=args.password, role=UserRole(args.role))
    print(f"Preparing: {settings.USERS_COLLECTION}/{user.username} ({user.role.value})")
    if not args.apply:
        print("Dry run complete. Re-run with --apply to write to DB.")
        return None

    store = CredentialStore(db, collection=settings.USERS_COLLECTION)
    record = store.create_user(user)
    print(f"✅ User ready: username={record.username}, role={record.role.value}")
    return record.id


def main(argv: Optional[List[str]] = None):
    configure_logging(settings.LOG_LEVEL)
    args = parse_args(argv)

    firebase_app = initialize_firebase(settings)
    try:
        seed(get_firestore_client(firebase_app), args)
    finally:
        shutdown_firebase(firebase_app)


if __name__ == "__main__":
    main()
