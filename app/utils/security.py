"""
Password hashing for the seed-only credential store.
"""

import hashlib
import hmac
import logging
import secrets
from typing import Optional

logger = logging.getLogger(__name__)

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 260000


def hash_password(password: str, salt: Optional[str] = None, iterations: int = ITERATIONS) -> str:
    """
    Hash a password with salted PBKDF2-SHA256.

    Args:
        password: Plaintext password
        salt: Hex salt (random when omitted)
        iterations: PBKDF2 work factor

    Returns:
        "pbkdf2_sha256$<iterations>$<salt>$<hex digest>"
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"{ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, stored_hash: Optional[str]) -> bool:
    """
    Check a plaintext password against a stored hash.
    Malformed hashes never verify.
    """
    if not stored_hash:
        return False

    try:
        algorithm, iterations, salt, _ = stored_hash.split("$")
        if algorithm != ALGORITHM:
            return False
        candidate = hash_password(password, salt=salt, iterations=int(iterations))
    except ValueError as e:
        logger.warning(f"Malformed password hash: {e}")
        return False

    return hmac.compare_digest(candidate, stored_hash)
