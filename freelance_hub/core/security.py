"""Password hashing primitives for signup and signin workflows."""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets

HASH_ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 260000


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS, salt: bytes | None = None) -> str:
    """Return a salted PBKDF2 hash encoded as `algorithm$iterations$salt$digest`."""
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{HASH_ALGORITHM}${iterations}${_b64(salt)}${_b64(digest)}"


def verify_password(password: str, hashed_password: str) -> bool:
    """Constant-time comparison against a stored hash."""
    try:
        algorithm, iterations, salt, expected = hashed_password.split("$", 3)
        salt_bytes = base64.b64decode(salt)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt_bytes, rounds)
    return hmac.compare_digest(_b64(digest), expected)
