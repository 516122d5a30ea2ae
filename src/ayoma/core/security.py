"""Password hashing built on bcrypt."""
from __future__ import annotations

import bcrypt

from ayoma.core.settings import settings

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of ``password``.

    Args:
        password: Plain text password.
        rounds: Cost factor; defaults to ``settings.bcrypt_rounds``.

    Returns:
        The encoded hash, salt and cost included.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if ``password`` matches ``password_hash``."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("ascii"))
    except ValueError:
        # Malformed stored hash
        return False
