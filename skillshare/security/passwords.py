"""
Password hashing.

A thin wrapper around argon2-cffi so the rest of the code only sees an opaque
hash/verify pair. Plaintext passwords are never stored or logged.
"""

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError


class PasswordHasher:
    """One-way password hashing with Argon2id."""

    def __init__(self, hasher: _Argon2Hasher | None = None):
        self._hasher = hasher or _Argon2Hasher()

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Return True if the password matches the stored hash."""
        if not password_hash:
            return False
        try:
            return self._hasher.verify(password_hash, password)
        except (VerificationError, InvalidHashError):
            return False


__all__ = ["PasswordHasher"]
