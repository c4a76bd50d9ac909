"""
Tokens and Password Hashing
===========================

Random token generation and salted password hashes for session and
form-protection code that sits next to the encryption utilities.

Stored password format:
    "<salt hex>:<PBKDF2-HMAC-SHA512 hex>"

The hex-encoded salt string itself is the PBKDF2 salt, so existing
stored hashes stay verifiable.
"""

from __future__ import annotations

import hmac
import secrets
from typing import Final

from fieldcrypt.core.crypto.kdf import derive_key_pbkdf2
from fieldcrypt.security.constants import (
    DEFAULT_TOKEN_BYTES,
    PASSWORD_HASH_BYTES,
    PASSWORD_HASH_ITERATIONS,
    PASSWORD_SALT_BYTES,
)

_SEPARATOR: Final[str] = ":"


def generate_secure_token(length: int = DEFAULT_TOKEN_BYTES) -> str:
    """
    Generate a random hex token.

    Args:
        length: Number of random bytes (the token is twice as long)

    Raises:
        ValueError: If length is not positive
    """
    if length <= 0:
        raise ValueError("Token length must be positive")
    return secrets.token_hex(length)


def generate_csrf_token() -> str:
    """Generate a 64-character hex CSRF token."""
    return secrets.token_hex(DEFAULT_TOKEN_BYTES)


def _derive(password: str, salt_hex: str) -> str:
    return derive_key_pbkdf2(
        password,
        salt_hex.encode("utf-8"),
        length=PASSWORD_HASH_BYTES,
        iterations=PASSWORD_HASH_ITERATIONS,
    ).hex()


def hash_password(password: str) -> str:
    """
    Hash a password with a fresh random salt.

    Returns:
        "salt_hex:hash_hex" string for storage
    """
    salt_hex = secrets.token_hex(PASSWORD_SALT_BYTES)
    return f"{salt_hex}{_SEPARATOR}{_derive(password, salt_hex)}"


def verify_password(password: str, stored: str) -> bool:
    """
    Verify a password against a value from hash_password().

    Uses a constant-time comparison. Malformed stored values and
    non-string input return False rather than raising.
    """
    try:
        salt_hex, expected = stored.split(_SEPARATOR)
        if not salt_hex or not expected:
            return False
        return hmac.compare_digest(
            _derive(password, salt_hex).encode("ascii"),
            expected.encode("ascii"),
        )
    except (AttributeError, TypeError, ValueError, UnicodeError):
        return False
