"""
Key Derivation Functions
========================

Password-based key derivation for envelope encryption.

Implements:
    - PBKDF2-HMAC-SHA512 for passphrase stretching
    - Random salt generation
"""

from __future__ import annotations

import secrets

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from fieldcrypt.security.constants import (
    KDF_ITERATIONS,
    KEY_LENGTH_BYTES,
    SALT_LENGTH_BYTES,
)


def generate_salt(length: int = SALT_LENGTH_BYTES) -> bytes:
    """Return `length` bytes from the OS CSPRNG."""
    return secrets.token_bytes(length)


def derive_key_pbkdf2(
    password: str,
    salt: bytes,
    length: int = KEY_LENGTH_BYTES,
    iterations: int = KDF_ITERATIONS,
) -> bytes:
    """
    Derive a key from password using PBKDF2-HMAC-SHA512.

    Args:
        password: User passphrase (encoded as UTF-8)
        salt: Random salt
        length: Output key length
        iterations: PBKDF2 iteration count

    Returns:
        Derived key bytes

    Security:
        - Deterministic: same password+salt = same key
        - Salt must be unique per encryption
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=length,
        salt=bytes(salt),
        iterations=iterations,
    )
    return kdf.derive(password.encode("utf-8"))
