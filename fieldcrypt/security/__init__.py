"""
Security module - Frozen algorithm parameters and envelope layout.
"""

from fieldcrypt.security.constants import (
    KEY_LENGTH_BYTES,
    NONCE_LENGTH_BYTES,
    TAG_LENGTH_BYTES,
    SALT_LENGTH_BYTES,
    KDF_ITERATIONS,
    ENVELOPE_HEADER_BYTES,
)

__all__ = [
    "KEY_LENGTH_BYTES",
    "NONCE_LENGTH_BYTES",
    "TAG_LENGTH_BYTES",
    "SALT_LENGTH_BYTES",
    "KDF_ITERATIONS",
    "ENVELOPE_HEADER_BYTES",
]
