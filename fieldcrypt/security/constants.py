"""
Security Constants
==================

Defines the algorithm and layout constants for the encrypted envelope.
These values are part of the stored data format: changing any of them makes
every previously issued envelope undecryptable.
"""

from typing import Final

# AES-256-GCM
KEY_LENGTH_BYTES: Final[int] = 32  # 256 bits
NONCE_LENGTH_BYTES: Final[int] = 12  # 96 bits for GCM
TAG_LENGTH_BYTES: Final[int] = 16  # 128 bits

# Key Derivation (PBKDF2-HMAC-SHA512)
KDF_ITERATIONS: Final[int] = 100_000
SALT_LENGTH_BYTES: Final[int] = 16

# Envelope layout: salt || nonce || tag || ciphertext
ENVELOPE_HEADER_BYTES: Final[int] = (
    SALT_LENGTH_BYTES + NONCE_LENGTH_BYTES + TAG_LENGTH_BYTES
)

# Random keys
RANDOM_KEY_BYTES: Final[int] = 32

# Password hashing (stored as "salt_hex:hash_hex")
PASSWORD_SALT_BYTES: Final[int] = 16
PASSWORD_HASH_ITERATIONS: Final[int] = 10_000
PASSWORD_HASH_BYTES: Final[int] = 64

# Tokens
DEFAULT_TOKEN_BYTES: Final[int] = 32

# Uniform caller-visible failure messages
ENCRYPTION_FAILED_MESSAGE: Final[str] = "Failed to encrypt data"
DECRYPTION_FAILED_MESSAGE: Final[str] = "Failed to decrypt data"
