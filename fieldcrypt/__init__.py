"""
FieldCrypt - Encryption Utilities for Stored Fields
===================================================

Password-based AES-256-GCM encryption, integrity hashing, constant-time
comparison and random key generation.

Security Notice:
- No secrets are logged
- Decryption failures never reveal their cause
- Every encryption uses a fresh salt and nonce
"""

from fieldcrypt.core.config import FieldCryptConfig
from fieldcrypt.core.logging import get_secure_logger
from fieldcrypt.core.crypto import (
    EncryptionUtils,
    EncryptedEnvelope,
    CryptoError,
    EncryptionError,
    DecryptionError,
    encrypt,
    decrypt,
    hash_data,
    verify_integrity,
    generate_key,
    secure_compare,
    generate_random_key,
)
from fieldcrypt.core.auth import (
    generate_secure_token,
    generate_csrf_token,
    hash_password,
    verify_password,
)

__version__ = "0.1.0"

__all__ = [
    "FieldCryptConfig",
    "get_secure_logger",
    "EncryptionUtils",
    "EncryptedEnvelope",
    "CryptoError",
    "EncryptionError",
    "DecryptionError",
    "encrypt",
    "decrypt",
    "hash_data",
    "verify_integrity",
    "generate_key",
    "secure_compare",
    "generate_random_key",
    "generate_secure_token",
    "generate_csrf_token",
    "hash_password",
    "verify_password",
    "__version__",
]
