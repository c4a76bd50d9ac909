"""
FieldCrypt Cryptographic Core
=============================

Password-based authenticated encryption for stored text fields.

Architecture:
    1. PBKDF2-HMAC-SHA512: passphrase to 256-bit key
    2. AES-256-GCM: authenticated encryption
    3. Envelope: salt || nonce || tag || ciphertext, base64-encoded

Security Properties:
    - All encryption is authenticated (AEAD)
    - Fresh salt and nonce per encryption
    - Uniform errors on failure
    - Constant-time comparisons

WARNING: This module handles sensitive cryptographic material.
         Incorrect usage can compromise security.
"""

from fieldcrypt.core.crypto.aes_gcm import AesGcmCipher
from fieldcrypt.core.crypto.envelope import EncryptedEnvelope
from fieldcrypt.core.crypto.encryption import (
    EncryptionUtils,
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

__all__ = [
    "AesGcmCipher",
    "EncryptedEnvelope",
    "EncryptionUtils",
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
]
