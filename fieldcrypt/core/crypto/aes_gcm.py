"""
AES-256-GCM Authenticated Encryption
====================================

Thin wrapper around AES-256-GCM that keeps the authentication tag detached
from the ciphertext, so callers can lay the segments out themselves.

Security Properties:
    - 256-bit key
    - 96-bit nonce (NIST recommended)
    - 128-bit authentication tag

WARNING:
    - Never reuse (key, nonce) pairs
    - Always verify tag before using plaintext
"""

from __future__ import annotations

import secrets
from typing import Tuple

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from fieldcrypt.security.constants import (
    KEY_LENGTH_BYTES,
    NONCE_LENGTH_BYTES,
    TAG_LENGTH_BYTES,
)

AES_KEY_SIZE = KEY_LENGTH_BYTES
AES_NONCE_SIZE = NONCE_LENGTH_BYTES
AES_TAG_SIZE = TAG_LENGTH_BYTES


class AesGcmCipher:
    """
    AES-256-GCM AEAD cipher with a detached tag.

    Usage:
        cipher = AesGcmCipher()
        nonce = cipher.generate_nonce()

        ciphertext, tag = cipher.encrypt(plaintext, key, nonce)
        plaintext = cipher.decrypt(ciphertext, tag, key, nonce)

    Security Notes:
        - The caller owns the key; nothing is cached on the instance
        - InvalidTag means wrong key, tampered data or wrong nonce
    """

    __slots__ = ()

    @staticmethod
    def generate_nonce() -> bytes:
        """
        Generate a cryptographically secure random nonce.

        Returns:
            12 bytes of cryptographic random data
        """
        return secrets.token_bytes(AES_NONCE_SIZE)

    def encrypt(
        self,
        plaintext: bytes,
        key: bytes,
        nonce: bytes,
    ) -> Tuple[bytes, bytes]:
        """
        Encrypt plaintext using AES-256-GCM.

        Args:
            plaintext: Data to encrypt (can be empty)
            key: 32-byte key
            nonce: 12-byte nonce, unique for this key

        Returns:
            (ciphertext, tag) with the 16-byte tag split off

        Raises:
            ValueError: If key or nonce is the wrong size
        """
        self._check_key_and_nonce(key, nonce)

        sealed = AESGCM(key).encrypt(nonce, plaintext, None)

        # cryptography appends the tag to the ciphertext
        return sealed[:-AES_TAG_SIZE], sealed[-AES_TAG_SIZE:]

    def decrypt(
        self,
        ciphertext: bytes,
        tag: bytes,
        key: bytes,
        nonce: bytes,
    ) -> bytes:
        """
        Decrypt ciphertext using AES-256-GCM with integrity verification.

        Args:
            ciphertext: Encrypted data without the tag
            tag: 16-byte authentication tag
            key: 32-byte key
            nonce: The nonce used during encryption

        Returns:
            Decrypted plaintext bytes

        Raises:
            ValueError: If parameters are invalid
            cryptography.exceptions.InvalidTag: If authentication fails
        """
        self._check_key_and_nonce(key, nonce)
        if len(tag) != AES_TAG_SIZE:
            raise ValueError(f"Tag must be exactly {AES_TAG_SIZE} bytes")

        return AESGCM(key).decrypt(nonce, bytes(ciphertext) + bytes(tag), None)

    @staticmethod
    def _check_key_and_nonce(key: bytes, nonce: bytes) -> None:
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"Key must be exactly {AES_KEY_SIZE} bytes")
        if len(nonce) != AES_NONCE_SIZE:
            raise ValueError(f"Nonce must be exactly {AES_NONCE_SIZE} bytes")
