"""
Password-Based Envelope Encryption
==================================

AES-256-GCM encryption of text fields under a passphrase, plus the
hashing and comparison helpers that go with it.

Encryption Flow:
    secret + random salt (16)
        ↓ PBKDF2-HMAC-SHA512, 100,000 iterations
    key (32)
        ↓ AES-256-GCM with random nonce (12)
    ciphertext + tag (16)
        ↓ salt || nonce || tag || ciphertext
    base64 envelope

Security Properties:
    - Fresh salt and nonce for every encryption
    - Integrity verified before any plaintext is returned
    - One uniform error per direction; causes are logged, never raised
    - Constant-time comparisons via hmac.compare_digest

Every operation is a pure function of its inputs apart from reads from
the OS CSPRNG, so all of them are safe to call from multiple threads.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets

from cryptography.exceptions import InvalidTag

from fieldcrypt.core.crypto.aes_gcm import AesGcmCipher
from fieldcrypt.core.crypto.envelope import EncryptedEnvelope
from fieldcrypt.core.crypto.kdf import derive_key_pbkdf2, generate_salt
from fieldcrypt.security.constants import (
    DECRYPTION_FAILED_MESSAGE,
    ENCRYPTION_FAILED_MESSAGE,
    KDF_ITERATIONS,
    KEY_LENGTH_BYTES,
    RANDOM_KEY_BYTES,
)

logger = logging.getLogger(__name__)


class CryptoError(Exception):
    """Base class for encryption utility failures."""
    pass


class EncryptionError(CryptoError):
    """
    Raised when encryption cannot complete.

    The message is always the same; the cause is chained and logged.
    """

    def __init__(self) -> None:
        super().__init__(ENCRYPTION_FAILED_MESSAGE)


class DecryptionError(CryptoError):
    """
    Raised for every decryption failure.

    Wrong secret, tampered data and malformed envelopes are
    indistinguishable to the caller.
    """

    def __init__(self) -> None:
        super().__init__(DECRYPTION_FAILED_MESSAGE)


class EncryptionUtils:
    """
    Stateless AES-256-GCM envelope encryption and integrity helpers.

    Usage:
        envelope = EncryptionUtils.encrypt("card ending 4242", secret)
        plaintext = EncryptionUtils.decrypt(envelope, secret)

        digest = EncryptionUtils.hash(payload)
        EncryptionUtils.verify_integrity(payload, digest)

    Callers must treat DecryptionError as terminal for the request:
    retrying with the same inputs fails the same way.
    """

    __slots__ = ()

    _cipher = AesGcmCipher()

    @classmethod
    def encrypt(cls, plaintext: str, secret: str) -> str:
        """
        Encrypt a text value under a passphrase.

        Args:
            plaintext: Text to protect (encoded as UTF-8)
            secret: Passphrase the key is derived from

        Returns:
            Base64 envelope string

        Raises:
            EncryptionError: On any failure
        """
        try:
            data = plaintext.encode("utf-8")
            salt = generate_salt()
            key = cls.generate_key(secret, salt)
            nonce = cls._cipher.generate_nonce()

            ciphertext, tag = cls._cipher.encrypt(data, key, nonce)

            envelope = EncryptedEnvelope(
                salt=salt,
                nonce=nonce,
                tag=tag,
                ciphertext=ciphertext,
            )
            return envelope.to_base64()
        except Exception as exc:
            logger.error("Encryption failed: %s", type(exc).__name__)
            logger.debug("Encryption failure detail", exc_info=True)
            raise EncryptionError() from exc

    @classmethod
    def decrypt(cls, envelope: str, secret: str) -> str:
        """
        Decrypt an envelope produced by encrypt().

        Args:
            envelope: Base64 envelope string
            secret: Passphrase used at encryption time

        Returns:
            The original plaintext

        Raises:
            DecryptionError: On any failure, with no indication of the cause
        """
        try:
            parsed = EncryptedEnvelope.from_base64(envelope)
            key = cls.generate_key(secret, parsed.salt)

            data = cls._cipher.decrypt(
                ciphertext=parsed.ciphertext,
                tag=parsed.tag,
                key=key,
                nonce=parsed.nonce,
            )
            return data.decode("utf-8")
        except InvalidTag as exc:
            logger.warning("Decryption failed: authentication check rejected envelope")
            raise DecryptionError() from exc
        except Exception as exc:
            logger.error("Decryption failed: %s", type(exc).__name__)
            logger.debug("Decryption failure detail", exc_info=True)
            raise DecryptionError() from exc

    @staticmethod
    def hash(data: str) -> str:
        """Return the SHA-256 digest of `data` as 64 lowercase hex characters."""
        return hashlib.sha256(data.encode("utf-8")).hexdigest()

    @classmethod
    def verify_integrity(cls, data: str, digest: str) -> bool:
        """
        Check `data` against a digest from hash().

        Comparison is exact: an uppercase digest does not match.
        Never raises; any internal error yields False.
        """
        try:
            return cls.secure_compare(cls.hash(data), digest)
        except Exception:
            logger.debug("Integrity check raised; treating as mismatch", exc_info=True)
            return False

    @staticmethod
    def generate_key(passphrase: str, salt: bytes) -> bytes:
        """
        Derive the 32-byte encryption key for (passphrase, salt).

        Deliberately slow: PBKDF2-HMAC-SHA512 with 100,000 iterations.
        """
        return derive_key_pbkdf2(
            passphrase,
            salt,
            length=KEY_LENGTH_BYTES,
            iterations=KDF_ITERATIONS,
        )

    @staticmethod
    def secure_compare(a: str, b: str) -> bool:
        """
        Compare two strings without leaking where they differ.

        Both are compared as UTF-8 bytes with hmac.compare_digest.
        Never raises; invalid input yields False.
        """
        try:
            return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
        except Exception:
            return False

    @staticmethod
    def generate_random_key() -> str:
        """Return 32 random bytes as 64 lowercase hex characters."""
        return secrets.token_hex(RANDOM_KEY_BYTES)


encrypt = EncryptionUtils.encrypt
decrypt = EncryptionUtils.decrypt
hash_data = EncryptionUtils.hash
verify_integrity = EncryptionUtils.verify_integrity
generate_key = EncryptionUtils.generate_key
secure_compare = EncryptionUtils.secure_compare
generate_random_key = EncryptionUtils.generate_random_key
