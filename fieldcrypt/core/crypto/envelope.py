"""
Encrypted Envelope Format
=========================

Layout of a password-encrypted value:

    SALT (16) | NONCE (12) | TAG (16) | CIPHERTEXT (variable)

The whole byte string is base64-encoded for storage and transport.
There is no magic or version prefix; segment positions are fixed.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass

from fieldcrypt.security.constants import (
    ENVELOPE_HEADER_BYTES,
    NONCE_LENGTH_BYTES,
    SALT_LENGTH_BYTES,
    TAG_LENGTH_BYTES,
)

_NONCE_OFFSET = SALT_LENGTH_BYTES
_TAG_OFFSET = _NONCE_OFFSET + NONCE_LENGTH_BYTES


@dataclass(frozen=True, slots=True)
class EncryptedEnvelope:
    """
    Immutable container for one encrypted value.

    Contains everything needed for decryption except the secret.
    """

    salt: bytes
    nonce: bytes
    tag: bytes
    ciphertext: bytes

    def __post_init__(self) -> None:
        """Validate fixed segment sizes."""
        if len(self.salt) != SALT_LENGTH_BYTES:
            raise ValueError(f"Salt must be exactly {SALT_LENGTH_BYTES} bytes")
        if len(self.nonce) != NONCE_LENGTH_BYTES:
            raise ValueError(f"Nonce must be exactly {NONCE_LENGTH_BYTES} bytes")
        if len(self.tag) != TAG_LENGTH_BYTES:
            raise ValueError(f"Tag must be exactly {TAG_LENGTH_BYTES} bytes")

    def to_bytes(self) -> bytes:
        """Serialize the envelope as salt || nonce || tag || ciphertext."""
        return b"".join([self.salt, self.nonce, self.tag, self.ciphertext])

    def to_base64(self) -> str:
        """Serialize to a transport-safe base64 string."""
        return base64.b64encode(self.to_bytes()).decode("ascii")

    @classmethod
    def from_bytes(cls, data: bytes) -> "EncryptedEnvelope":
        """
        Split raw envelope bytes into their segments.

        Raises:
            ValueError: If data is too short to hold the fixed segments
        """
        if len(data) < ENVELOPE_HEADER_BYTES:
            raise ValueError("Invalid envelope: too short")

        return cls(
            salt=bytes(data[:_NONCE_OFFSET]),
            nonce=bytes(data[_NONCE_OFFSET:_TAG_OFFSET]),
            tag=bytes(data[_TAG_OFFSET:ENVELOPE_HEADER_BYTES]),
            ciphertext=bytes(data[ENVELOPE_HEADER_BYTES:]),
        )

    @classmethod
    def from_base64(cls, encoded: str) -> "EncryptedEnvelope":
        """
        Decode a base64 envelope string.

        Whitespace and line breaks are ignored, so wrapped envelopes decode;
        any other non-alphabet character is rejected.

        Raises:
            ValueError: If the string is not valid base64 or is too short
        """
        try:
            data = base64.b64decode("".join(encoded.split()), validate=True)
        except (AttributeError, TypeError, ValueError) as e:
            raise ValueError("Invalid envelope: bad base64") from e
        return cls.from_bytes(data)

    def __repr__(self) -> str:
        """Safe representation."""
        return f"EncryptedEnvelope(ct_len={len(self.ciphertext)})"
