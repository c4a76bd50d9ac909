"""
test_encryption.py - Tests for password-based envelope encryption

Run with: pytest tests/test_encryption.py -v
"""

import base64
import logging
import os
import re
import subprocess
import sys
from pathlib import Path

import pytest

from fieldcrypt import (
    DecryptionError,
    EncryptionError,
    EncryptionUtils,
    decrypt,
    encrypt,
    generate_key,
    generate_random_key,
    hash_data,
    secure_compare,
    verify_integrity,
)

HEX64 = re.compile(r"^[0-9a-f]{64}$")
SECRET = "super-secret-key"


# =============================================================================
# Helpers
# =============================================================================

def _flip_byte(envelope: str, index: int) -> str:
    raw = bytearray(base64.b64decode(envelope))
    raw[index] ^= 0x01
    return base64.b64encode(bytes(raw)).decode("ascii")


class ListHandler(logging.Handler):
    """Collects formatted records for assertions."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture
def captured_log():
    logger = logging.getLogger("fieldcrypt.core.crypto.encryption")
    handler = ListHandler()
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)


# =============================================================================
# Round trip
# =============================================================================

class TestRoundTrip:

    def test_example_scenario(self):
        data = "hello, 世界 🌟 with symbols !@#$%^&*()"

        encrypted = encrypt(data, SECRET)

        assert isinstance(encrypted, str)
        assert encrypted != data
        assert decrypt(encrypted, SECRET) == data

    @pytest.mark.parametrize("plaintext", [
        "",
        "a",
        "Ünïcödé ✓ ∑ 🚀🚀",
        "line1\nline2\ttab\x00nul",
        "x" * 5000,
    ])
    def test_round_trip_preserves_text(self, plaintext):
        assert decrypt(encrypt(plaintext, SECRET), SECRET) == plaintext

    def test_empty_secret_still_round_trips(self):
        assert decrypt(encrypt("payload", ""), "") == "payload"

    def test_same_input_gives_different_envelopes(self):
        first = encrypt("same", SECRET)
        second = encrypt("same", SECRET)

        assert first != second
        assert decrypt(first, SECRET) == "same"
        assert decrypt(second, SECRET) == "same"

    def test_envelope_layout_lengths(self):
        plaintext = "twelve bytes"
        raw = base64.b64decode(encrypt(plaintext, SECRET), validate=True)

        # salt(16) + nonce(12) + tag(16) + ciphertext (same length as plaintext)
        assert len(raw) == 44 + len(plaintext.encode("utf-8"))

    def test_empty_plaintext_envelope_is_exactly_header(self):
        raw = base64.b64decode(encrypt("", SECRET))
        assert len(raw) == 44

    def test_salt_is_usable_with_generate_key(self):
        envelope = encrypt("x", SECRET)
        raw = base64.b64decode(envelope)
        salt = raw[:16]
        assert generate_key(SECRET, salt) == generate_key(SECRET, bytes(salt))


# =============================================================================
# Decryption failures
# =============================================================================

class TestDecryptionFailures:

    def test_wrong_secret_raises_uniform_error(self):
        encrypted = encrypt("sensitive content", "secret-1")

        with pytest.raises(DecryptionError, match="Failed to decrypt data"):
            decrypt(encrypted, "secret-2")

    def test_example_wrong_secret(self):
        encrypted = encrypt("hello, 世界 🌟 with symbols !@#$%^&*()", SECRET)

        with pytest.raises(DecryptionError):
            decrypt(encrypted, "wrong-secret")

    @pytest.mark.parametrize("index", [0, 15, 16, 27, 28, 43, 44, -1])
    def test_tampering_any_segment_is_rejected(self, index):
        envelope = encrypt("tamper target", SECRET)

        with pytest.raises(DecryptionError, match="Failed to decrypt data"):
            decrypt(_flip_byte(envelope, index), SECRET)

    @pytest.mark.parametrize("envelope", [
        "",
        "not base64 !!",
        "AAAA",
        base64.b64encode(b"\x00" * 43).decode("ascii"),
        "ü" * 60,
    ])
    def test_malformed_envelopes_raise_uniform_error(self, envelope):
        with pytest.raises(DecryptionError) as exc_info:
            decrypt(envelope, SECRET)
        assert str(exc_info.value) == "Failed to decrypt data"

    def test_header_only_zero_bytes_fails_authentication(self):
        envelope = base64.b64encode(b"\x00" * 44).decode("ascii")

        with pytest.raises(DecryptionError):
            decrypt(envelope, SECRET)

    def test_truncated_ciphertext_is_rejected(self):
        raw = base64.b64decode(encrypt("some longer text", SECRET))
        truncated = base64.b64encode(raw[:-3]).decode("ascii")

        with pytest.raises(DecryptionError):
            decrypt(truncated, SECRET)

    def test_non_string_envelope_raises_decryption_error(self):
        with pytest.raises(DecryptionError):
            decrypt(None, SECRET)

    def test_wrong_key_and_corruption_messages_match(self):
        envelope = encrypt("data", SECRET)

        with pytest.raises(DecryptionError) as wrong_key:
            decrypt(envelope, "other")
        with pytest.raises(DecryptionError) as corrupted:
            decrypt(_flip_byte(envelope, -1), SECRET)

        assert str(wrong_key.value) == str(corrupted.value)

    def test_failure_is_logged_without_secret(self, captured_log):
        envelope = encrypt("data", SECRET)

        with pytest.raises(DecryptionError):
            decrypt(envelope, "hunter2-wrong")

        assert captured_log.messages
        assert all("hunter2-wrong" not in m for m in captured_log.messages)

    def test_failure_reaches_application_logging(self, caplog):
        envelope = encrypt("data", "a")

        with caplog.at_level(logging.WARNING):
            with pytest.raises(DecryptionError):
                decrypt(envelope, "b")

        records = [r for r in caplog.records if r.name == "fieldcrypt.core.crypto.encryption"]
        assert records
        assert records[0].levelno == logging.WARNING

    def test_line_wrapped_envelope_decrypts(self):
        plaintext = "wrapped field value " * 10
        envelope = encrypt(plaintext, SECRET)
        wrapped = "\n".join(envelope[i:i + 76] for i in range(0, len(envelope), 76))

        assert "\n" in wrapped
        assert decrypt(wrapped + "\n", SECRET) == plaintext


# =============================================================================
# Encryption failures
# =============================================================================

class TestEncryptionFailures:

    def test_unencodable_plaintext_raises_generic_error(self, captured_log):
        with pytest.raises(EncryptionError, match="Failed to encrypt data") as exc_info:
            encrypt("\ud800", SECRET)

        assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)
        assert any("UnicodeEncodeError" in m for m in captured_log.messages)

    def test_entropy_failure_is_wrapped(self, monkeypatch):
        def broken_salt(*args, **kwargs):
            raise OSError("entropy source unavailable")

        monkeypatch.setattr("fieldcrypt.core.crypto.encryption.generate_salt", broken_salt)

        with pytest.raises(EncryptionError) as exc_info:
            encrypt("data", SECRET)

        assert "entropy" not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_non_string_plaintext_raises_generic_error(self):
        with pytest.raises(EncryptionError):
            encrypt(b"bytes", SECRET)


# =============================================================================
# Hashing and integrity
# =============================================================================

class TestHashing:

    def test_hash_format_and_determinism(self):
        digest = hash_data("abc123")

        assert HEX64.match(digest)
        assert hash_data("abc123") == digest

    def test_hash_known_vector(self):
        assert hash_data("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_hash_of_empty_string(self):
        assert hash_data("") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_hash_uses_utf8(self):
        assert EncryptionUtils.hash("世界") != EncryptionUtils.hash("??")

    def test_verify_integrity(self):
        msg = "abc123"
        digest = hash_data(msg)

        assert verify_integrity(msg, digest) is True
        assert verify_integrity(msg + "x", digest) is False

    def test_verify_integrity_is_case_sensitive(self):
        digest = hash_data("abc")
        assert verify_integrity("abc", digest.upper()) is False

    def test_verify_integrity_length_mismatch(self):
        digest = hash_data("abc")
        assert verify_integrity("abc", digest[:-1]) is False
        assert verify_integrity("abc", "") is False

    @pytest.mark.parametrize("data,digest", [
        (None, "0" * 64),
        ("abc", None),
        ("\ud800", "0" * 64),
        (123, 456),
    ])
    def test_verify_integrity_never_raises(self, data, digest):
        assert verify_integrity(data, digest) is False


# =============================================================================
# Key derivation and random keys
# =============================================================================

class TestKeys:

    def test_generate_key_is_deterministic(self):
        salt = bytes([1]) * 16

        key1 = generate_key("password", salt)
        key2 = generate_key("password", salt)

        assert key1 == key2
        assert len(key1) == 32

    def test_generate_key_depends_on_salt(self):
        assert generate_key("password", b"\x01" * 16) != generate_key("password", b"\x02" * 16)

    def test_generate_key_depends_on_passphrase(self):
        salt = b"\x07" * 16
        assert generate_key("password", salt) != generate_key("Password", salt)

    def test_generate_key_matches_pbkdf2_sha512(self):
        import hashlib

        salt = b"\x01" * 16
        expected = hashlib.pbkdf2_hmac("sha512", b"password", salt, 100_000, dklen=32)

        assert generate_key("password", salt) == expected

    def test_generate_random_key_format(self):
        key = generate_random_key()
        assert HEX64.match(key)

    def test_generate_random_key_differs(self):
        assert generate_random_key() != generate_random_key()


# =============================================================================
# Constant-time comparison
# =============================================================================

class TestSecureCompare:

    def test_equal_strings(self):
        assert secure_compare("abc", "abc") is True

    def test_different_strings(self):
        assert secure_compare("abc", "abd") is False

    def test_different_lengths(self):
        assert secure_compare("abc", "abcd") is False
        assert secure_compare("", "a") is False

    def test_empty_strings(self):
        assert secure_compare("", "") is True

    def test_unicode(self):
        assert secure_compare("世界🌟", "世界🌟") is True
        assert secure_compare("世界🌟", "世界⭐") is False

    @pytest.mark.parametrize("a,b", [
        (None, "abc"),
        ("abc", None),
        ("\ud800", "\ud800"),
        (1, 1),
    ])
    def test_never_raises(self, a, b):
        assert secure_compare(a, b) is False


# =============================================================================
# Import-time behaviour
# =============================================================================

class TestLibraryLogging:

    def test_module_logger_has_no_handlers_and_propagates(self):
        logger = logging.getLogger("fieldcrypt.core.crypto.encryption")

        assert logger.propagate is True
        assert logger.handlers == []

    def test_import_ignores_logging_environment(self, tmp_path):
        env = {k: v for k, v in os.environ.items() if not k.startswith(("FIELDCRYPT_", "XDG_"))}
        env.update({
            "HOME": str(tmp_path),
            "FIELDCRYPT_LOGGING__LEVEL": "verbose",
            "FIELDCRYPT_LOGGING__ENABLE_FILE": "true",
        })
        code = (
            "import fieldcrypt; "
            "env = fieldcrypt.encrypt('x', 'k'); "
            "assert fieldcrypt.decrypt(env, 'k') == 'x'"
        )

        result = subprocess.run(
            [sys.executable, "-c", code],
            env=env,
            cwd=str(Path(__file__).resolve().parent.parent),
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr
        assert list(tmp_path.iterdir()) == []
