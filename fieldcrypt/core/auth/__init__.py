"""
Auth helpers - Random tokens and salted password hashes.
"""

from fieldcrypt.core.auth.tokens import (
    generate_secure_token,
    generate_csrf_token,
    hash_password,
    verify_password,
)

__all__ = [
    "generate_secure_token",
    "generate_csrf_token",
    "hash_password",
    "verify_password",
]
