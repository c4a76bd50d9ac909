"""
Core module - Contains configuration, logging, and the crypto core.
"""

from fieldcrypt.core.config import FieldCryptConfig
from fieldcrypt.core.logging import get_secure_logger, SecureLogFilter

__all__ = ["FieldCryptConfig", "get_secure_logger", "SecureLogFilter"]
