"""
Configuration Module
====================

Immutable, environment-aware configuration for the encryption utilities.

Only ambient settings (logging, paths) are configurable. Algorithm
parameters live in fieldcrypt.security.constants and are never read from
the environment: changing them would break every stored envelope.
"""

from __future__ import annotations

import os
import platform
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Optional


_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "passphrase", "secret", "key", "token",
    "private", "credential", "auth", "salt",
})

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS)


def _get_default_log_dir() -> Path:
    """Get OS-appropriate default log directory."""
    system = platform.system().lower()

    if system == "windows":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
        return base / "FieldCrypt" / "Logs"
    elif system == "darwin":
        return Path.home() / "Library" / "Logs" / "FieldCrypt"
    else:
        return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state")) / "fieldcrypt" / "logs"


@dataclass(frozen=True, slots=True)
class PathConfig:
    """Immutable path configuration with OS-aware defaults."""

    log_dir: Path = field(default_factory=_get_default_log_dir)

    def __post_init__(self) -> None:
        if not self.log_dir.is_absolute():
            raise ValueError(f"log_dir must be an absolute path: {self.log_dir}")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "WARNING"
    max_file_size_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5
    enable_console: bool = True
    enable_file: bool = False
    enable_json: bool = False

    def __post_init__(self) -> None:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {self.level}")
        if self.max_file_size_bytes <= 0:
            raise ValueError("max_file_size_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count cannot be negative")
        if self.level.upper() == "DEBUG":
            warnings.warn(
                "DEBUG logging records exception tracebacks from failed crypto operations.",
                SecurityWarning,
                stacklevel=3,
            )


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Immutable application metadata."""

    app_name: str = "FieldCrypt"
    version: str = "0.1.0"


class FieldCryptConfig:
    """
    Centralized, immutable configuration loader with environment override support.

    Usage:
        config = FieldCryptConfig.load()
        level = config.logging.level

    Environment variables are prefixed with FIELDCRYPT_ and use double
    underscores for nested values:
        FIELDCRYPT_LOGGING__LEVEL=DEBUG
        FIELDCRYPT_LOGGING__ENABLE_FILE=true
        FIELDCRYPT_PATHS__LOG_DIR=/var/log/fieldcrypt
    """

    __slots__ = ("_paths", "_logging", "_app", "_frozen")

    _instance: Optional[FieldCryptConfig] = None

    def __init__(
        self,
        paths: Optional[PathConfig] = None,
        logging: Optional[LoggingConfig] = None,
        app: Optional[AppConfig] = None,
    ) -> None:
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_paths", paths or PathConfig())
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_app", app or AppConfig())
        object.__setattr__(self, "_frozen", True)

    @property
    def paths(self) -> PathConfig:
        return self._paths

    @property
    def logging(self) -> LoggingConfig:
        return self._logging

    @property
    def app(self) -> AppConfig:
        return self._app

    @classmethod
    def load(cls, env_prefix: str = "FIELDCRYPT") -> FieldCryptConfig:
        """
        Load configuration with environment variable overrides.

        Args:
            env_prefix: Prefix for environment variables (default: FIELDCRYPT)

        Returns:
            Configured FieldCryptConfig instance

        Raises:
            ValueError: If an override has an invalid value
        """
        env_overrides = cls._parse_env_overrides(env_prefix)

        paths_kwargs: dict[str, Any] = {}
        if "paths.log_dir" in env_overrides:
            paths_kwargs["log_dir"] = Path(env_overrides["paths.log_dir"])

        logging_kwargs: dict[str, Any] = {}
        if "logging.level" in env_overrides:
            logging_kwargs["level"] = env_overrides["logging.level"].upper()
        for flag in ("enable_console", "enable_file", "enable_json"):
            if f"logging.{flag}" in env_overrides:
                logging_kwargs[flag] = env_overrides[f"logging.{flag}"].lower() in _TRUE_VALUES
        if "logging.max_file_size_bytes" in env_overrides:
            logging_kwargs["max_file_size_bytes"] = int(env_overrides["logging.max_file_size_bytes"])
        if "logging.backup_count" in env_overrides:
            logging_kwargs["backup_count"] = int(env_overrides["logging.backup_count"])

        return cls(
            paths=PathConfig(**paths_kwargs) if paths_kwargs else None,
            logging=LoggingConfig(**logging_kwargs) if logging_kwargs else None,
        )

    @staticmethod
    def _parse_env_overrides(prefix: str) -> dict[str, str]:
        """Parse environment variables with the given prefix."""
        overrides: dict[str, str] = {}
        prefix_upper = f"{prefix.upper()}_"

        for key, value in os.environ.items():
            if key.startswith(prefix_upper):
                # FIELDCRYPT_SECTION__KEY -> section.key
                config_key = key[len(prefix_upper):].lower().replace("__", ".")

                # Secrets are never taken from configuration
                if _is_sensitive_key(config_key):
                    continue

                overrides[config_key] = value

        return overrides

    @classmethod
    def get_instance(cls) -> FieldCryptConfig:
        """Get or create the process-wide configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Use only for testing."""
        cls._instance = None

    def __repr__(self) -> str:
        return (
            f"FieldCryptConfig(app={self._app.app_name}, "
            f"log_level={self._logging.level}, file={self._logging.enable_file})"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if getattr(self, "_frozen", False):
            raise AttributeError("FieldCryptConfig is immutable after initialization")
        object.__setattr__(self, name, value)


class SecurityWarning(UserWarning):
    """Warning for security-related configuration issues."""
    pass
