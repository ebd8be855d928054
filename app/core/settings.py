"""
txgen settings

A validated, typed settings layer that is the single source of truth for
configuration. Environment variables (and a local .env file) are read and
validated once at startup so misconfigurations surface before the first
request.

Usage:
    from app.core.settings import settings

    provider = get_key_provider(settings)
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, FrozenSet

from dotenv import load_dotenv

load_dotenv()


class KeyProviderType(Enum):
    """Key provider backends."""

    MNEMONIC_FILE = "mnemonic_file"
    KEYSTORE = "keystore"
    ENV_PRIVATE_KEY = "env_private_key"


class SettingsValidationError(Exception):
    """Raised when settings validation fails."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid configuration for {field}={value!r}: {message}")


def _parse_int(value: str | None, default: int | None = None) -> int | None:
    """Parse an integer from environment variable."""
    if value is None or value.strip() == "":
        return default
    try:
        return int(value.strip(), 0)
    except ValueError:
        return default


def _parse_csv_set(value: str | None) -> FrozenSet[str]:
    """Parse a comma-separated list into a frozen set."""
    if not value:
        return frozenset()
    return frozenset(v.strip() for v in value.split(",") if v.strip())


def _parse_key_provider(value: str | None) -> KeyProviderType:
    raw = (value or KeyProviderType.MNEMONIC_FILE.value).strip().lower()
    try:
        return KeyProviderType(raw)
    except ValueError:
        raise SettingsValidationError("TXGEN_KEY_PROVIDER", raw, f"expected one of {[k.value for k in KeyProviderType]}") from None


def _get_version_from_pyproject() -> str:
    """Extract version from pyproject.toml."""
    try:
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return str(data.get("project", {}).get("version", "0.0.0"))
    except (OSError, tomllib.TOMLDecodeError):
        return "0.0.0"


@dataclass
class Settings:
    """
    Unified settings class with validation.
    """

    PROJECT_NAME: str = "txgen"
    VERSION: str = field(default_factory=_get_version_from_pyproject)

    # Key material
    KEY_PROVIDER: KeyProviderType = field(default_factory=lambda: _parse_key_provider(os.getenv("TXGEN_KEY_PROVIDER")))
    ACCOUNT_PATH: str = field(default_factory=lambda: os.getenv("TXGEN_ACCOUNT_PATH", "Account.json").strip())
    DERIVATION_PATH: str = field(default_factory=lambda: os.getenv("TXGEN_DERIVATION_PATH", "m/44'/60'/0'/0/0").strip())
    KEYSTORE_PATH: str | None = field(default_factory=lambda: os.getenv("KEYSTORE_PATH"))
    KEYSTORE_PASSWORD: str | None = field(default_factory=lambda: os.getenv("KEYSTORE_PASSWORD"))

    # API server settings
    API_HOST: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0").strip())  # nosec B104 - intentional for container binding
    API_PORT: int = field(default_factory=lambda: _parse_int(os.getenv("API_PORT"), 8080) or 8080)

    # CORS settings
    CORS_ORIGINS: FrozenSet[str] = field(default_factory=lambda: _parse_csv_set(os.getenv("TXGEN_CORS_ORIGINS", "*")))

    # Observability
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("TXGEN_LOG_LEVEL", "info").strip().lower())
    SERVICE_NAME: str = field(default_factory=lambda: os.getenv("TXGEN_SERVICE_NAME", "txgen").strip())

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        errors: list[str] = []

        if not (1 <= self.API_PORT <= 65535):
            errors.append(f"API_PORT must be between 1 and 65535, got {self.API_PORT}")

        if not self.DERIVATION_PATH.startswith("m/"):
            errors.append(f"TXGEN_DERIVATION_PATH must start with 'm/', got {self.DERIVATION_PATH!r}")

        if self.KEY_PROVIDER == KeyProviderType.MNEMONIC_FILE and not self.ACCOUNT_PATH:
            errors.append("TXGEN_ACCOUNT_PATH required when TXGEN_KEY_PROVIDER=mnemonic_file")
        elif self.KEY_PROVIDER == KeyProviderType.KEYSTORE and (not self.KEYSTORE_PATH or not self.KEYSTORE_PASSWORD):
            errors.append("KEYSTORE_PATH and KEYSTORE_PASSWORD required when TXGEN_KEY_PROVIDER=keystore")

        if self.LOG_LEVEL not in ("debug", "info", "warning", "error", "critical"):
            errors.append(f"TXGEN_LOG_LEVEL must be a logging level name, got {self.LOG_LEVEL!r}")

        if errors:
            raise SettingsValidationError("MULTIPLE", None, "; ".join(errors))

    @property
    def cors_allow_all(self) -> bool:
        return "*" in self.CORS_ORIGINS

    # Redacted by name in to_dict().
    _SECRET_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"KEYSTORE_PASSWORD"})

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary (redacting secrets)."""
        result: dict[str, Any] = {}
        for key in dir(self):
            if key.startswith("_") or key.isupper() is False:
                continue
            value = getattr(self, key)
            if isinstance(value, Enum):
                result[key] = value.value
            elif key in self._SECRET_FIELDS:
                result[key] = "***REDACTED***" if value else None
            elif isinstance(value, frozenset):
                result[key] = sorted(value)
            else:
                result[key] = value
        return result


settings = Settings()
