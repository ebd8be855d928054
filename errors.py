from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class AppError(Exception):
    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    """Malformed or missing request input."""


class KeyDerivationError(AppError):
    """The signing key could not be produced."""


class CredentialLoadError(KeyDerivationError):
    pass


class DerivationError(KeyDerivationError):
    pass


class SigningError(AppError):
    pass


def http_status_for(err: AppError) -> int:
    if isinstance(err, ValidationError):
        return 400
    return 500


def classify_exception(e: Exception) -> AppError:
    """
    Map anything raised while generating a transaction into an AppError.
    """
    if isinstance(e, AppError):
        return e
    return AppError("unknown_error", str(e), {"type": type(e).__name__})
