"""
Error types raised by the submission workflow and its collaborators.
"""

from typing import Dict, Optional


class FunnyNamesError(Exception):
    """Base class for all application errors."""


class ValidationError(FunnyNamesError):
    """Raised when one or more form fields fail validation.

    ``errors`` maps every validated field to its message, or None when the
    field passed.
    """

    def __init__(self, errors: Dict[str, Optional[str]]):
        self.errors = errors
        failing = ", ".join(f for f, msg in errors.items() if msg)
        super().__init__(f"Invalid fields: {failing}")


class QuotaExhaustedError(FunnyNamesError):
    """Raised when no submissions remain for the client scope."""

    def __init__(self, message: str, remaining: int = 0):
        self.message = message
        self.remaining = remaining
        super().__init__(message)


class NetworkError(FunnyNamesError):
    """Raised when the remote list service cannot be reached or rejects a call."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class StoreError(FunnyNamesError):
    """Raised when the persisted key-value store cannot be read or written."""
