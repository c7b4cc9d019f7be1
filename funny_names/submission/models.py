"""
Form and result models for the submission workflow.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

DEFAULT_MAX_LENGTH = 100


def _limit(info: ValidationInfo, key: str) -> int:
    return (info.context or {}).get(key, DEFAULT_MAX_LENGTH)


def _clean_text(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


class NameForm(BaseModel):
    """Single-field form: a display name only."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> str:
        return _clean_text(v)

    @field_validator("name")
    @classmethod
    def name_valid(cls, v: str, info: ValidationInfo) -> str:
        limit = _limit(info, "max_name_length")
        if len(v) > limit:
            raise PydanticCustomError(
                "name_too_long",
                "Name should not exceed {limit} characters",
                {"limit": limit},
            )
        return v


class StudentForm(NameForm):
    """Two-field form: display name plus a required username."""

    username: str = ""

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: Any) -> str:
        return _clean_text(v)

    @field_validator("username")
    @classmethod
    def username_valid(cls, v: str, info: ValidationInfo) -> str:
        if len(v) < 1:
            raise PydanticCustomError("username_required", "Username is required")
        limit = _limit(info, "max_username_length")
        if len(v) > limit:
            raise PydanticCustomError(
                "username_too_long",
                "Username should not exceed {limit} characters",
                {"limit": limit},
            )
        return v


@dataclass
class ValidationResult:
    """Per-field outcome of validating the whole form.

    ``errors`` has one key per validated field; the value is None when the
    field passed. ``data`` holds the cleaned payload when every field passed.
    """
    errors: Dict[str, Optional[str]]
    data: Optional[Dict[str, str]] = None

    @property
    def is_valid(self) -> bool:
        return not any(self.errors.values())


@dataclass
class SubmissionResult:
    """Result of a submit attempt."""
    success: bool
    reason: Optional[str] = None  # "quota_exhausted", "invalid", "busy", "network_error"
    errors: Dict[str, Optional[str]] = field(default_factory=dict)
    remaining: Optional[int] = None
    message: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "reason": self.reason,
            "errors": self.errors,
            "remaining": self.remaining,
            "message": self.message
        }
