"""
Data models for the quota management system.
"""

from dataclasses import dataclass
from typing import Optional

EXHAUSTED_MESSAGE = "You have exceeded the maximum number of chances."


@dataclass
class QuotaConfig:
    """Configuration for the submission quota."""
    initial_chances: int = 5
    storage_key: str = "remainingChances"
    exhausted_message: str = EXHAUSTED_MESSAGE

    @classmethod
    def from_dict(cls, data: dict) -> "QuotaConfig":
        """Create QuotaConfig from dictionary."""
        return cls(
            initial_chances=data.get("initial_chances", 5),
            storage_key=data.get("storage_key", "remainingChances"),
            exhausted_message=data.get("exhausted_message", EXHAUSTED_MESSAGE)
        )


@dataclass
class QuotaResult:
    """Result of a quota check operation."""
    allowed: bool
    remaining: int
    message: Optional[str] = None  # User-facing message when not allowed

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "allowed": self.allowed,
            "remaining": self.remaining,
            "message": self.message
        }
