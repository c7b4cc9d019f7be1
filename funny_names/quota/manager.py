"""
Quota manager for the per-client submission budget.
"""

import logging
from threading import Lock
from typing import Optional

from ..errors import QuotaExhaustedError
from .models import QuotaConfig, QuotaResult
from .store import KeyValueStore

logger = logging.getLogger(__name__)


class QuotaManager:
    """
    Tracks how many submissions a client scope has left.

    The counter starts at ``config.initial_chances``, only ever goes down by
    one per consumed submission, and every change is written through to the
    store before the call returns.
    """

    def __init__(self, config: QuotaConfig, store: KeyValueStore):
        """
        Initialize QuotaManager.

        Args:
            config: QuotaConfig with the initial budget and storage key
            store: Key-value store that persists the counter
        """
        self.config = config
        self.store = store
        self._lock = Lock()
        self._remaining: Optional[int] = None

    @property
    def remaining(self) -> int:
        """Remaining submissions, loading the stored value on first access."""
        if self._remaining is None:
            return self.load()
        return self._remaining

    def load(self) -> int:
        """
        Read the persisted counter, or initialize and persist the default.

        Returns:
            The remaining count

        Raises:
            StoreError: If the store cannot be read; the stored value is left untouched
        """
        with self._lock:
            stored = self.store.get_item(self.config.storage_key)
            value = self._parse(stored)

            if value is None:
                if stored is not None:
                    logger.warning(
                        f"Discarding unreadable quota value {stored!r}, "
                        f"resetting to {self.config.initial_chances}"
                    )
                self._set_remaining(self.config.initial_chances)
            else:
                self._remaining = value

            logger.debug(f"Loaded quota: {self._remaining}")
            return self._remaining

    def check(self) -> QuotaResult:
        """Check quota without consuming."""
        remaining = self.remaining
        if remaining <= 0:
            return QuotaResult(
                allowed=False,
                remaining=0,
                message=self.config.exhausted_message
            )
        return QuotaResult(allowed=True, remaining=remaining)

    def consume(self) -> QuotaResult:
        """
        Consume one submission.

        Raises:
            QuotaExhaustedError: If no submissions remain
            StoreError: If the new value cannot be written
        """
        remaining = self.remaining
        with self._lock:
            if remaining <= 0:
                raise QuotaExhaustedError(self.config.exhausted_message, remaining=0)

            self._set_remaining(remaining - 1)
            logger.info(f"Consumed quota: {remaining} -> {self._remaining}")
            return QuotaResult(allowed=True, remaining=self._remaining)

    def get_quota_info(self) -> dict:
        """Get quota information for display."""
        remaining = self.remaining
        return {
            "remaining": remaining,
            "initial": self.config.initial_chances,
            "exhausted": remaining <= 0,
            "message": self.config.exhausted_message if remaining <= 0 else None
        }

    # =====================
    # Private helper methods
    # =====================

    def _set_remaining(self, value: int) -> None:
        """Single mutation point: update the counter and write it through."""
        self._remaining = value
        self.store.set_item(self.config.storage_key, str(value))

    @staticmethod
    def _parse(stored: Optional[str]) -> Optional[int]:
        """Parse a stored counter; None if absent or not an integer. Negatives clamp to 0."""
        if stored is None:
            return None
        try:
            value = int(stored.strip())
        except ValueError:
            return None
        return max(value, 0)
