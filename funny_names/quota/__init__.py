"""
Quota management module for the per-client submission budget.
"""

from .models import QuotaConfig, QuotaResult
from .store import KeyValueStore, JsonFileStore, InMemoryStore
from .manager import QuotaManager

__all__ = [
    "QuotaConfig",
    "QuotaResult",
    "KeyValueStore",
    "JsonFileStore",
    "InMemoryStore",
    "QuotaManager",
]
