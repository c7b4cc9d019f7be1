"""
Factory for creating quota management components.
"""

from pathlib import Path

from .models import QuotaConfig
from .store import JsonFileStore
from .manager import QuotaManager


def create_quota_module(
    store_file: Path,
    initial_chances: int = 5,
    storage_key: str = "remainingChances",
) -> dict:
    """
    Create quota management module for one client scope.

    The persisted counter is read (or initialized) immediately.

    Args:
        store_file: JSON file holding the client's key-value store
        initial_chances: Counter value used when nothing is stored yet
        storage_key: Key under which the counter is stored

    Returns:
        Dictionary with:
        - manager: QuotaManager instance
        - config: QuotaConfig instance
        - store: JsonFileStore instance
    """
    config = QuotaConfig(
        initial_chances=initial_chances,
        storage_key=storage_key
    )

    store = JsonFileStore(store_file)
    manager = QuotaManager(config=config, store=store)
    manager.load()

    return {
        "manager": manager,
        "config": config,
        "store": store
    }
