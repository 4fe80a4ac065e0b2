"""Storage module - provides interface and implementations for data persistence."""

from typing import Any

from .interface import StorageInterface, StoredValue
from .local_storage import LocalStorage
from .memory_storage import MemoryStorage


def create_storage(config: Any) -> StorageInterface:
    """Build the storage backend named by ``config.storage_type``."""
    if config.storage_type == "local":
        return LocalStorage(config.local_storage_path)
    elif config.storage_type == "memory":
        return MemoryStorage()
    else:
        raise ValueError(f"Unsupported storage type: {config.storage_type}")


__all__ = ['StorageInterface', 'StoredValue', 'LocalStorage', 'MemoryStorage', 'create_storage']
