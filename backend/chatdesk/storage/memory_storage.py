"""
In-memory Storage Implementation.
Nothing survives the process; used for tests and throwaway runs.
"""

from typing import Dict, Optional

from .interface import StorageInterface, StoredValue


class MemoryStorage(StorageInterface):
    """Dictionary-backed key-value storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[StoredValue]:
        if key not in self._data:
            return None
        return StoredValue(key=key, value=self._data[key])

    async def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def raw(self, key: str) -> Optional[str]:
        """Synchronous peek at a stored value."""
        return self._data.get(key)
