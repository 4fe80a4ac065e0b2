"""
Storage Interface - Abstract key-value contract for chat persistence.
This interface enables switching between the local filesystem, memory, etc.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoredValue:
    """A value read back from the store."""
    key: str
    value: str


class StorageInterface(ABC):
    """
    Asynchronous string-keyed blob store.

    Implementations must not raise from either operation: a failed read is
    reported as ``None`` and a failed write as ``False``.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[StoredValue]:
        """
        Read the value stored under ``key``.

        Args:
            key: Opaque key (e.g. "all_chats")

        Returns:
            Optional[StoredValue]: The stored value, or None if absent or unreadable
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Args:
            key: Opaque key
            value: Serialized payload

        Returns:
            bool: True if the write succeeded, False otherwise
        """
        pass
