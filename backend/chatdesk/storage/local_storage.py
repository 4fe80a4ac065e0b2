"""
Local Filesystem Storage Implementation.
Each key is stored as one file under a base directory.
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional

import aiofiles

from .interface import StorageInterface, StoredValue

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage(StorageInterface):
    """
    Local filesystem key-value storage.
    ``set`` writes to a temporary file and renames it over the target so a
    reader never sees a half-written value.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Directory holding one file per key
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Map a key to its file inside the base directory."""
        if not _KEY_PATTERN.match(key) or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")

        full_path = (self.base_dir / f"{key}.json").resolve()
        if full_path.parent != self.base_dir:
            raise ValueError(f"Invalid storage key: {key!r} - path traversal detected")

        return full_path

    async def get(self, key: str) -> Optional[StoredValue]:
        """Read a key from the local filesystem."""
        try:
            full_path = self._get_full_path(key)
            if not full_path.exists():
                return None

            async with aiofiles.open(full_path, 'r', encoding='utf-8') as f:
                content = await f.read()

            return StoredValue(key=key, value=content)
        except Exception as e:
            logger.warning(f"Error reading key {key}: {e}")
            return None

    async def set(self, key: str, value: str) -> bool:
        """Write a key to the local filesystem."""
        try:
            full_path = self._get_full_path(key)
            tmp_path = full_path.with_suffix(full_path.suffix + '.tmp')

            async with aiofiles.open(tmp_path, 'w', encoding='utf-8') as f:
                await f.write(value)
            os.replace(tmp_path, full_path)

            return True
        except Exception as e:
            logger.error(f"Error writing key {key}: {e}")
            return False
