"""
Local Filesystem Storage Implementation.
Stores every document as a file below a base directory.
"""

import logging
import aiofiles
from pathlib import Path
from typing import Optional

from ..core.exceptions import StoreError
from .interface import StorageInterface

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """Local filesystem storage implementation."""

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored files
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, path: str) -> Path:
        """Convert relative path to full absolute path within base directory."""
        full_path = (self.base_dir / path).resolve()

        if not full_path.is_relative_to(self.base_dir):
            raise ValueError(f"Invalid path: {path} - path traversal detected")

        return full_path

    async def save(self, path: str, content: bytes | str) -> None:
        full_path = self._get_full_path(path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                async with aiofiles.open(full_path, 'w', encoding='utf-8') as f:
                    await f.write(content)
            else:
                async with aiofiles.open(full_path, 'wb') as f:
                    await f.write(content)
        except OSError as e:
            logger.error(f"Error saving file {path}: {e}")
            raise StoreError(f"Could not save {path}") from e

    async def load(self, path: str) -> Optional[bytes]:
        full_path = self._get_full_path(path)
        if not full_path.exists():
            return None
        try:
            async with aiofiles.open(full_path, 'rb') as f:
                return await f.read()
        except OSError as e:
            logger.error(f"Error loading file {path}: {e}")
            raise StoreError(f"Could not load {path}") from e

    async def exists(self, path: str) -> bool:
        return self._get_full_path(path).exists()

    async def delete(self, path: str) -> bool:
        full_path = self._get_full_path(path)
        if not full_path.exists():
            return False
        try:
            full_path.unlink()
        except OSError as e:
            logger.error(f"Error deleting file {path}: {e}")
            raise StoreError(f"Could not delete {path}") from e
        return True
