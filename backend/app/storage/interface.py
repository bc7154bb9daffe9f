"""
Storage Interface - Abstract base class for all storage implementations.
Lets the profile store run on the local filesystem today and on an object
store later without touching the callers.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageInterface(ABC):
    """Contract every document storage backend implements."""

    @abstractmethod
    async def save(self, path: str, content: bytes | str) -> None:
        """
        Save content to the specified path, replacing any previous content.

        Args:
            path: Relative path (e.g., "users/123.json")
            content: Text or binary content

        Raises:
            StoreError: If the backend fails to write
        """

    @abstractmethod
    async def load(self, path: str) -> Optional[bytes]:
        """
        Load content from the specified path.

        Returns:
            Optional[bytes]: File content, or None if nothing is stored there

        Raises:
            StoreError: If the backend fails to read
        """

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check whether something is stored at ``path``."""

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """
        Delete the content at ``path``.

        Returns:
            bool: True if something was deleted
        """
