"""
Storage backend interface.

Defines the abstract interface for generated-project and artifact storage,
so the build pipeline does not depend on where files physically live.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel

from ..core.types import Hash


class StorageBackend(ABC):
    """Abstract storage backend interface."""

    @abstractmethod
    async def store_bytes(self, key: str, data: bytes) -> str:
        """Store raw bytes and return the storage key.

        Args:
            key: Storage key/path
            data: Raw bytes to store

        Returns:
            The final storage key
        """
        ...

    @abstractmethod
    async def store_text(self, key: str, content: str) -> str:
        """Store UTF-8 text content and return the storage key."""
        ...

    @abstractmethod
    async def store_model(self, key: str, model: BaseModel) -> str:
        """Store a Pydantic model as JSON."""
        ...

    @abstractmethod
    async def load_bytes(self, key: str) -> bytes:
        """Load raw bytes from storage."""
        ...

    @abstractmethod
    async def load_text(self, key: str) -> str:
        """Load text content from storage."""
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in storage."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key from storage. Returns True if deleted."""
        ...

    @abstractmethod
    async def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys with the given prefix."""
        ...

    @staticmethod
    def compute_hash(data: bytes) -> Hash:
        """Compute SHA-256 hash of data."""
        return hashlib.sha256(data).hexdigest()

    @abstractmethod
    def get_local_path(self, key: str) -> Path | None:
        """Get local filesystem path of an existing key (for tools and file responses)."""
        ...

    @abstractmethod
    def local_path_for(self, key: str) -> Path:
        """Get the local path a key will occupy, creating parent directories.

        Used when an external process writes the file itself.
        """
        ...
