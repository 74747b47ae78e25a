"""
Local filesystem storage backend.

Provides a filesystem-based implementation of the storage interface,
suitable for development and single-machine deployments.
"""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os
from pydantic import BaseModel

from .interface import StorageBackend


class LocalStorageBackend(StorageBackend):
    """Local filesystem storage backend."""

    def __init__(self, base_path: Path) -> None:
        """Initialize local storage.

        Args:
            base_path: Base directory for all storage operations
        """
        self.base_path = base_path.resolve()

    async def _ensure_parent(self, path: Path) -> None:
        """Ensure parent directory exists."""
        await aiofiles.os.makedirs(path.parent, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Get full filesystem path for a key."""
        # Remove leading slashes and any parent directory references
        clean_key = key.lstrip("/\\").replace("..", "").replace(":", "")
        full_path = (self.base_path / clean_key).resolve()

        # Resolved path must stay within base_path
        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            clean_key = clean_key.replace("/", "_").replace("\\", "_")
            full_path = self.base_path / clean_key

        return full_path

    async def store_bytes(self, key: str, data: bytes) -> str:
        """Store raw bytes to filesystem."""
        full_path = self._get_full_path(key)
        await self._ensure_parent(full_path)

        async with aiofiles.open(full_path, "wb") as f:
            await f.write(data)

        return key

    async def store_text(self, key: str, content: str) -> str:
        """Store text content to filesystem."""
        full_path = self._get_full_path(key)
        await self._ensure_parent(full_path)

        async with aiofiles.open(full_path, "w", encoding="utf-8", newline="\n") as f:
            await f.write(content)

        return key

    async def store_model(self, key: str, model: BaseModel) -> str:
        """Store Pydantic model as JSON."""
        return await self.store_text(key, model.model_dump_json(indent=2, by_alias=True))

    async def load_bytes(self, key: str) -> bytes:
        """Load raw bytes from filesystem."""
        full_path = self._get_full_path(key)

        if not full_path.is_file():
            raise FileNotFoundError(f"Key not found: {key}")

        async with aiofiles.open(full_path, "rb") as f:
            return await f.read()

    async def load_text(self, key: str) -> str:
        """Load text content from filesystem."""
        full_path = self._get_full_path(key)

        if not full_path.is_file():
            raise FileNotFoundError(f"Key not found: {key}")

        async with aiofiles.open(full_path, "r", encoding="utf-8") as f:
            return await f.read()

    async def exists(self, key: str) -> bool:
        """Check if key exists in filesystem."""
        return self._get_full_path(key).is_file()

    async def delete(self, key: str) -> bool:
        """Delete file from filesystem."""
        full_path = self._get_full_path(key)

        if full_path.is_file():
            await aiofiles.os.remove(full_path)
            return True
        return False

    async def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys with prefix."""
        search_path = self._get_full_path(prefix) if prefix else self.base_path

        if not search_path.exists():
            return []

        keys = []
        for path in search_path.rglob("*"):
            if path.is_file():
                keys.append(path.relative_to(self.base_path).as_posix())

        return sorted(keys)

    def get_local_path(self, key: str) -> Path | None:
        """Get local filesystem path for a key."""
        full_path = self._get_full_path(key)
        if full_path.is_file():
            return full_path
        return None

    def local_path_for(self, key: str) -> Path:
        """Get the path a key will occupy, creating its parent directory."""
        full_path = self._get_full_path(key)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        return full_path
