"""
Storage backend abstraction layer.

Provides a protocol-based interface so the application can swap between
local filesystem and object storage (S3/MinIO) without touching business logic.
"""
from typing import Protocol
from pathlib import Path
import aiofiles
import aiofiles.os
import logging

from showcase.config import get_settings

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    """Protocol defining the storage interface. Implement this for new backends."""

    async def store(self, key: str, data: bytes) -> None:
        """Store file data at the given key, overwriting any existing object."""
        ...

    async def delete(self, key: str) -> None:
        """Delete file at the given key."""
        ...


class LocalStorageBackend:
    """
    Local filesystem storage backend.

    Stores files in a configurable directory with subdirectories based on
    the storage key structure (``<bucket>/<vehicle_id>/<name>``). The base
    directory is what ``/storage`` serves, which is how photo URLs resolve.
    """

    def __init__(self, base_path: str):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"LocalStorageBackend initialized at {self.base_path.resolve()}")

    def _resolve_path(self, key: str) -> Path:
        """Resolve storage key to filesystem path, preventing path traversal."""
        # Normalize and strip leading separators to prevent escaping base_path
        clean_key = Path(key).as_posix().lstrip("/")
        resolved = (self.base_path / clean_key).resolve()

        # Security: ensure resolved path is within base_path
        if not str(resolved).startswith(str(self.base_path.resolve())):
            raise ValueError(f"Path traversal detected: {key}")

        return resolved

    async def store(self, key: str, data: bytes) -> None:
        """Store file data at the given key (upsert)."""
        path = self._resolve_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

        logger.debug(f"Stored {len(data)} bytes at {key}")

    async def delete(self, key: str) -> None:
        """Delete file at the given key. Missing files are ignored."""
        path = self._resolve_path(key)

        if path.exists():
            await aiofiles.os.remove(path)
            logger.debug(f"Deleted {key}")

            # Clean up empty parent directories
            parent = path.parent
            while parent.resolve() != self.base_path.resolve():
                try:
                    parent.rmdir()  # Only removes if empty
                    parent = parent.parent
                except OSError:
                    break


def get_storage_backend() -> StorageBackend:
    """Build the configured storage backend."""
    settings = get_settings()

    if settings.storage_backend == "local":
        return LocalStorageBackend(settings.storage_local_path)

    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
