from showcase.storage.backend import StorageBackend, LocalStorageBackend, get_storage_backend
from showcase.storage.validation import FileValidator

__all__ = [
    "StorageBackend",
    "LocalStorageBackend",
    "get_storage_backend",
    "FileValidator",
]
