"""Storage abstraction package for the state store."""
from functools import partial
from typing import Optional

from ..constants import MODE_MEMORY, MODE_PERSISTENT
from .base import StorageBackend
from .file_backend import JsonFileBackend
from .interfaces import BackendFactory, StorageProtocol
from .memory_backend import MemoryStorage
from .serializer import Serializer, create_serializer


def create_backend_factory(
    mode: str = MODE_PERSISTENT,
    serializer: str = "json",
    password: Optional[str] = None,
) -> BackendFactory:
    """Return a callable building the backend for a qualified storage path.

    The mode is decided once for a whole store tree; nodes only ever call
    the returned factory with their own path. The memory backend always
    keeps values as JSON regardless of `serializer`.
    """
    if mode == MODE_PERSISTENT:
        return partial(JsonFileBackend, serializer=create_serializer(serializer, password=password))
    if mode == MODE_MEMORY:
        return MemoryStorage
    raise ValueError(f"Unknown storage mode: {mode!r}")


__all__ = [
    "StorageBackend",
    "StorageProtocol",
    "BackendFactory",
    "JsonFileBackend",
    "MemoryStorage",
    "Serializer",
    "create_serializer",
    "create_backend_factory",
]
