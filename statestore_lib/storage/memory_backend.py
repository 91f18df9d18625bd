"""Simple memory-backed storage backend.

Each instance is an isolated storage unit; nothing is shared between
instances, even when they were created for the same path. Values are kept
serialized so a caller mutating an object after `write` does not change
what is stored, and both modes share the same round-trip semantics.
"""
from threading import RLock
from typing import Dict, Any, Iterable, Optional

from .base import StorageBackend
from .serializer import JSONSerializer, Serializer


class MemoryStorage(StorageBackend):
    def __init__(self, path: Optional[str] = None, serializer: Optional[Serializer] = None):
        self.path = path
        self.serializer = serializer or JSONSerializer()
        self._lock = RLock()
        self._store: Dict[str, bytes] = {}

    def read(self, key: str) -> Any:
        with self._lock:
            if key not in self._store:
                raise KeyError(key)
            data = self._store[key]
        return self.serializer.load(data)

    def write(self, key: str, value: Any) -> None:
        data = self.serializer.dump(value)
        with self._lock:
            self._store[key] = data

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def list_keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._store.keys())

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._store
