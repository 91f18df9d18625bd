"""Storage backend interface definitions.

Defines the StorageBackend abstract class bound to one store node's
storage unit. Each backend instance owns a flat key -> value mapping;
implementations translate values to whatever format they persist.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Iterable


class StorageBackend(ABC):
    """Abstract storage backend for a single storage unit."""

    @abstractmethod
    def read(self, key: str) -> Any:
        """Return the value stored under `key`.

        Should raise `KeyError` if the key does not exist. A stored `None`
        is returned as `None`, never as a missing key.
        """

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        """Store `value` under `key`, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete `key`. Deleting a missing key is not an error."""

    @abstractmethod
    def list_keys(self) -> Iterable[str]:
        """Return an iterable of keys in this unit."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if `key` is present."""
