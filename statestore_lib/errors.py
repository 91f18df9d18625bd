"""State store exception hierarchy.

All custom exceptions inherit from StateStoreError so callers can catch
the whole family at once. Backend I/O failures are not part of this
hierarchy; they propagate as raised by the storage layer.
"""
from __future__ import annotations
from typing import Any


class StateStoreError(Exception):
    """Base exception for all state store errors."""


class UninitializedError(StateStoreError):
    """Raised when the module is used before `initialize` has run."""

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message
            or "State store settings have not been applied. Run `initialize` first."
        )


class AlreadyInitializedError(StateStoreError):
    """Raised on a second initialization attempt in the same process."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or "State store has already been initialized")


class InvalidNamespaceError(StateStoreError, ValueError):
    """Raised when a namespace does not match VALID_NAMESPACE_FORMAT."""

    def __init__(self, namespace: Any) -> None:
        self.namespace = namespace
        super().__init__(
            "Invalid namespace provided (should only contain characters "
            f"a-z, 0-9, - and _): {namespace!r}"
        )


class InvalidScopeError(StateStoreError, ValueError):
    """Raised when a requested scope is not one of SCOPES."""

    def __init__(self, scope: Any) -> None:
        self.scope = scope
        super().__init__(f"Unknown scope: {scope!r}")


class ValidationError(StateStoreError):
    """Raised when the storage root cannot host the backend.

    The original failure is available both as `cause` and through the
    usual `__cause__` chaining.
    """

    def __init__(self, message: str, root_path: str | None = None, cause: BaseException | None = None) -> None:
        self.root_path = root_path
        self.cause = cause
        super().__init__(message)
