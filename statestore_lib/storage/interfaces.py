from typing import Protocol, Any, Callable, Iterable, runtime_checkable


@runtime_checkable
class StorageProtocol(Protocol):
    """Storage backend protocol mirroring `statestore_lib.storage.StorageBackend`.

    Implementations should follow the semantics documented on the abstract
    base class in `statestore_lib.storage.base` (KeyError for missing keys
    on read, idempotent delete).
    """

    def read(self, key: str) -> Any: ...

    def write(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def list_keys(self) -> Iterable[str]: ...

    def exists(self, key: str) -> bool: ...


# Builds the backend for a qualified storage path.
BackendFactory = Callable[[str], StorageProtocol]
