"""Namespaced, scope-gated store nodes.

A node is bound to one storage unit addressed by its qualified path. What
a node may do is fixed by its class:

- `SimpleStore`: get/set/remove in its own unit.
- `DelegateStore`: adds `get_store` to create child nodes.
- `FullStore`: adds `storage`, the raw backend handle.

A `SimpleStore` has no `get_store` attribute at all, so code holding one
cannot mint children. Child nodes are built by `create_child`, which
only looks at the parent's qualified name, qualified path and tree
context.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from statestore_lib.constants import (
    POLICY_CLAMP,
    POLICY_PASSTHROUGH,
    SCOPE_DELEGATE,
    SCOPE_FULL,
    SCOPE_POLICIES,
    SCOPE_RANK,
    SCOPE_SIMPLE,
    VALID_NAMESPACE_FORMAT,
)
from statestore_lib.errors import InvalidNamespaceError, InvalidScopeError
from statestore_lib.storage.interfaces import BackendFactory, StorageProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeContext:
    """Settings shared by every node of one store tree."""

    backend_factory: BackendFactory
    scope_policy: str = POLICY_PASSTHROUGH

    def __post_init__(self) -> None:
        if self.scope_policy not in SCOPE_POLICIES:
            raise ValueError(f"Unknown scope policy: {self.scope_policy!r}")


def validate_namespace(namespace: Any) -> str:
    if not isinstance(namespace, str) or not VALID_NAMESPACE_FORMAT.fullmatch(namespace):
        raise InvalidNamespaceError(namespace)
    return namespace


def resolve_scope(requested: Optional[str]) -> str:
    """Return the effective scope for a request, `simple` when none is given."""
    if requested is None:
        return SCOPE_SIMPLE
    if requested not in SCOPE_RANK:
        raise InvalidScopeError(requested)
    return max(SCOPE_SIMPLE, requested, key=SCOPE_RANK.__getitem__)


class SimpleStore:
    scope = SCOPE_SIMPLE

    def __init__(
        self,
        namespace: str,
        qualified_name: str,
        qualified_path: str,
        backend: StorageProtocol,
        context: TreeContext,
    ) -> None:
        self._namespace = namespace
        self._qualified_name = qualified_name
        self._qualified_path = qualified_path
        self._backend = backend
        self._context = context

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def qualified_name(self) -> str:
        return self._qualified_name

    @property
    def qualified_path(self) -> str:
        return self._qualified_path

    def get_namespace(self) -> str:
        """Return the dotted qualified name, e.g. ``global.svc.cache``."""
        return self._qualified_name

    async def set(self, key: str, value: Any) -> None:
        self._backend.write(key, value)

    async def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under `key`, or `default` when absent.

        A stored `None` is returned as `None`; pass a sentinel `default` to
        tell it apart from a missing key.
        """
        try:
            return self._backend.read(key)
        except KeyError:
            return default

    async def remove(self, key: str) -> None:
        self._backend.delete(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleStore):
            return NotImplemented
        return (self._qualified_name, self._qualified_path) == (other._qualified_name, other._qualified_path)

    def __hash__(self) -> int:
        return hash((self._qualified_name, self._qualified_path))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._qualified_name!r}, path={self._qualified_path!r})"


class DelegateStore(SimpleStore):
    scope = SCOPE_DELEGATE

    async def get_store(self, namespace: str, scope: Optional[str] = None) -> SimpleStore:
        """Create a child node under this one; see `create_child`."""
        return create_child(self, namespace, scope)


class FullStore(DelegateStore):
    scope = SCOPE_FULL

    @property
    def storage(self) -> StorageProtocol:
        """Raw backend handle, bypassing the key/value contract."""
        return self._backend


NODE_TYPES: Dict[str, Type[SimpleStore]] = {
    SCOPE_SIMPLE: SimpleStore,
    SCOPE_DELEGATE: DelegateStore,
    SCOPE_FULL: FullStore,
}


def make_node(namespace: str, qualified_name: str, qualified_path: str, scope: str, context: TreeContext) -> SimpleStore:
    backend = context.backend_factory(qualified_path)
    return NODE_TYPES[scope](namespace, qualified_name, qualified_path, backend, context)


def create_child(parent: DelegateStore, namespace: str, scope: Optional[str] = None) -> SimpleStore:
    """Validate `namespace` and build a new node bound to `<parent path>/<namespace>`.

    Every call returns a new node; nodes for the same path share persisted
    data (persistent mode) but no in-memory state. Under the `clamp`
    policy the child's scope is capped at the parent's.
    """
    validate_namespace(namespace)
    child_scope = resolve_scope(scope)
    context = parent._context
    if SCOPE_RANK[child_scope] > SCOPE_RANK[parent.scope]:
        if context.scope_policy == POLICY_CLAMP:
            logger.debug("Clamping scope of %s.%s from %s to %s",
                         parent.qualified_name, namespace, child_scope, parent.scope)
            child_scope = parent.scope
        else:
            logger.warning("Store %s.%s granted scope %s wider than its parent's %s",
                           parent.qualified_name, namespace, child_scope, parent.scope)

    qualified_name = f"{parent.qualified_name}.{namespace}"
    qualified_path = os.path.join(parent.qualified_path, namespace)
    node = make_node(namespace, qualified_name, qualified_path, child_scope, context)
    logger.debug("Created %s store %s at %s", child_scope, qualified_name, qualified_path)
    return node
