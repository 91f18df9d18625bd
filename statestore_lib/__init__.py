"""Hierarchical, namespace-isolated key-value state store.

Typical use::

    import statestore_lib as statestore

    root = await statestore.initialize('/var/lib/app/state')
    svc = await root.get_store('svc', statestore.SCOPE_DELEGATE)
    cache = await svc.get_store('cache')
    await cache.set('hits', 42)
"""
from statestore_lib.config import StoreConfig, load_config
from statestore_lib.constants import (
    MODE_MEMORY,
    MODE_PERSISTENT,
    MODES,
    POLICY_CLAMP,
    POLICY_PASSTHROUGH,
    ROOT_NAMESPACE,
    SCOPE_DELEGATE,
    SCOPE_FULL,
    SCOPE_SIMPLE,
    SCOPES,
    VALID_NAMESPACE_FORMAT,
)
from statestore_lib.errors import (
    AlreadyInitializedError,
    InvalidNamespaceError,
    InvalidScopeError,
    StateStoreError,
    UninitializedError,
    ValidationError,
)
from statestore_lib.node import DelegateStore, FullStore, SimpleStore, create_child
from statestore_lib.state import create_root, get_root, get_store, initialize, is_initialized, setup
from statestore_lib.validation import validate_root

__all__ = [
    "StoreConfig", "load_config",
    "MODE_MEMORY", "MODE_PERSISTENT", "MODES", "POLICY_CLAMP", "POLICY_PASSTHROUGH",
    "ROOT_NAMESPACE", "SCOPE_DELEGATE", "SCOPE_FULL", "SCOPE_SIMPLE", "SCOPES",
    "VALID_NAMESPACE_FORMAT",
    "AlreadyInitializedError", "InvalidNamespaceError", "InvalidScopeError",
    "StateStoreError", "UninitializedError", "ValidationError",
    "DelegateStore", "FullStore", "SimpleStore", "create_child",
    "create_root", "get_root", "get_store", "initialize", "is_initialized", "setup",
    "validate_root",
]
