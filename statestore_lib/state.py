"""Process-wide initialization gate for the state store.

`initialize` configures the module exactly once per process: it picks the
backend for the requested mode, validates the root directory (persistent
mode only) and returns the full-scope root node named ``global``. Any
later call raises AlreadyInitializedError; there is no reset.

`create_root` is the explicit, singleton-free form: it builds a root node
from a `StoreConfig`, claiming the config so it cannot seed a second tree.
"""
from __future__ import annotations
import logging
import os
from typing import Any, Optional, cast

from statestore_lib.config import StoreConfig
from statestore_lib.constants import MODE_MEMORY, MODE_PERSISTENT, ROOT_NAMESPACE, SCOPE_FULL
from statestore_lib.errors import AlreadyInitializedError, UninitializedError
from statestore_lib.node import FullStore, SimpleStore, TreeContext, make_node
from statestore_lib.storage import create_backend_factory
from statestore_lib.storage.interfaces import BackendFactory
from statestore_lib.validation import validate_root

logger = logging.getLogger(__name__)


class ModuleState:
    """Holds the configuration applied by `initialize`."""

    def __init__(self) -> None:
        self.initialized: bool = False
        self.root_path: Optional[str] = None
        self.mode: Optional[str] = None
        self.backend_factory: Optional[BackendFactory] = None
        self.root: Optional[FullStore] = None

    def require_root(self) -> FullStore:
        if not self.initialized or self.root is None:
            raise UninitializedError()
        return self.root


_module_state = ModuleState()


def create_root(config: StoreConfig) -> FullStore:
    """Build the root node of a new store tree from `config`.

    Validates the root directory first in persistent mode; the config is
    only claimed once validation passed. Raises AlreadyInitializedError if
    `config` was already used.
    """
    if config.claimed:
        raise AlreadyInitializedError("This configuration has already been used to create a store tree")
    if config.mode == MODE_PERSISTENT:
        validate_root(config.root_path)
    config.claim()
    factory = create_backend_factory(config.mode, serializer=config.serializer, password=config.password)
    context = TreeContext(backend_factory=factory, scope_policy=config.scope_policy)
    root_path = os.path.join(config.root_path, ROOT_NAMESPACE)
    return cast(FullStore, make_node(ROOT_NAMESPACE, ROOT_NAMESPACE, root_path, SCOPE_FULL, context))


async def initialize(
    root_path: Any = None,
    mode: str = MODE_PERSISTENT,
    *,
    config: Optional[StoreConfig] = None,
    **options: Any,
) -> FullStore:
    """Configure the module once and return the root store.

    Either pass a ready `config` or let one be built from `root_path`,
    `mode` and `options` (serializer, password, scope_policy). The
    returned root must be kept by the caller or fetched again with
    `get_root`.
    """
    state = _module_state
    if state.initialized:
        raise AlreadyInitializedError(
            f"Call to initialize rejected: state store already initialized at {state.root_path!r}"
        )
    if config is None:
        config = StoreConfig(root_path=root_path, mode=mode, **options)
    root = create_root(config)

    state.root_path = config.root_path
    state.mode = config.mode
    state.backend_factory = root._context.backend_factory
    state.root = root
    state.initialized = True
    if config.mode == MODE_MEMORY:
        logger.info("State store initialized in memory")
    else:
        logger.info("State store initialized at %s", config.root_path)
    return root


# Name of the entry point in the original module API.
setup = initialize


def is_initialized() -> bool:
    return _module_state.initialized


def get_root() -> FullStore:
    return _module_state.require_root()


async def get_store(namespace: str, scope: Optional[str] = None) -> SimpleStore:
    """Create a store directly under the root node."""
    return await _module_state.require_root().get_store(namespace, scope)
