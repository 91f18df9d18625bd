"""Configuration for a store tree.

A `StoreConfig` is built once by the process entry point, either directly
or from a YAML file via `load_config`, and handed to `create_root`, which
claims it. Environment variables override file values:
STATESTORE_ROOT, STATESTORE_MODE and STATESTORE_LOG_LEVEL.
"""
from __future__ import annotations
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from statestore_lib.constants import MODE_PERSISTENT, MODES, POLICY_PASSTHROUGH, SCOPE_POLICIES
from statestore_lib.errors import AlreadyInitializedError
from statestore_lib.storage.serializer import SERIALIZERS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("data/config/statestore.yml")
DEFAULT_ROOT_PATH = "data/state"

ENV_OVERRIDES = {
    "STATESTORE_ROOT": "root_path",
    "STATESTORE_MODE": "mode",
    "STATESTORE_LOG_LEVEL": "log_level",
}


@dataclass
class StoreConfig:
    root_path: str = DEFAULT_ROOT_PATH
    mode: str = MODE_PERSISTENT
    serializer: str = "json"
    password: Optional[str] = None
    scope_policy: str = POLICY_PASSTHROUGH
    log_level: str = "WARNING"
    _claimed: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.root_path, os.PathLike):
            self.root_path = os.fspath(self.root_path)
        if not isinstance(self.root_path, str) or not self.root_path:
            raise ValueError("root_path must be a non-empty path")
        if self.mode not in MODES:
            raise ValueError(f"Unknown storage mode: {self.mode!r}")
        if self.serializer not in SERIALIZERS:
            raise ValueError(f"Unknown serializer: {self.serializer!r}")
        if self.serializer == "encrypted" and not self.password:
            raise ValueError("The encrypted serializer requires a password")
        if self.scope_policy not in SCOPE_POLICIES:
            raise ValueError(f"Unknown scope policy: {self.scope_policy!r}")

    @property
    def claimed(self) -> bool:
        return self._claimed

    def claim(self) -> None:
        """Mark this config as used by a root node; a config builds one tree only."""
        if self._claimed:
            raise AlreadyInitializedError("This configuration has already been used to create a store tree")
        self._claimed = True

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("_claimed", None)
        return data


def load_config(path: Optional[Path] = None, **overrides: Any) -> StoreConfig:
    """Build a StoreConfig from YAML, environment and keyword overrides.

    A missing file yields defaults. Unknown keys in the file are ignored.
    """
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    data: dict = {}
    if cfg_path.exists():
        with cfg_path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"invalid config format in {cfg_path}: expected mapping")
        known = {f.name for f in fields(StoreConfig) if f.init}
        unknown = set(loaded) - known
        if unknown:
            logger.warning("Ignoring unknown config keys in %s: %s", cfg_path, ", ".join(sorted(unknown)))
        data = {k: v for k, v in loaded.items() if k in known}
    else:
        logger.debug("No config file at %s; using defaults", cfg_path)

    for env_name, attr in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[attr] = value
    data.update({k: v for k, v in overrides.items() if v is not None})
    return StoreConfig(**data)


def config_template() -> str:
    """Return the YAML text of a default configuration."""
    return yaml.safe_dump(StoreConfig().to_dict(), sort_keys=False)
