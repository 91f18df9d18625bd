from __future__ import annotations
import logging
from pathlib import Path
import yaml
from typing import Optional

from statestore_lib.config import DEFAULT_CONFIG_PATH

DEFAULT_LOG_LEVEL = logging.WARNING
LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def _level_from_config(cfg_path: Path) -> Optional[int]:
    if not cfg_path.exists():
        return None
    try:
        with cfg_path.open('r', encoding='utf-8') as _f:
            _cfg = yaml.safe_load(_f) or {}
    except (OSError, yaml.YAMLError):
        logging.exception('Failed to read log level from %s', cfg_path)
        return None
    _lvl = _cfg.get('log_level') if isinstance(_cfg, dict) else None
    if isinstance(_lvl, str):
        _numeric = getattr(logging, _lvl.upper(), None)
        if isinstance(_numeric, int):
            return _numeric
    return None


def configure_logging(level: Optional[str] = None, config_path: Optional[Path] = None) -> logging.Logger:
    """Configure root logging for state store tools.

    The level comes from `level` when given, otherwise from the `log_level`
    key of the YAML config, otherwise WARNING. Returns a module logger.
    """
    numeric = None
    if level:
        numeric = getattr(logging, level.upper(), None)
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level!r}")
    if numeric is None:
        numeric = _level_from_config(config_path or DEFAULT_CONFIG_PATH)
    if numeric is None:
        numeric = DEFAULT_LOG_LEVEL

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logger = logging.getLogger(__name__)
    logger.debug("Log level set to: %s", logging.getLevelName(numeric))
    return logger
