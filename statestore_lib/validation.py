"""Preflight check for the storage root directory.

`validate_root` proves the root can host the file backend before any store
is created: the directory must be creatable, and files and directories
inside it must be creatable and deletable.
"""
from __future__ import annotations
import logging
import os
import shutil
import time
from pathlib import Path
from typing import Callable

from statestore_lib.errors import ValidationError

logger = logging.getLogger(__name__)

PROBE_FILE = "_testFile"
PROBE_DIR = "_testDir"
DELETE_RETRIES = 2
RETRY_DELAY = 0.5


def _with_retries(action: Callable[[], None], what: Path, retries: int = DELETE_RETRIES, delay: float = RETRY_DELAY) -> None:
    attempt = 0
    while True:
        try:
            action()
            return
        except OSError as e:
            if attempt >= retries:
                raise
            attempt += 1
            logger.warning("Failed to delete %s (%s); retry %d/%d in %.1fs", what, e, attempt, retries, delay)
            time.sleep(delay)


def validate_root(root_path: str | os.PathLike) -> None:
    """Raise ValidationError unless `root_path` is usable as a storage root."""
    root = Path(root_path)
    try:
        root.mkdir(parents=True, exist_ok=True)

        probe_file = root / PROBE_FILE
        with open(probe_file, "a"):
            pass
        _with_retries(probe_file.unlink, probe_file)

        probe_dir = root / PROBE_DIR
        probe_dir.mkdir(exist_ok=True)
        _with_retries(lambda: shutil.rmtree(probe_dir), probe_dir)
    except OSError as e:
        raise ValidationError(
            f"Failed to validate state store root directory {str(root)!r}, see 'cause' for details.",
            root_path=str(root),
            cause=e,
        ) from e
    logger.debug("Validated state store root %s", root)
