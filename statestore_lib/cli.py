"""Command line helper for inspecting and preparing a state store root.

Provides CLI parsing plus a small set of actions: print a configuration
template, validate the root directory, and get/set/remove a single key in
a store addressed by its dotted qualified name (``global.svc.cache``).
The store is reached by walking from the root with `get_store`, exactly
like application code does.
"""
from __future__ import annotations
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Iterable, Optional

from statestore_lib.config import StoreConfig, config_template, load_config
from statestore_lib.constants import MODE_MEMORY, MODES, ROOT_NAMESPACE, SCOPE_DELEGATE, SCOPE_SIMPLE
from statestore_lib.errors import StateStoreError, ValidationError
from statestore_lib.logging_config import configure_logging
from statestore_lib.node import SimpleStore
from statestore_lib.state import create_root
from statestore_lib.validation import validate_root

COMMANDS = ("get", "set", "remove")

_MISSING = object()


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="statestore", description="Inspect a state store root")
    p.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    p.add_argument("--root", default=None, help="Storage root directory (overrides config)")
    p.add_argument("--mode", choices=MODES, default=None, help="Storage mode (overrides config)")
    p.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG")
    p.add_argument("--print-template", action="store_true", help="Print the default YAML config and exit")
    p.add_argument("--validate", action="store_true", help="Validate the storage root and exit")
    p.add_argument("command", nargs="?", help="One of: get, set, remove")
    p.add_argument("name", nargs="?", help="Qualified store name, e.g. global.svc.cache")
    p.add_argument("key", nargs="?", help="Key inside the store")
    p.add_argument("value", nargs="?", help="JSON value for `set`")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    return parser.parse_args(argv)


def split_name(name: str) -> list[str]:
    """Split a qualified name into the namespaces below the root."""
    parts = name.split(".")
    if parts[0] != ROOT_NAMESPACE:
        raise ValueError(f"Store names must start with {ROOT_NAMESPACE!r}: {name!r}")
    return parts[1:]


async def walk(root: SimpleStore, parts: list[str]) -> SimpleStore:
    node = root
    for i, part in enumerate(parts):
        scope = SCOPE_SIMPLE if i == len(parts) - 1 else SCOPE_DELEGATE
        node = await node.get_store(part, scope)  # type: ignore[attr-defined]
    return node


async def run_command(config: StoreConfig, command: str, name: str, key: str, value=_MISSING) -> int:
    root = create_root(config)
    store = await walk(root, split_name(name))
    if command == "get":
        found = await store.get(key, _MISSING)
        if found is _MISSING:
            print(f"Key {key!r} not found in {store.get_namespace()}", file=sys.stderr)
            return 1
        print(json.dumps(found, indent=2))
    elif command == "set":
        await store.set(key, value)
    else:
        await store.remove(key)
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point; returns a process exit code (0 ok, 1 failure, 2 usage)."""
    args = parse_args(argv)

    if args.print_template:
        sys.stdout.write(config_template())
        return 0

    try:
        config = load_config(args.config, root_path=args.root, mode=args.mode, log_level=args.log_level)
        configure_logging(config.log_level)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.validate:
        try:
            validate_root(config.root_path)
        except ValidationError as e:
            print(f"Validation failed: {e} ({e.cause})", file=sys.stderr)
            return 1
        print(f"Storage root {config.root_path} is usable")
        return 0

    if args.command not in COMMANDS or not args.name or args.key is None:
        get_parser().print_usage(sys.stderr)
        return 2

    if config.mode == MODE_MEMORY:
        print("Key commands need persistent mode; memory stores do not outlive the process", file=sys.stderr)
        return 2

    value = _MISSING
    if args.command == "set":
        if args.value is None:
            print("`set` requires a JSON value", file=sys.stderr)
            return 2
        try:
            value = json.loads(args.value)
        except json.JSONDecodeError as e:
            print(f"Invalid JSON value: {e}", file=sys.stderr)
            return 2

    try:
        split_name(args.name)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    try:
        return asyncio.run(run_command(config, args.command, args.name, args.key, value))
    except (StateStoreError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
