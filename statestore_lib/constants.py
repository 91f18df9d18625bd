"""Identifiers shared by the store tree, the config layer and the CLI."""
import re

SCOPE_SIMPLE = "simple"
SCOPE_DELEGATE = "delegate"
SCOPE_FULL = "full"

# Ordered from least to most capable.
SCOPES = (SCOPE_SIMPLE, SCOPE_DELEGATE, SCOPE_FULL)
SCOPE_RANK = {name: rank for rank, name in enumerate(SCOPES)}

MODE_PERSISTENT = "persistent"
MODE_MEMORY = "memory"
MODES = (MODE_PERSISTENT, MODE_MEMORY)

POLICY_PASSTHROUGH = "passthrough"
POLICY_CLAMP = "clamp"
SCOPE_POLICIES = (POLICY_PASSTHROUGH, POLICY_CLAMP)

ROOT_NAMESPACE = "global"

# Callers may pre-validate with VALID_NAMESPACE_FORMAT.fullmatch(name).
VALID_NAMESPACE_FORMAT = re.compile(r"^[a-z0-9_-]+\Z", re.IGNORECASE)
