"""Rule definitions for svcmap."""

from rules.capabilities import (
    DEFAULT_CAPABILITY_RULES,
    CapabilityHint,
    CapabilityRule,
    match_capability_rule,
)
from rules.config import (
    ConfigError,
    SvcMapConfig,
    load_config,
)

__all__ = [
    "DEFAULT_CAPABILITY_RULES",
    "CapabilityHint",
    "CapabilityRule",
    "ConfigError",
    "SvcMapConfig",
    "load_config",
    "match_capability_rule",
]
