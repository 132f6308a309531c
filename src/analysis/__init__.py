"""Analysis entry points."""

from analysis.engine import (
    analyze_configs,
    analyze_services,
    build_oracle,
    probe_capability,
)

__all__ = [
    "analyze_configs",
    "analyze_services",
    "build_oracle",
    "probe_capability",
]
