from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from report.symbols import SymbolTable
from rules.capabilities import DEFAULT_CAPABILITY_RULES, CapabilityRule

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_FILENAME = "svcmap.toml"

CycleMode = Literal["first", "exhaustive"]


class CyclesConfig(BaseModel):
    """Configuration for circular dependency detection."""

    model_config = ConfigDict(extra="forbid")

    mode: CycleMode = Field(
        default="first",
        description=(
            "'first' stops each DFS root at its first cycle; "
            "'exhaustive' enumerates every elementary cycle"
        ),
    )


class ReportConfig(BaseModel):
    """Configuration for text report rendering."""

    model_config = ConfigDict(extra="forbid")

    hide_empty_sections: bool = Field(
        default=False,
        description="Omit empty Provides/Requires sections instead of '(none)'",
    )
    show_defaults: bool = Field(
        default=False,
        description="Show config field default values",
    )
    validation: bool = Field(
        default=False,
        description="Append validation summary lines to config trees",
    )


class CapabilitiesConfig(BaseModel):
    """Additional capability rules evaluated before the built-in table."""

    model_config = ConfigDict(extra="forbid")

    include_defaults: bool = Field(
        default=True,
        description="Keep the built-in rule table after the configured rules",
    )
    rule: list[CapabilityRule] = Field(
        default_factory=list,
        description="Extra rules (first match wins)",
    )

    @field_validator("rule", mode="before")
    @classmethod
    def validate_rule_names(cls, v: Any) -> Any:
        """Reject duplicate rule names so probe results stay attributable."""

        if v is None:
            return []

        if not isinstance(v, list):
            msg = "capabilities.rule must be an array of tables"
            raise TypeError(msg)

        seen: set[str] = set()
        for entry in v:
            name = entry.get("name") if isinstance(entry, dict) else None
            if not isinstance(name, str):
                continue
            if name in seen:
                msg = f"Duplicate capability rule name '{name}'"
                raise ValueError(msg)
            seen.add(name)

        return v

    def effective_rules(self) -> tuple[CapabilityRule, ...]:
        if self.include_defaults:
            return (*self.rule, *DEFAULT_CAPABILITY_RULES)
        return tuple(self.rule)


class SvcMapConfig(BaseModel):
    """Configuration for svcmap analysis runs."""

    model_config = ConfigDict(extra="forbid")

    cycles: CyclesConfig = Field(
        default_factory=CyclesConfig,
        description="Cycle detection settings",
    )
    report: ReportConfig = Field(
        default_factory=ReportConfig,
        description="Rendering settings",
    )
    symbols: SymbolTable = Field(
        default_factory=SymbolTable,
        description="Glyph overrides",
    )
    capabilities: CapabilitiesConfig = Field(
        default_factory=CapabilitiesConfig,
        description="Capability oracle rules",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> SvcMapConfig:
    """Load configuration from svcmap.toml if it exists."""
    from pathlib import Path as PathCls

    config_path = PathCls(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return SvcMapConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SvcMapConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
