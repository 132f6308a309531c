"""Glyph table used by the text renderers.

Every glyph can be overridden from the ``[symbols]`` table of
``svcmap.toml``; the defaults are box-drawing connectors and emoji markers.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

WARNING_SIGN = "⚠️"


class SymbolTable(BaseModel):
    """Glyphs for tree connectors, status markers and section headers."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    branch: str = Field(default="├──", description="Connector for non-last items")
    terminal: str = Field(default="└──", description="Connector for the last item")
    pipe: str = Field(
        default="│   ", description="Child indent under a branch section"
    )
    blank: str = Field(
        default="    ", description="Child indent under a terminal section"
    )
    gutter: str = Field(default="│  ", description="Left gutter of config trees")
    required: str = Field(
        default=WARNING_SIGN, description="Required field / required status"
    )
    satisfied: str = Field(
        default="✅", description="Satisfied or optional status"
    )
    unmet: str = Field(default="❌", description="Required dependency not provided")
    validation_issue: str = Field(default="❌", description="Validation issue found")
    provides_header: str = Field(default="📦", description="Providers section")
    requires_header: str = Field(default="🔗", description="Requirements section")
    module: str = Field(default="📦", description="Module header in config trees")
    inspect: str = Field(default="🔍", description="Report title marker")
    check_ok: str = Field(default="✔", description="Compatibility check passed")
    check_fail: str = Field(default="✖", description="Compatibility check failed")
    probe: str = Field(default="🔬", description="Capability check section")
    cycle: str = Field(default="🔄", description="Cycle entry marker")
    warning: str = Field(default=WARNING_SIGN, description="Warning marker")
    legend: str = Field(default="📝", description="Legend / template marker")
    summary: str = Field(default="📋", description="Validation summary marker")
    advice: str = Field(default="💡", description="Advice marker")


DEFAULT_SYMBOLS = SymbolTable()


__all__ = ["DEFAULT_SYMBOLS", "WARNING_SIGN", "SymbolTable"]
