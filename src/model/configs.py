"""Configuration structure models.

A module's configuration surface is described as an ordered list of fields,
as reported by the upstream extractor.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from model.declarations import SCHEMA_VERSION


class ConfigField(BaseModel):
    """A single field of a module configuration structure."""

    name: str
    type: str = ""
    required: bool = False
    default: str | None = None
    description: str | None = None


class ModuleConfig(BaseModel):
    """Configuration structure owned by a module."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    module: str
    fields: list[ConfigField] = Field(default_factory=list)
    source: str | None = None

    @property
    def required_count(self) -> int:
        return sum(1 for field in self.fields if field.required)


__all__ = ["ConfigField", "ModuleConfig"]
