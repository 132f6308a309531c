"""Structured report models.

This module contains the models returned by an analysis run. Each report
carries its canonical text rendering next to the structured data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from model.configs import ModuleConfig

# Schema version constant
SCHEMA_VERSION = 1

RequirementStatus = Literal["satisfied", "unmet", "optional"]


class ProviderEntry(BaseModel):
    """A provided service."""

    module: str
    service_name: str
    type_descriptor: str | None = None
    description: str | None = None
    source: str | None = None


class RequirementEntry(BaseModel):
    """A required service and how it was resolved."""

    module: str
    service_name: str
    capability: str | None = None
    optional: bool = False
    status: RequirementStatus
    providers: list[str] = Field(default_factory=list)
    rejected: list[str] = Field(default_factory=list)
    self_satisfied: bool = False
    source: str | None = None


class ProbeEntry(BaseModel):
    """Capability probe of one candidate provider for a typed requirement."""

    requirer: str
    service_name: str
    provider: str
    type_descriptor: str | None = None
    capability: str
    known_pattern: bool
    satisfies: bool
    conclusive: bool
    rule: str | None = None
    explanation: list[str] = Field(default_factory=list)


class EdgeEntry(BaseModel):
    """A requirer -> provider dependency edge."""

    from_module: str
    to_module: str
    via_service: str


class ServiceReport(BaseModel):
    """Result of a service dependency analysis run."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    modules: list[str] = Field(default_factory=list)
    providers: list[ProviderEntry] = Field(default_factory=list)
    requirements: list[RequirementEntry] = Field(default_factory=list)
    probes: list[ProbeEntry] = Field(default_factory=list)
    edges: list[EdgeEntry] = Field(default_factory=list)
    cycles: list[list[str]] = Field(default_factory=list)
    cycle_groups: list[list[str]] = Field(default_factory=list)
    fan_in: dict[str, int] = Field(default_factory=dict)
    fan_out: dict[str, int] = Field(default_factory=dict)
    init_order: list[str] = Field(default_factory=list)
    violation_count: int = 0
    dropped_count: int = 0
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.violation_count == 0


class ConfigReport(BaseModel):
    """Result of a configuration structure analysis run."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    configs: list[ModuleConfig] = Field(default_factory=list)
    required_counts: dict[str, int] = Field(default_factory=dict)
    total_required: int = 0
    text: str = ""


class ProbeReport(BaseModel):
    """Result of a single capability probe."""

    type_descriptor: str
    capability: str
    known_pattern: bool
    satisfies: bool
    conclusive: bool
    rule: str | None = None
    explanation: list[str] = Field(default_factory=list)
    text: str = ""


__all__ = [
    "SCHEMA_VERSION",
    "ConfigReport",
    "EdgeEntry",
    "ProbeEntry",
    "ProbeReport",
    "ProviderEntry",
    "RequirementEntry",
    "RequirementStatus",
    "ServiceReport",
]
