"""Input contract definitions.

This module defines the stable boundary between the upstream declaration
extractor and the analysis core: file names, formats and schema version.
"""

from __future__ import annotations

from dataclasses import dataclass

# Schema version for declaration and config records.
INPUT_SCHEMA_VERSION = 1

# Input filename constants (stable contract identifiers).
DECLARATIONS_JSONL = "declarations.jsonl"
CONFIGS_JSONL = "configs.jsonl"


@dataclass(frozen=True)
class InputSpec:
    """Specification for an input file produced by the extractor."""

    filename: str
    format: str
    required_fields_note: str


INPUT_SPECS: dict[str, InputSpec] = {
    "declarations": InputSpec(
        filename=DECLARATIONS_JSONL,
        format="jsonl",
        required_fields_note="ServiceDeclaration: module, kind, service_name.",
    ),
    "configs": InputSpec(
        filename=CONFIGS_JSONL,
        format="jsonl",
        required_fields_note="ModuleConfig: module, fields[].name.",
    ),
}
