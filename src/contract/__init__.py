"""Stable extractor↔core contract surface for svcmap.

This module exposes the minimal, stable Python surface that declaration
extractors depend on. Treat these exports as the authoritative boundary.
"""

from contract.inputs import (
    CONFIGS_JSONL,
    DECLARATIONS_JSONL,
    INPUT_SCHEMA_VERSION,
    INPUT_SPECS,
    InputSpec,
)


def __getattr__(name: str) -> object:
    if name in {"ConfigField", "ModuleConfig", "ServiceDeclaration"}:
        from contract.models import (
            ConfigField,
            ModuleConfig,
            ServiceDeclaration,
        )

        return {
            "ConfigField": ConfigField,
            "ModuleConfig": ModuleConfig,
            "ServiceDeclaration": ServiceDeclaration,
        }[name]

    if name in {
        "ValidationMessage",
        "ValidationResult",
        "load_configs",
        "load_declarations",
        "validate_declarations",
    }:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            load_configs,
            load_declarations,
            validate_declarations,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "load_configs": load_configs,
            "load_declarations": load_declarations,
            "validate_declarations": validate_declarations,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "CONFIGS_JSONL",
    "DECLARATIONS_JSONL",
    "INPUT_SCHEMA_VERSION",
    "INPUT_SPECS",
    "ConfigField",
    "InputSpec",
    "ModuleConfig",
    "ServiceDeclaration",
    "ValidationMessage",
    "ValidationResult",
    "load_configs",
    "load_declarations",
    "validate_declarations",
]
