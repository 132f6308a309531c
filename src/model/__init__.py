"""Model namespace for svcmap declaration schemas."""

from model.configs import ConfigField, ModuleConfig
from model.declarations import (
    SCHEMA_VERSION,
    DeclarationSet,
    ServiceDeclaration,
    ServiceKind,
)

__all__ = [
    "SCHEMA_VERSION",
    "ConfigField",
    "DeclarationSet",
    "ModuleConfig",
    "ServiceDeclaration",
    "ServiceKind",
]
