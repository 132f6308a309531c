"""Record models exposed at the extractor↔core boundary."""

from model.configs import ConfigField, ModuleConfig
from model.declarations import ServiceDeclaration

__all__ = ["ConfigField", "ModuleConfig", "ServiceDeclaration"]
