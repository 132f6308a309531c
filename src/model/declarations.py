"""Declaration models for module service provision and requirements.

This module contains the value types produced by the upstream declaration
extractor and the ordered container the resolver consumes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

# Schema version constant
SCHEMA_VERSION = 1

ServiceKind = Literal["provided", "required"]


class ServiceDeclaration(BaseModel):
    """A service a module provides or requires."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default=SCHEMA_VERSION)
    module: str
    kind: ServiceKind
    service_name: str
    type_descriptor: str | None = None
    description: str | None = None
    required_capability: str | None = None
    optional: bool = False
    source: str | None = None

    @property
    def is_provided(self) -> bool:
        return self.kind == "provided"

    @property
    def is_required(self) -> bool:
        return self.kind == "required"


class DeclarationSet:
    """Ordered, validated collection of service declarations.

    Encounter order is preserved everywhere: ``modules`` lists module names in
    the order their first declaration appeared, and every per-module or
    per-service view keeps the input's relative order.
    """

    def __init__(self, declarations: Iterable[ServiceDeclaration]) -> None:
        if declarations is None:
            msg = "declarations must be an iterable of ServiceDeclaration, not None"
            raise TypeError(msg)

        self._declarations: list[ServiceDeclaration] = []
        self._modules: list[str] = []
        self.dropped = 0

        seen_modules: set[str] = set()
        for declaration in declarations:
            if not isinstance(declaration, ServiceDeclaration):
                msg = (
                    "expected ServiceDeclaration, got "
                    f"{type(declaration).__name__}"
                )
                raise TypeError(msg)
            if not declaration.service_name:
                self.dropped += 1
                logger.debug(
                    "Dropping %s declaration with empty service name in module %r",
                    declaration.kind,
                    declaration.module,
                )
                continue
            self._declarations.append(declaration)
            if declaration.module not in seen_modules:
                seen_modules.add(declaration.module)
                self._modules.append(declaration.module)

    def __iter__(self) -> Iterator[ServiceDeclaration]:
        return iter(self._declarations)

    def __len__(self) -> int:
        return len(self._declarations)

    @property
    def declarations(self) -> tuple[ServiceDeclaration, ...]:
        return tuple(self._declarations)

    @property
    def modules(self) -> tuple[str, ...]:
        return tuple(self._modules)

    @property
    def provided(self) -> list[ServiceDeclaration]:
        return [d for d in self._declarations if d.is_provided]

    @property
    def required(self) -> list[ServiceDeclaration]:
        return [d for d in self._declarations if d.is_required]

    def for_module(
        self, module: str, kind: ServiceKind | None = None
    ) -> list[ServiceDeclaration]:
        """Return a module's declarations, optionally restricted to one kind."""
        return [
            d
            for d in self._declarations
            if d.module == module and (kind is None or d.kind == kind)
        ]

    def providers_of(self, service_name: str) -> list[ServiceDeclaration]:
        return [
            d
            for d in self._declarations
            if d.is_provided and d.service_name == service_name
        ]


__all__ = [
    "SCHEMA_VERSION",
    "DeclarationSet",
    "ServiceDeclaration",
    "ServiceKind",
]
