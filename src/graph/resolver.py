"""Requirement resolution and dependency graph construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from model.declarations import DeclarationSet
from oracle.probe import CapabilityOracle

if TYPE_CHECKING:
    from collections.abc import Iterable

    from model.declarations import ServiceDeclaration
    from oracle.probe import Oracle, ProbeResult

logger = logging.getLogger(__name__)

ResolutionStatus = Literal["satisfied", "unmet", "optional"]


@dataclass(frozen=True)
class DependencyEdge:
    from_module: str
    to_module: str
    via_service: str


@dataclass(frozen=True)
class CapabilityCheck:
    """Probe outcome for one candidate provider of a typed requirement."""

    provider_module: str
    type_descriptor: str | None
    capability: str
    result: ProbeResult


@dataclass(frozen=True)
class Resolution:
    requirement: ServiceDeclaration
    status: ResolutionStatus
    providers: tuple[str, ...] = field(default_factory=tuple)
    rejected: tuple[str, ...] = field(default_factory=tuple)
    checks: tuple[CapabilityCheck, ...] = field(default_factory=tuple)

    @property
    def module(self) -> str:
        return self.requirement.module

    @property
    def service_name(self) -> str:
        return self.requirement.service_name

    @property
    def self_satisfied(self) -> bool:
        return self.requirement.module in self.providers

    @property
    def is_violation(self) -> bool:
        return self.status == "unmet"


@dataclass(frozen=True)
class DependencyGraph:
    """Module dependency graph with stable node and edge order.

    ``nodes`` holds every module in declaration encounter order and ``edges``
    holds requirer -> provider edges in requirement encounter order, so node
    and edge indices are stable for a given declaration list.
    """

    nodes: tuple[str, ...]
    edges: tuple[DependencyEdge, ...]

    def index_of(self, module: str) -> int:
        return self.nodes.index(module)

    def adjacency(self) -> dict[str, list[str]]:
        """Map each node to the distinct modules it depends on."""
        graph: dict[str, list[str]] = {node: [] for node in self.nodes}
        for edge in self.edges:
            targets = graph.setdefault(edge.from_module, [])
            if edge.to_module not in targets:
                targets.append(edge.to_module)
        return graph

    def edge_pairs(self) -> list[tuple[str, str]]:
        """Distinct (from, to) module pairs in edge order."""
        return list(
            dict.fromkeys((edge.from_module, edge.to_module) for edge in self.edges)
        )


@dataclass(frozen=True)
class ResolvedGraph:
    declarations: DeclarationSet
    resolutions: tuple[Resolution, ...]
    graph: DependencyGraph

    @property
    def violations(self) -> list[Resolution]:
        return [r for r in self.resolutions if r.is_violation]

    def for_module(self, module: str) -> list[Resolution]:
        return [r for r in self.resolutions if r.module == module]


def _distinct(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _resolve_one(
    requirement: ServiceDeclaration,
    candidates: list[ServiceDeclaration],
    oracle: Oracle,
) -> Resolution:
    checks: list[CapabilityCheck] = []
    accepted: list[str] = []
    rejected: list[str] = []

    capability = requirement.required_capability
    for candidate in candidates:
        if capability:
            result = oracle.probe(candidate.type_descriptor, capability)
            checks.append(
                CapabilityCheck(
                    provider_module=candidate.module,
                    type_descriptor=candidate.type_descriptor,
                    capability=capability,
                    result=result,
                )
            )
            if result.rejects:
                logger.debug(
                    "Provider %r of %r rejected: %r does not satisfy %r",
                    candidate.module,
                    requirement.service_name,
                    candidate.type_descriptor,
                    capability,
                )
                rejected.append(candidate.module)
                continue
        accepted.append(candidate.module)

    if accepted:
        status: ResolutionStatus = "satisfied"
    elif requirement.optional:
        status = "optional"
    else:
        status = "unmet"

    return Resolution(
        requirement=requirement,
        status=status,
        providers=_distinct(accepted),
        rejected=_distinct(m for m in rejected if m not in accepted),
        checks=tuple(checks),
    )


def resolve_requirements(
    declarations: DeclarationSet, oracle: Oracle | None = None
) -> list[Resolution]:
    """Classify every required declaration as satisfied, unmet or optional.

    Args:
        declarations: Validated declaration set
        oracle: Capability oracle consulted for typed requirements

    Returns:
        One Resolution per required declaration, in encounter order
    """
    if oracle is None:
        oracle = CapabilityOracle()

    providers: dict[str, list[ServiceDeclaration]] = {}
    for declaration in declarations.provided:
        providers.setdefault(declaration.service_name, []).append(declaration)

    return [
        _resolve_one(requirement, providers.get(requirement.service_name, []), oracle)
        for requirement in declarations.required
    ]


def build_dependency_graph(
    declarations: DeclarationSet, resolutions: Iterable[Resolution]
) -> DependencyGraph:
    """Build the module graph from satisfied resolutions.

    Self-satisfied requirements produce no edge.
    """
    edges: dict[DependencyEdge, None] = {}
    for resolution in resolutions:
        if resolution.status != "satisfied":
            continue
        for provider in resolution.providers:
            if provider == resolution.module:
                continue
            edge = DependencyEdge(
                from_module=resolution.module,
                to_module=provider,
                via_service=resolution.service_name,
            )
            edges.setdefault(edge)

    return DependencyGraph(nodes=declarations.modules, edges=tuple(edges))


def resolve(
    declarations: DeclarationSet | Iterable[ServiceDeclaration],
    oracle: Oracle | None = None,
) -> ResolvedGraph:
    """Resolve requirements and build the dependency graph in one step."""
    if not isinstance(declarations, DeclarationSet):
        declarations = DeclarationSet(declarations)

    resolutions = resolve_requirements(declarations, oracle)
    graph = build_dependency_graph(declarations, resolutions)
    return ResolvedGraph(
        declarations=declarations,
        resolutions=tuple(resolutions),
        graph=graph,
    )


__all__ = [
    "CapabilityCheck",
    "DependencyEdge",
    "DependencyGraph",
    "Resolution",
    "ResolutionStatus",
    "ResolvedGraph",
    "build_dependency_graph",
    "resolve",
    "resolve_requirements",
]
