"""End-to-end analysis runs.

Each run builds its declaration set, graph and report from scratch; nothing
is cached between calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graph.algos import (
    compute_fan_stats,
    find_cycles,
    initialization_order,
    strongly_connected_components,
)
from graph.resolver import resolve
from oracle.probe import CapabilityOracle
from report.models import (
    ConfigReport,
    EdgeEntry,
    ProbeEntry,
    ProbeReport,
    ProviderEntry,
    RequirementEntry,
    ServiceReport,
)
from report.render import (
    matches_module_filter,
    render_config_report,
    render_probe,
    render_service_report,
)
from rules.config import SvcMapConfig

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from graph.algos import Cycle
    from graph.resolver import ResolvedGraph
    from model.configs import ModuleConfig
    from model.declarations import DeclarationSet, ServiceDeclaration
    from oracle.probe import Oracle

logger = logging.getLogger(__name__)


def build_oracle(config: SvcMapConfig) -> CapabilityOracle:
    return CapabilityOracle(config.capabilities.effective_rules())


def _service_report(
    resolved: ResolvedGraph, cycles: Sequence[Cycle], text: str
) -> ServiceReport:
    declarations = resolved.declarations
    adjacency = resolved.graph.adjacency()
    fan_in, fan_out = compute_fan_stats(resolved.graph.edge_pairs())

    providers = [
        ProviderEntry(
            module=d.module,
            service_name=d.service_name,
            type_descriptor=d.type_descriptor,
            description=d.description,
            source=d.source,
        )
        for d in declarations.provided
    ]
    requirements = [
        RequirementEntry(
            module=r.module,
            service_name=r.service_name,
            capability=r.requirement.required_capability,
            optional=r.requirement.optional,
            status=r.status,
            providers=list(r.providers),
            rejected=list(r.rejected),
            self_satisfied=r.self_satisfied,
            source=r.requirement.source,
        )
        for r in resolved.resolutions
    ]
    probes = [
        ProbeEntry(
            requirer=r.module,
            service_name=r.service_name,
            provider=check.provider_module,
            type_descriptor=check.type_descriptor,
            capability=check.capability,
            known_pattern=check.result.known_pattern,
            satisfies=check.result.satisfies,
            conclusive=check.result.conclusive,
            rule=check.result.rule,
            explanation=list(check.result.explanation),
        )
        for r in resolved.resolutions
        for check in r.checks
    ]
    edges = [
        EdgeEntry(
            from_module=edge.from_module,
            to_module=edge.to_module,
            via_service=edge.via_service,
        )
        for edge in resolved.graph.edges
    ]

    return ServiceReport(
        modules=list(declarations.modules),
        providers=providers,
        requirements=requirements,
        probes=probes,
        edges=edges,
        cycles=[list(cycle.modules) for cycle in cycles],
        cycle_groups=strongly_connected_components(adjacency),
        fan_in=fan_in,
        fan_out=fan_out,
        init_order=initialization_order(adjacency),
        violation_count=len(resolved.violations),
        dropped_count=declarations.dropped,
        text=text,
    )


def analyze_services(
    declarations: DeclarationSet | Iterable[ServiceDeclaration],
    *,
    config: SvcMapConfig | None = None,
    oracle: Oracle | None = None,
    graph: bool = True,
    interfaces: bool = False,
    verbose: bool = False,
    module_filter: str | None = None,
) -> ServiceReport:
    """Resolve, detect cycles and render a service dependency report.

    Args:
        declarations: Declarations from the upstream extractor
        config: Optional configuration (cycle mode, glyphs, capability rules)
        oracle: Capability oracle overriding the configured rule table
        graph: Render the per-module dependency graph
        interfaces: Render interface compatibility checks
        verbose: Include declaration sources in the summary
        module_filter: Only render graph sections of matching modules

    Returns:
        ServiceReport with structured results and the text rendering.
    """
    if config is None:
        config = SvcMapConfig()
    if oracle is None:
        oracle = build_oracle(config)

    resolved = resolve(declarations, oracle)
    cycles = find_cycles(resolved.graph.adjacency(), mode=config.cycles.mode)

    logger.debug(
        "Resolved %d requirement(s) across %d module(s): %d violation(s), "
        "%d cycle(s)",
        len(resolved.resolutions),
        len(resolved.graph.nodes),
        len(resolved.violations),
        len(cycles),
    )

    text = render_service_report(
        resolved,
        cycles,
        config.symbols,
        graph=graph,
        interfaces=interfaces,
        verbose=verbose,
        hide_empty_sections=config.report.hide_empty_sections,
        module_filter=module_filter,
    )
    return _service_report(resolved, cycles, text)


def analyze_configs(
    configs: Iterable[ModuleConfig],
    *,
    config: SvcMapConfig | None = None,
    validation: bool | None = None,
    show_defaults: bool | None = None,
    verbose: bool = False,
    module_filter: str | None = None,
) -> ConfigReport:
    """Render module configuration structures, optionally with validation."""
    if configs is None:
        msg = "configs must be an iterable of ModuleConfig, not None"
        raise TypeError(msg)
    if config is None:
        config = SvcMapConfig()
    if validation is None:
        validation = config.report.validation
    if show_defaults is None:
        show_defaults = config.report.show_defaults

    selected = [
        c for c in configs if c.fields and matches_module_filter(c.module, module_filter)
    ]
    required_counts = {c.module: c.required_count for c in selected}

    text = render_config_report(
        selected,
        config.symbols,
        validation=validation,
        show_defaults=show_defaults,
        verbose=verbose,
    )
    return ConfigReport(
        configs=selected,
        required_counts=required_counts,
        total_required=sum(required_counts.values()),
        text=text,
    )


def probe_capability(
    type_descriptor: str,
    capability: str,
    *,
    config: SvcMapConfig | None = None,
    verbose: bool = False,
) -> ProbeReport:
    """Probe one type/capability pair and render the verdict."""
    if config is None:
        config = SvcMapConfig()

    result = build_oracle(config).probe(type_descriptor, capability)
    text = render_probe(
        type_descriptor, capability, result, config.symbols, verbose=verbose
    )
    return ProbeReport(
        type_descriptor=type_descriptor,
        capability=capability,
        known_pattern=result.known_pattern,
        satisfies=result.satisfies,
        conclusive=result.conclusive,
        rule=result.rule,
        explanation=list(result.explanation),
        text=text,
    )


__all__ = [
    "analyze_configs",
    "analyze_services",
    "build_oracle",
    "probe_capability",
]
