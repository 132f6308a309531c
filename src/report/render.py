"""Canonical text rendering for service, config and probe reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from report.symbols import DEFAULT_SYMBOLS
from report.tree import section_lines, tree_lines

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graph.algos import Cycle
    from graph.resolver import CapabilityCheck, Resolution, ResolvedGraph
    from model.configs import ConfigField, ModuleConfig
    from model.declarations import ServiceDeclaration
    from oracle.probe import ProbeResult
    from report.symbols import SymbolTable


def matches_module_filter(module: str, module_filter: str | None) -> bool:
    """Case-insensitive substring match; an empty filter matches everything."""
    if not module_filter:
        return True
    return module_filter.lower() in module.lower()


def _provider_text(declaration: ServiceDeclaration) -> str:
    text = declaration.service_name
    if declaration.description:
        text += f" — {declaration.description}"
    return text


def _requirement_text(resolution: Resolution, symbols: SymbolTable) -> str:
    requirement = resolution.requirement
    text = requirement.service_name
    if requirement.required_capability:
        text += f" (interface: {requirement.required_capability})"
    if requirement.optional:
        text += " [optional]"

    if resolution.status == "satisfied":
        text += f" {symbols.satisfied} provided by: " + ", ".join(resolution.providers)
    elif resolution.status == "optional":
        text += f" {symbols.satisfied} NOT PROVIDED (optional)"
    else:
        text += f" {symbols.unmet} NOT PROVIDED"

    if resolution.status != "satisfied" and resolution.rejected:
        text += " (capability mismatch: " + ", ".join(resolution.rejected) + ")"
    return text


def render_services_summary(
    resolved: ResolvedGraph,
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    *,
    verbose: bool = False,
) -> list[str]:
    lines = [f"{symbols.provides_header} Service Providers:"]
    for declaration in resolved.declarations.provided:
        line = f"  - {declaration.service_name}: {declaration.module}"
        if declaration.type_descriptor:
            line += f" ({declaration.type_descriptor})"
        if declaration.description:
            line += f" — {declaration.description}"
        if verbose and declaration.source:
            line += f" [{declaration.source}]"
        lines.append(line)
    lines.append("")

    lines.append(f"{symbols.requires_header} Service Requirements:")
    for declaration in resolved.declarations.required:
        line = f"  - {declaration.service_name}: {declaration.module}"
        if declaration.required_capability:
            line += f" (interface: {declaration.required_capability})"
        if declaration.optional:
            line += " [optional]"
        if verbose and declaration.source:
            line += f" [{declaration.source}]"
        lines.append(line)
    lines.append("")
    return lines


def _check_text(check: CapabilityCheck, symbols: SymbolTable) -> str:
    result = check.result
    subject = check.provider_module
    if check.type_descriptor:
        subject += f" ({check.type_descriptor})"

    if not result.known_pattern:
        verdict = f"{symbols.warning} unknown pattern (advisory)"
    elif not result.conclusive:
        verdict = f"{symbols.warning} inconclusive (advisory)"
    elif result.satisfies:
        verdict = f"{symbols.satisfied} satisfies"
    else:
        verdict = f"{symbols.unmet} does NOT satisfy"
    return f"    {symbols.inspect} {subject} → {check.capability}: {verdict}"


def render_interface_checks(
    resolved: ResolvedGraph, symbols: SymbolTable = DEFAULT_SYMBOLS
) -> list[str]:
    lines = [f"{symbols.probe} Interface Compatibility Checks:"]
    for resolution in resolved.resolutions:
        if resolution.status == "satisfied":
            lines.append(
                f"  {symbols.check_ok} {resolution.service_name} required by "
                f"{resolution.module} is provided by "
                + ", ".join(resolution.providers)
            )
        else:
            lines.append(
                f"  {symbols.check_fail} {resolution.service_name} required by "
                f"{resolution.module} is NOT provided by any module"
            )
        lines.extend(_check_text(check, symbols) for check in resolution.checks)
    lines.append("")
    return lines


def render_dependency_graph(
    resolved: ResolvedGraph,
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    *,
    hide_empty_sections: bool = False,
    module_filter: str | None = None,
) -> list[str]:
    """Render each module with its Provides and Requires sections."""
    provides_by_module: dict[str, list[str]] = {}
    for declaration in resolved.declarations.provided:
        provides_by_module.setdefault(declaration.module, []).append(
            _provider_text(declaration)
        )
    requires_by_module: dict[str, list[str]] = {}
    for resolution in resolved.resolutions:
        requires_by_module.setdefault(resolution.module, []).append(
            _requirement_text(resolution, symbols)
        )

    lines = [f"{symbols.requires_header} Dynamic Dependency Graph:"]
    for module in resolved.declarations.modules:
        if not matches_module_filter(module, module_filter):
            continue
        provides = provides_by_module.get(module, [])
        requires = requires_by_module.get(module, [])
        lines.append("")
        lines.append(module)
        lines.extend(
            section_lines(
                [("Provides", provides), ("Requires", requires)],
                symbols,
                hide_empty=hide_empty_sections,
            )
        )
    lines.append("")
    return lines


def render_cycles(
    cycles: Sequence[Cycle], symbols: SymbolTable = DEFAULT_SYMBOLS
) -> list[str]:
    if not cycles:
        return []
    lines = [f"{symbols.warning}  Circular Dependencies Detected:"]
    lines.extend(f"  {symbols.cycle} {cycle.render()}" for cycle in cycles)
    lines.append("")
    lines.append(
        f"{symbols.advice} Circular dependencies can cause initialization issues."
    )
    lines.append("   Consider breaking the cycle by making one dependency optional")
    lines.append("   or introducing an intermediate service.")
    lines.append("")
    return lines


def render_service_report(
    resolved: ResolvedGraph,
    cycles: Sequence[Cycle],
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    *,
    graph: bool = True,
    interfaces: bool = False,
    verbose: bool = False,
    hide_empty_sections: bool = False,
    module_filter: str | None = None,
) -> str:
    lines = [f"{symbols.inspect} Inspecting Service Registrations", ""]
    lines.extend(render_services_summary(resolved, symbols, verbose=verbose))
    if interfaces:
        lines.extend(render_interface_checks(resolved, symbols))
    if graph:
        lines.extend(
            render_dependency_graph(
                resolved,
                symbols,
                hide_empty_sections=hide_empty_sections,
                module_filter=module_filter,
            )
        )
    lines.extend(render_cycles(cycles, symbols))
    return "\n".join(lines) + "\n"


def _field_text(
    field: ConfigField, symbols: SymbolTable, *, show_defaults: bool
) -> str:
    text = f"{field.name} ({field.type})"
    if field.required:
        text = f"{symbols.required}  {text}"
    if field.default and show_defaults:
        text += f" [default: {field.default}]"
    if field.description:
        text += f" — {field.description}"
    return text


def render_config_module(
    config: ModuleConfig,
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    *,
    validation: bool = False,
    show_defaults: bool = False,
    verbose: bool = False,
) -> list[str]:
    """Render one module's config fields as a tree.

    In validation mode a summary entry closes the tree and takes the
    terminal connector from the last field.
    """
    lines = [f"{symbols.module} {config.module}"]
    if verbose and config.source:
        lines.append(f"{symbols.gutter}File: {config.source}")

    summary: str | None = None
    if validation:
        required = config.required_count
        if required > 0:
            summary = f"{symbols.required}  {required} required field(s) need validation"
        else:
            summary = f"{symbols.satisfied} All fields have defaults or are optional"

    entries = [
        _field_text(field, symbols, show_defaults=show_defaults)
        for field in config.fields
    ]
    lines.extend(tree_lines(entries, symbols, prefix=symbols.gutter, summary=summary))
    return lines


def render_config_report(
    configs: Sequence[ModuleConfig],
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    *,
    validation: bool = False,
    show_defaults: bool = False,
    verbose: bool = False,
) -> str:
    lines = [f"{symbols.inspect} Analyzing Module Configurations", ""]

    if not configs:
        lines.append(f"{symbols.legend} No configuration structures found.")
        return "\n".join(lines) + "\n"

    lines.append(f"{symbols.legend} Configuration Structures Found:")
    lines.append(f"{symbols.legend} Symbol Legend:")
    lines.append(f"  {symbols.required}  Required field (must be configured)")
    lines.append(f"  {symbols.satisfied} Optional field or has default value")
    lines.append(f"  {symbols.validation_issue} Validation issue found")
    lines.append("")

    for index, config in enumerate(configs):
        lines.extend(
            render_config_module(
                config,
                symbols,
                validation=validation,
                show_defaults=show_defaults,
                verbose=verbose,
            )
        )
        if index < len(configs) - 1:
            lines.append("")

    if validation:
        lines.append(f"{symbols.summary} Configuration Validation Summary:")
        total_required = 0
        for config in configs:
            required = config.required_count
            if required > 0:
                lines.append(
                    f"  {symbols.required}  {config.module}: "
                    f"{required} required field(s)"
                )
                total_required += required
            else:
                lines.append(
                    f"  {symbols.satisfied} {config.module}: No required fields"
                )
        if total_required > 0:
            lines.append("")
            lines.append(
                f"{symbols.advice} Ensure all required fields are properly "
                "configured before runtime."
            )

    return "\n".join(lines) + "\n"


COMMON_ISSUES = (
    "- Pointer vs Value receiver methods",
    "- Missing methods in implementation",
    "- Incorrect reflection pattern",
    "- Package visibility (exported vs unexported)",
)

REFLECTION_PRACTICES = (
    "- Use reflect.TypeOf((*Interface)(nil)).Elem() for interface types",
    "- Check both pointer and value types for implementations",
    "- Remember: pointer receivers require pointer types",
    "- Verify method signatures match exactly",
)


def render_probe(
    type_descriptor: str,
    capability: str,
    result: ProbeResult,
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    *,
    verbose: bool = False,
) -> str:
    lines = [
        f"{symbols.inspect} Debugging Interface Implementation",
        f"Type: {type_descriptor}",
        f"Interface: {capability}",
        "",
    ]

    if result.known_pattern:
        if not result.conclusive:
            lines.append(
                f"{symbols.warning}  INCONCLUSIVE: {type_descriptor} may or may "
                f"not implement {capability}"
            )
        elif result.satisfies:
            lines.append(
                f"{symbols.satisfied} SUCCESS: {type_descriptor} implements {capability}"
            )
        else:
            lines.append(
                f"{symbols.unmet} FAILURE: {type_descriptor} does NOT implement "
                f"{capability}"
            )
        if verbose and result.explanation:
            lines.append("")
            lines.append(f"{symbols.probe} Detailed Analysis:")
            lines.extend(f"  {detail}" for detail in result.explanation)
    else:
        lines.append(
            f"{symbols.legend} Analysis Template (type pattern not recognized):"
        )
        lines.extend(result.explanation)
        lines.append("")

    if verbose:
        lines.append(f"{symbols.probe} Reflection Best Practices:")
        lines.extend(REFLECTION_PRACTICES)
        lines.append("")

    lines.append(f"{symbols.advice} Common Issues:")
    lines.extend(COMMON_ISSUES)
    return "\n".join(lines) + "\n"


__all__ = [
    "COMMON_ISSUES",
    "REFLECTION_PRACTICES",
    "matches_module_filter",
    "render_config_module",
    "render_config_report",
    "render_cycles",
    "render_dependency_graph",
    "render_interface_checks",
    "render_probe",
    "render_service_report",
    "render_services_summary",
]
