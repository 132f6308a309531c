"""Graph algorithms for svcmap module dependency graphs.

All functions take an adjacency mapping whose key order is the node order
and whose value lists are in edge order; results never depend on set or
hash iteration order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from rules.config import CycleMode

logger = logging.getLogger(__name__)

CYCLE_SEPARATOR = " → "


@dataclass(frozen=True)
class Cycle:
    """A closed module path; the first module is repeated at the end."""

    modules: tuple[str, ...]

    @property
    def members(self) -> tuple[str, ...]:
        return self.modules[:-1]

    def render(self, separator: str = CYCLE_SEPARATOR) -> str:
        return separator.join(self.modules)

    def __str__(self) -> str:
        return self.render()


def find_cycles(
    graph: dict[str, list[str]], *, mode: CycleMode = "first"
) -> list[Cycle]:
    """Find circular dependencies in a module graph.

    Args:
        graph: Module -> modules it depends on
        mode: "first" reports at most one cycle per DFS root, "exhaustive"
            enumerates every elementary cycle

    Returns:
        List of cycles in discovery order ("first") or node order
        ("exhaustive")
    """
    if mode == "exhaustive":
        return _simple_cycles(graph)
    return _first_cycle_per_root(graph)




def _first_cycle_per_root(graph: dict[str, list[str]]) -> list[Cycle]:
    """Depth-first search that stops each root at its first cycle.

    Uses an explicit stack of edge iterators so deep dependency chains do
    not hit the interpreter recursion limit.
    """
    cycles: list[Cycle] = []
    visited: set[str] = set()

    for root in graph:
        if root in visited:
            continue

        visited.add(root)
        recursion_stack: set[str] = {root}
        path: list[str] = [root]
        pending = [iter(graph.get(root, []))]

        while pending:
            for dep in pending[-1]:
                if dep not in visited:
                    visited.add(dep)
                    recursion_stack.add(dep)
                    path.append(dep)
                    pending.append(iter(graph.get(dep, [])))
                    break
                if dep in recursion_stack:
                    start = path.index(dep)
                    cycle = Cycle((*path[start:], dep))
                    logger.debug("Cycle detected: %s", cycle)
                    cycles.append(cycle)
                    pending.clear()
                    break
            else:
                pending.pop()
                recursion_stack.discard(path.pop())

    return cycles


def _to_digraph(graph: dict[str, list[str]]) -> tuple[nx.DiGraph, dict[str, int]]:
    """Build a networkx graph plus the node order used for sorting results.

    Targets missing from the key order are ranked after every keyed node,
    in first-seen edge order.
    """
    order = {node: index for index, node in enumerate(graph)}
    digraph = nx.DiGraph()
    digraph.add_nodes_from(graph)
    for source, targets in graph.items():
        for target in targets:
            order.setdefault(target, len(order))
            digraph.add_edge(source, target)
    return digraph, order


def _simple_cycles(graph: dict[str, list[str]]) -> list[Cycle]:
    digraph, order = _to_digraph(graph)

    cycles: list[tuple[str, ...]] = []
    for raw in nx.simple_cycles(digraph):
        start = min(range(len(raw)), key=lambda i: order[raw[i]])
        rotated = raw[start:] + raw[:start]
        cycles.append((*rotated, rotated[0]))

    cycles.sort(key=lambda modules: [order[m] for m in modules])
    return [Cycle(modules) for modules in cycles]


def strongly_connected_components(graph: dict[str, list[str]]) -> list[list[str]]:
    """Group modules that take part in at least one cycle.

    Every module of a returned group can reach every other one. Members are
    listed in node order and groups are ordered by their first member.
    """
    digraph, order = _to_digraph(graph)

    groups = [
        sorted(component, key=order.__getitem__)
        for component in nx.strongly_connected_components(digraph)
        if len(component) > 1
        or any(digraph.has_edge(node, node) for node in component)
    ]
    groups.sort(key=lambda group: order[group[0]])
    return groups


def compute_fan_stats(
    edges: list[tuple[str, str]],
) -> tuple[dict[str, int], dict[str, int]]:
    """Compute fan-in and fan-out statistics from edges."""
    fan_in: dict[str, int] = {}
    fan_out: dict[str, int] = {}

    for source, target in edges:
        fan_out[source] = fan_out.get(source, 0) + 1
        fan_in[target] = fan_in.get(target, 0) + 1

    return fan_in, fan_out


def initialization_depths(graph: dict[str, list[str]]) -> dict[str, int]:
    """Depth of each module in the dependency chain.

    A module without dependencies has depth 1; otherwise its depth is one
    more than its deepest dependency. A dependency already on the current
    path contributes 0, which cuts cycles. The walk keeps its own stack of
    ``[module, remaining dependencies, deepest so far]`` frames.
    """
    depths: dict[str, int] = {}

    for root in graph:
        if root in depths:
            continue

        active: set[str] = {root}
        frames: list[list] = [[root, iter(graph.get(root, [])), 0]]
        while frames:
            frame = frames[-1]
            for dep in frame[1]:
                if dep in active:
                    continue
                if dep in depths:
                    frame[2] = max(frame[2], depths[dep])
                    continue
                active.add(dep)
                frames.append([dep, iter(graph.get(dep, [])), 0])
                break
            else:
                module, _, deepest = frames.pop()
                active.discard(module)
                depths[module] = deepest + 1
                if frames:
                    frames[-1][2] = max(frames[-1][2], depths[module])

    return {module: depths[module] for module in graph}


def initialization_order(graph: dict[str, list[str]]) -> list[str]:
    """Modules ordered so dependencies come first (ties keep node order)."""
    depths = initialization_depths(graph)
    order = {node: index for index, node in enumerate(graph)}
    return sorted(graph, key=lambda m: (depths[m], order[m]))


__all__ = [
    "CYCLE_SEPARATOR",
    "Cycle",
    "compute_fan_stats",
    "find_cycles",
    "initialization_depths",
    "initialization_order",
    "strongly_connected_components",
]
