"""Tree connector selection for rendered lists.

Every entry of a list except the last gets the branch connector and the last
entry gets the terminal connector. A synthetic summary entry appended to a
list takes over the terminal position, demoting the last real entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from report.symbols import SymbolTable


def connectors(
    count: int, symbols: SymbolTable, *, trailing: bool = False
) -> list[str]:
    """Return the connector for each of ``count`` entries.

    With ``trailing=True`` another entry follows the list, so no entry of
    the list itself is terminal.
    """
    return [
        symbols.terminal if index == count - 1 and not trailing else symbols.branch
        for index in range(count)
    ]


def tree_lines(
    entries: Sequence[str],
    symbols: SymbolTable,
    *,
    prefix: str = "",
    summary: str | None = None,
) -> list[str]:
    """Render entries as tree lines, optionally closed by a summary entry."""
    lines = [
        f"{prefix}{connector} {entry}"
        for connector, entry in zip(
            connectors(len(entries), symbols, trailing=summary is not None),
            entries,
        )
    ]
    if summary is not None:
        lines.append(f"{prefix}{symbols.terminal} {summary}")
    return lines


def section_lines(
    sections: Sequence[tuple[str, Sequence[str]]],
    symbols: SymbolTable,
    *,
    hide_empty: bool = False,
) -> list[str]:
    """Render titled sub-sections, each with its own entry list.

    The connector of a section header follows the same last-item rule as
    the entries, so whether a section is terminal depends on which sections
    are visible. Empty sections render as ``(none)`` unless ``hide_empty``.
    """
    visible = [
        (title, entries) for title, entries in sections if entries or not hide_empty
    ]
    lines: list[str] = []
    for index, (connector, (title, entries)) in enumerate(
        zip(connectors(len(visible), symbols), visible)
    ):
        if not entries:
            lines.append(f"{connector} {title}: (none)")
            continue
        lines.append(f"{connector} {title}:")
        is_last = index == len(visible) - 1
        child_prefix = symbols.blank if is_last else symbols.pipe
        lines.extend(tree_lines(entries, symbols, prefix=child_prefix))
    return lines


__all__ = ["connectors", "section_lines", "tree_lines"]
