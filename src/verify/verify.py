"""Idempotence verification for svcmap analysis runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from analysis.engine import analyze_services

if TYPE_CHECKING:
    from collections.abc import Iterable

    from model.declarations import ServiceDeclaration
    from rules.config import SvcMapConfig


@dataclass(frozen=True)
class IdempotenceResult:
    ok: bool
    runs: int
    mismatches: tuple[str, ...] = field(default_factory=tuple)


def verify_idempotence(
    declarations: Iterable[ServiceDeclaration],
    *,
    config: SvcMapConfig | None = None,
    runs: int = 2,
) -> IdempotenceResult:
    """Verify that repeated analysis runs produce identical reports.

    Runs the full analysis ``runs`` times on the same declarations and
    compares every report field against the first run, including the
    rendered text.

    Args:
        declarations: Declarations to analyze; materialized once up front.
        config: Optional configuration shared by every run.
        runs: Number of runs (at least 2).

    Returns:
        IdempotenceResult with the sorted names of report fields that
        differed between runs.

    Raises:
        ValueError: If runs is less than 2.
    """
    if runs < 2:
        msg = f"runs must be at least 2, got {runs}"
        raise ValueError(msg)

    materialized = list(declarations)
    reports = [
        analyze_services(materialized, config=config, interfaces=True).model_dump()
        for _ in range(runs)
    ]

    baseline = reports[0]
    mismatches = sorted(
        {
            key
            for report in reports[1:]
            for key, value in report.items()
            if baseline.get(key) != value
        }
    )
    return IdempotenceResult(
        ok=not mismatches,
        runs=runs,
        mismatches=tuple(mismatches),
    )
