"""Capability oracle: does a concrete type satisfy a named capability?"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from rules.capabilities import DEFAULT_CAPABILITY_RULES, match_capability_rule

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rules.capabilities import CapabilityRule


@dataclass(frozen=True)
class ProbeResult:
    known_pattern: bool
    satisfies: bool
    explanation: tuple[str, ...] = field(default_factory=tuple)
    conclusive: bool = True
    rule: str | None = None

    @property
    def rejects(self) -> bool:
        """True only for a definitive negative verdict."""
        return self.known_pattern and self.conclusive and not self.satisfies

    def to_dict(self) -> dict[str, object]:
        return {
            "known_pattern": self.known_pattern,
            "satisfies": self.satisfies,
            "conclusive": self.conclusive,
            "rule": self.rule,
            "explanation": list(self.explanation),
        }


class Oracle(Protocol):
    def probe(
        self, type_descriptor: str | None, capability: str
    ) -> ProbeResult: ...


def guidance_template(type_descriptor: str, capability: str) -> tuple[str, ...]:
    """Explain how the check is performed when no rule recognises the pair."""
    return (
        f"1. Load type '{type_descriptor}' using reflection",
        f"2. Load interface '{capability}' using reflection",
        "3. Check: serviceType.Implements(interfaceType)",
        "4. Check: serviceType.Kind() == reflect.Ptr && "
        "serviceType.Elem().Implements(interfaceType)",
    )


class CapabilityOracle:
    """Rule-table driven capability oracle.

    Rules are consulted in order and the first match decides. A pair that no
    rule recognises yields ``known_pattern=False`` with the guidance template
    instead of an error.
    """

    def __init__(self, rules: Sequence[CapabilityRule] | None = None) -> None:
        self.rules: tuple[CapabilityRule, ...] = (
            DEFAULT_CAPABILITY_RULES if rules is None else tuple(rules)
        )

    def probe(self, type_descriptor: str | None, capability: str) -> ProbeResult:
        type_descriptor = type_descriptor or ""
        capability = capability or ""

        rule = match_capability_rule(type_descriptor, capability, self.rules)
        if rule is None:
            return ProbeResult(
                known_pattern=False,
                satisfies=False,
                explanation=guidance_template(type_descriptor, capability),
                conclusive=False,
            )

        return ProbeResult(
            known_pattern=True,
            satisfies=bool(rule.satisfies),
            explanation=tuple(rule.explain(type_descriptor)),
            conclusive=rule.satisfies is not None,
            rule=rule.name,
        )


def probe(
    type_descriptor: str | None,
    capability: str,
    rules: Sequence[CapabilityRule] | None = None,
) -> ProbeResult:
    """Probe a single pair against the given (or built-in) rule table."""
    return CapabilityOracle(rules).probe(type_descriptor, capability)


__all__ = [
    "CapabilityOracle",
    "Oracle",
    "ProbeResult",
    "guidance_template",
    "probe",
]
