"""Capability rule table and rule matching.

Each rule maps a (type descriptor, capability) glob pair to a verdict and the
explanation lines shown to the user. Rules are evaluated in order and the
first match wins.
"""

from __future__ import annotations

from fnmatch import fnmatchcase

from pydantic import BaseModel, ConfigDict, Field


class CapabilityHint(BaseModel):
    """Extra explanation line added when the concrete type matches a glob."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type_patterns: list[str] = Field(
        description="Glob patterns tested against the concrete type descriptor"
    )
    line: str = Field(description="Explanation line appended on match")


class CapabilityRule(BaseModel):
    """A known (type, capability) pattern and its verdict."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(description="Rule identifier (e.g., 'router-http-handler')")
    type_patterns: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Glob patterns for the concrete type descriptor (any-of)",
    )
    capability_patterns: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Glob patterns for the capability name (any-of)",
    )
    satisfies: bool | None = Field(
        default=None,
        description="Verdict; null means recognised but inconclusive",
    )
    explanation: list[str] = Field(
        default_factory=list,
        description="Human-readable rationale lines",
    )
    hints: list[CapabilityHint] = Field(
        default_factory=list,
        description="Conditional extra explanation lines",
    )

    def matches(self, type_descriptor: str, capability: str) -> bool:
        return _any_match(type_descriptor, self.type_patterns) and _any_match(
            capability, self.capability_patterns
        )

    def explain(self, type_descriptor: str) -> list[str]:
        lines = list(self.explanation)
        for hint in self.hints:
            if _any_match(type_descriptor, hint.type_patterns):
                lines.append(hint.line)
        return lines


def _any_match(value: str, patterns: list[str]) -> bool:
    return any(fnmatchcase(value, pattern) for pattern in patterns)


DEFAULT_CAPABILITY_RULES: tuple[CapabilityRule, ...] = (
    CapabilityRule(
        name="router-http-handler",
        type_patterns=["*ChiMuxModule*"],
        capability_patterns=["*http.Handler*"],
        satisfies=True,
        explanation=[
            "✅ ChiMuxModule implements ServeHTTP(ResponseWriter, *Request)",
            "✅ This satisfies the http.Handler interface",
            "🔍 Common issue: pointer vs value type checking in reflection",
            "💡 Fix: Use typeImplementsInterface helper that checks both "
            "pointer and value types",
        ],
    ),
    CapabilityRule(
        name="router-lifecycle",
        type_patterns=["*ChiMuxModule*"],
        capability_patterns=[
            "*Module*",
            "*ServiceAware*",
            "*Startable*",
            "*Stoppable*",
            "*Configurable*",
            "*Router*",
        ],
        satisfies=True,
        explanation=[
            "📝 ChiMuxModule is a router implementation",
            "✅ Implements: Module, ServiceAware, Startable",
            "✅ Implements: BasicRouter, Router, ChiRouterService",
            "✅ Provides: 'router' service (*ChiMuxModule), "
            "'chi.router' service (*chi.Mux)",
            "🔍 Check if the interface requires http.Handler methods",
        ],
    ),
    CapabilityRule(
        name="router-other",
        type_patterns=["*ChiMuxModule*"],
        satisfies=None,
        explanation=[
            "📝 ChiMuxModule is a router implementation",
            "✅ Implements: Module, ServiceAware, Startable",
            "✅ Provides: 'router' service (*ChiMuxModule), "
            "'chi.router' service (*chi.Mux)",
            "🔍 Check if the interface requires http.Handler methods",
        ],
    ),
    CapabilityRule(
        name="http-handler",
        capability_patterns=["*http.Handler*"],
        satisfies=None,
        explanation=[
            "📝 http.Handler interface requires:",
            "  ServeHTTP(http.ResponseWriter, *http.Request)",
            "🔍 Check if the type has this method with exact signature",
            "💡 Pointer receivers need pointer types in reflection checks",
        ],
        hints=[
            CapabilityHint(
                type_patterns=["*Mux*", "*Router*", "*Handler*"],
                line="🤔 Type name suggests it might implement http.Handler",
            )
        ],
    ),
)


def match_capability_rule(
    type_descriptor: str,
    capability: str,
    rules: tuple[CapabilityRule, ...] | list[CapabilityRule],
) -> CapabilityRule | None:
    """Return the first rule matching the pair, or None.

    Uses first-match-wins semantics, so more specific rules must be listed
    before broader ones.
    """
    for rule in rules:
        if rule.matches(type_descriptor, capability):
            return rule
    return None


__all__ = [
    "DEFAULT_CAPABILITY_RULES",
    "CapabilityHint",
    "CapabilityRule",
    "match_capability_rule",
]
