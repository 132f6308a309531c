from __future__ import annotations

from analysis.engine import probe_capability
from rules.config import SvcMapConfig

_COMMON_ISSUES = [
    "💡 Common Issues:",
    "- Pointer vs Value receiver methods",
    "- Missing methods in implementation",
    "- Incorrect reflection pattern",
    "- Package visibility (exported vs unexported)",
]


def test_probe_success_text() -> None:
    report = probe_capability("*chimux.ChiMuxModule", "http.Handler")

    expected = [
        "🔍 Debugging Interface Implementation",
        "Type: *chimux.ChiMuxModule",
        "Interface: http.Handler",
        "",
        "✅ SUCCESS: *chimux.ChiMuxModule implements http.Handler",
        *_COMMON_ISSUES,
    ]
    assert report.text == "\n".join(expected) + "\n"
    assert report.satisfies is True
    assert report.rule == "router-http-handler"


def _router_not_reader_config() -> SvcMapConfig:
    return SvcMapConfig.model_validate(
        {
            "capabilities": {
                "rule": [
                    {
                        "name": "router-not-reader",
                        "type_patterns": ["*ChiMuxModule*"],
                        "capability_patterns": ["io.Reader"],
                        "satisfies": False,
                        "explanation": ["📝 ChiMuxModule has no Read method"],
                    }
                ]
            }
        }
    )


def test_probe_failure_verbose_text() -> None:
    report = probe_capability(
        "*chimux.ChiMuxModule",
        "io.Reader",
        config=_router_not_reader_config(),
        verbose=True,
    )

    assert "❌ FAILURE: *chimux.ChiMuxModule does NOT implement io.Reader\n" in (
        report.text
    )
    assert "\n🔬 Detailed Analysis:\n  📝 ChiMuxModule has no Read method\n" in (
        report.text
    )
    assert "🔬 Reflection Best Practices:\n" in report.text


def test_router_other_capability_renders_inconclusive() -> None:
    report = probe_capability("*chimux.ChiMuxModule", "io.Reader")

    assert (
        "⚠️  INCONCLUSIVE: *chimux.ChiMuxModule may or may not implement io.Reader"
        in report.text
    )
    assert report.rule == "router-other"


def test_probe_unknown_pattern_renders_template() -> None:
    report = probe_capability("*cache.Store", "io.Closer")

    expected = [
        "🔍 Debugging Interface Implementation",
        "Type: *cache.Store",
        "Interface: io.Closer",
        "",
        "📝 Analysis Template (type pattern not recognized):",
        "1. Load type '*cache.Store' using reflection",
        "2. Load interface 'io.Closer' using reflection",
        "3. Check: serviceType.Implements(interfaceType)",
        "4. Check: serviceType.Kind() == reflect.Ptr && "
        "serviceType.Elem().Implements(interfaceType)",
        "",
        *_COMMON_ISSUES,
    ]
    assert report.text == "\n".join(expected) + "\n"
    assert report.known_pattern is False
    assert report.conclusive is False


def test_probe_inconclusive_pattern() -> None:
    report = probe_capability("*api.Router", "http.Handler")

    assert (
        "⚠️  INCONCLUSIVE: *api.Router may or may not implement http.Handler"
        in report.text
    )
    assert report.known_pattern is True
    assert report.conclusive is False


def test_probe_uses_configured_rules() -> None:
    config = SvcMapConfig.model_validate(
        {
            "capabilities": {
                "rule": [
                    {
                        "name": "store-closer",
                        "type_patterns": ["*Store"],
                        "capability_patterns": ["io.Closer"],
                        "satisfies": True,
                    }
                ]
            }
        }
    )

    report = probe_capability("*cache.Store", "io.Closer", config=config)

    assert report.satisfies is True
    assert report.rule == "store-closer"
    assert "✅ SUCCESS: *cache.Store implements io.Closer" in report.text
