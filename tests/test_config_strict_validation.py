from __future__ import annotations

from pathlib import Path

import pytest

from rules.capabilities import DEFAULT_CAPABILITY_RULES
from rules.config import ConfigError, load_config


def _write_config(root: Path, toml_content: str) -> None:
    (root / "svcmap.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.cycles.mode == "first"
    assert config.report.hide_empty_sections is False
    assert config.symbols.branch == "├──"
    assert config.capabilities.effective_rules() == DEFAULT_CAPABILITY_RULES


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.cycles.mode == "first"


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "[cycles\nmode = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_cycle_mode_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, '[cycles]\nmode = "all"')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_symbol_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, '[symbols]\nsparkle = "*"')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_nested_rule_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[capabilities.rule]]
name = "store-closer"
bogus = true
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_duplicate_rule_names_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[capabilities.rule]]
name = "dup"

[[capabilities.rule]]
name = "dup"
""".strip(),
    )

    with pytest.raises(ConfigError, match="Duplicate capability rule name"):
        load_config(tmp_path)


def test_valid_full_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[cycles]
mode = "exhaustive"

[report]
hide_empty_sections = true
show_defaults = true
validation = true

[symbols]
branch = "|--"
terminal = "`--"

[capabilities]
include_defaults = false

[[capabilities.rule]]
name = "store-closer"
type_patterns = ["*Store"]
capability_patterns = ["io.Closer"]
satisfies = true
explanation = ["Store implements Close()"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.cycles.mode == "exhaustive"
    assert config.report.hide_empty_sections is True
    assert config.report.show_defaults is True
    assert config.report.validation is True
    assert config.symbols.branch == "|--"
    assert config.symbols.terminal == "`--"
    assert config.symbols.pipe == "│   "
    rules = config.capabilities.effective_rules()
    assert [rule.name for rule in rules] == ["store-closer"]
    assert rules[0].satisfies is True


def test_configured_rules_precede_defaults(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[capabilities.rule]]
name = "custom"
""".strip(),
    )

    rules = load_config(tmp_path).capabilities.effective_rules()

    assert rules[0].name == "custom"
    assert rules[1:] == DEFAULT_CAPABILITY_RULES
