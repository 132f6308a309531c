from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from contract.inputs import DECLARATIONS_JSONL, INPUT_SCHEMA_VERSION, INPUT_SPECS
from contract.validation import (
    ValidationMessage,
    ValidationResult,
    load_configs,
    load_declarations,
    validate_declarations,
)


def _declaration(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "schema_version": INPUT_SCHEMA_VERSION,
        "module": "A",
        "kind": "provided",
        "service_name": "db",
    }
    record.update(overrides)
    return record


def _write_jsonl(path: Path, records: list[Any]) -> Path:
    lines = [r if isinstance(r, str) else json.dumps(r) for r in records]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


# Group 1: Data class tests


def test_validation_message_location_with_line() -> None:
    """ValidationMessage.location returns path:line when line is present."""
    msg = ValidationMessage("declarations", Path("x.jsonl"), "bad", line=7)
    assert msg.location() == "x.jsonl:7"


def test_validation_message_location_without_line() -> None:
    """ValidationMessage.location returns only path when line is missing."""
    msg = ValidationMessage("declarations", Path("x.jsonl"), "bad")
    assert msg.location() == "x.jsonl"


def test_validation_message_to_dict() -> None:
    """ValidationMessage.to_dict returns the expected payload."""
    msg = ValidationMessage("declarations", Path("x.jsonl"), "bad", line=3)
    assert msg.to_dict() == {
        "input": "declarations",
        "path": "x.jsonl",
        "line": 3,
        "message": "bad",
    }


def test_validation_result_ok() -> None:
    """ValidationResult.ok reflects whether errors are present."""
    assert ValidationResult().ok is True
    result = ValidationResult(errors=[ValidationMessage("x", Path("a"), "boom")])
    assert result.ok is False


def test_input_specs_name_contract_files() -> None:
    assert INPUT_SPECS["declarations"].filename == DECLARATIONS_JSONL
    assert INPUT_SPECS["configs"].format == "jsonl"


# Group 2: Loading


def test_load_declarations_keeps_file_order(tmp_path: Path) -> None:
    path = _write_jsonl(
        tmp_path / DECLARATIONS_JSONL,
        [
            _declaration(module="B"),
            "",
            _declaration(module="A", kind="required", optional=True),
        ],
    )

    records, result = load_declarations(path)

    assert result.ok is True
    assert result.warnings == []
    assert [(r.module, r.kind) for r in records] == [("B", "provided"), ("A", "required")]
    assert records[1].optional is True


def test_load_declarations_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Input file does not exist"):
        load_declarations(tmp_path / "missing.jsonl")


def test_invalid_json_line_is_reported_and_skipped(tmp_path: Path) -> None:
    path = _write_jsonl(
        tmp_path / DECLARATIONS_JSONL, ["{not-json}", _declaration(module="B")]
    )

    records, result = load_declarations(path)

    assert [r.module for r in records] == ["B"]
    assert result.ok is False
    assert result.errors[0].line == 1
    assert _messages_contain(result.errors, "Invalid JSON")


def test_schema_invalid_record_is_reported(tmp_path: Path) -> None:
    path = _write_jsonl(
        tmp_path / DECLARATIONS_JSONL, [_declaration(kind="exported")]
    )

    records, result = load_declarations(path)

    assert records == []
    assert _messages_contain(result.errors, "Schema validation failed")


def test_missing_schema_version_lenient(tmp_path: Path) -> None:
    """Missing schema_version is a single warning in lenient mode."""
    record = _declaration()
    del record["schema_version"]
    path = _write_jsonl(tmp_path / DECLARATIONS_JSONL, [record, record])

    records, result = load_declarations(path)

    assert len(records) == 2
    assert result.ok is True
    assert len(result.warnings) == 1
    assert _messages_contain(result.warnings, "Missing schema_version")


def test_missing_schema_version_strict(tmp_path: Path) -> None:
    """Missing schema_version is an error in strict mode."""
    record = _declaration()
    del record["schema_version"]
    path = _write_jsonl(tmp_path / DECLARATIONS_JSONL, [record])

    _, result = load_declarations(path, strict_schema_version=True)

    assert result.ok is False
    assert _messages_contain(result.errors, "Missing schema_version")


def test_schema_version_mismatch(tmp_path: Path) -> None:
    path = _write_jsonl(
        tmp_path / DECLARATIONS_JSONL,
        [_declaration(schema_version=INPUT_SCHEMA_VERSION + 1)],
    )

    _, result = load_declarations(path)

    assert result.ok is False
    assert _messages_contain(result.errors, "Schema version mismatch")


def test_load_configs(tmp_path: Path) -> None:
    path = _write_jsonl(
        tmp_path / "configs.jsonl",
        [
            {
                "schema_version": INPUT_SCHEMA_VERSION,
                "module": "TestModule",
                "fields": [
                    {"name": "Host", "type": "string"},
                    {"name": "Port", "type": "int", "required": True},
                ],
            }
        ],
    )

    records, result = load_configs(path)

    assert result.ok is True
    assert records[0].required_count == 1
    assert [f.name for f in records[0].fields] == ["Host", "Port"]


# Group 3: Record-level validation


def test_validate_missing_file_is_error(tmp_path: Path) -> None:
    result = validate_declarations(tmp_path / "missing.jsonl")

    assert result.ok is False
    assert _messages_contain(result.errors, "Declarations file does not exist")


def test_validate_warns_on_ignored_fields(tmp_path: Path) -> None:
    path = _write_jsonl(
        tmp_path / DECLARATIONS_JSONL,
        [
            _declaration(service_name=""),
            _declaration(optional=True),
            _declaration(required_capability="http.Handler"),
        ],
    )

    result = validate_declarations(path)

    assert result.ok is True
    assert len(result.warnings) == 3
    assert _messages_contain(result.warnings, "empty service_name")
    assert _messages_contain(result.warnings, "sets optional on a provided service")
    assert _messages_contain(result.warnings, "sets required_capability")


def test_validate_clean_file(tmp_path: Path) -> None:
    path = _write_jsonl(
        tmp_path / DECLARATIONS_JSONL,
        [_declaration(), _declaration(module="B", kind="required")],
    )

    result = validate_declarations(path)

    assert result.ok is True
    assert result.errors == []
    assert result.warnings == []
