"""Loading and validation helpers for extractor input files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

import orjson
from pydantic import ValidationError

from contract.inputs import INPUT_SCHEMA_VERSION
from contract.models import ModuleConfig, ServiceDeclaration

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


RecordT = TypeVar("RecordT", ServiceDeclaration, ModuleConfig)


@dataclass(frozen=True)
class ValidationMessage:
    input: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "input": self.input,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def load_declarations(
    path: Path, *, strict_schema_version: bool = False
) -> tuple[list[ServiceDeclaration], ValidationResult]:
    """Load service declarations from a JSONL file.

    Malformed lines are reported in the returned ValidationResult and
    skipped; the remaining records keep their file order.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    result = ValidationResult()
    records = _load_jsonl(
        "declarations",
        path,
        ServiceDeclaration,
        result,
        strict_schema_version=strict_schema_version,
    )
    return records, result


def load_configs(
    path: Path, *, strict_schema_version: bool = False
) -> tuple[list[ModuleConfig], ValidationResult]:
    """Load module configuration structures from a JSONL file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    result = ValidationResult()
    records = _load_jsonl(
        "configs",
        path,
        ModuleConfig,
        result,
        strict_schema_version=strict_schema_version,
    )
    return records, result


def validate_declarations(
    path: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    """Validate a declarations file, including record-level consistency."""
    if not path.exists():
        result = ValidationResult()
        result.errors.append(
            ValidationMessage(
                input="declarations",
                path=path,
                message="Declarations file does not exist.",
            )
        )
        return result

    records, result = load_declarations(
        path, strict_schema_version=strict_schema_version
    )
    _check_declarations(path, records, result)
    return result


def _load_jsonl(
    input_name: str,
    path: Path,
    model: type[RecordT],
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> list[RecordT]:
    if not path.exists():
        msg = f"Input file does not exist: {path}"
        raise FileNotFoundError(msg)

    records: list[RecordT] = []
    missing_schema_emitted = False
    mismatch_schema_emitted = False
    with path.open("rb") as handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                logger.warning("%s:%d: invalid JSON", path, line_number)
                result.errors.append(
                    ValidationMessage(
                        input=input_name,
                        path=path,
                        line=line_number,
                        message=f"Invalid JSON: {exc}.",
                    )
                )
                continue

            schema_present = isinstance(data, dict) and "schema_version" in data
            try:
                record = model.model_validate(data)
            except ValidationError as exc:
                logger.warning("%s:%d: schema validation failed", path, line_number)
                result.errors.append(
                    ValidationMessage(
                        input=input_name,
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
                continue

            if not schema_present:
                if not missing_schema_emitted:
                    _check_schema_version(
                        input_name,
                        path,
                        line_number,
                        schema_present,
                        record.schema_version,
                        result,
                        strict_schema_version=strict_schema_version,
                    )
                    missing_schema_emitted = True
            elif (
                record.schema_version != INPUT_SCHEMA_VERSION
                and not mismatch_schema_emitted
            ):
                _check_schema_version(
                    input_name,
                    path,
                    line_number,
                    schema_present,
                    record.schema_version,
                    result,
                    strict_schema_version=strict_schema_version,
                )
                mismatch_schema_emitted = True

            records.append(record)

    return records


def _check_declarations(
    path: Path, records: list[ServiceDeclaration], result: ValidationResult
) -> None:
    for index, record in enumerate(records, 1):
        if not record.service_name:
            result.warnings.append(
                ValidationMessage(
                    input="declarations",
                    path=path,
                    message=(
                        f"Record {index} ({record.module}) has an empty "
                        "service_name and will be ignored."
                    ),
                )
            )
        if record.is_provided and record.optional:
            result.warnings.append(
                ValidationMessage(
                    input="declarations",
                    path=path,
                    message=(
                        f"Record {index} ({record.module}/{record.service_name}) "
                        "sets optional on a provided service; it has no effect."
                    ),
                )
            )
        if record.is_provided and record.required_capability:
            result.warnings.append(
                ValidationMessage(
                    input="declarations",
                    path=path,
                    message=(
                        f"Record {index} ({record.module}/{record.service_name}) "
                        "sets required_capability on a provided service; "
                        "it has no effect."
                    ),
                )
            )


def _check_schema_version(
    input_name: str,
    path: Path,
    line: int | None,
    schema_present: bool,
    schema_version: int,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> None:
    if schema_present and schema_version != INPUT_SCHEMA_VERSION:
        result.errors.append(
            ValidationMessage(
                input=input_name,
                path=path,
                line=line,
                message=(
                    "Schema version mismatch: "
                    f"expected {INPUT_SCHEMA_VERSION}, got {schema_version}."
                ),
            )
        )
        return

    if not schema_present:
        message = f"Missing schema_version; defaulted to {INPUT_SCHEMA_VERSION}."
        if strict_schema_version:
            result.errors.append(
                ValidationMessage(
                    input=input_name,
                    path=path,
                    line=line,
                    message=message,
                )
            )
        else:
            result.warnings.append(
                ValidationMessage(
                    input=input_name,
                    path=path,
                    line=line,
                    message=message,
                )
            )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "load_configs",
    "load_declarations",
    "validate_declarations",
]
