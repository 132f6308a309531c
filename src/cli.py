"""Command-line interface for svcmap-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from analysis.engine import analyze_configs, analyze_services, probe_capability
from contract.validation import (
    load_configs,
    load_declarations,
    validate_declarations,
)
from rules.config import ConfigError, load_config
from verify.verify import verify_idempotence

if TYPE_CHECKING:
    from contract.validation import ValidationResult
    from rules.config import SvcMapConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Directory holding svcmap.toml (default: .)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="svcmap")
    subparsers = parser.add_subparsers(dest="command", required=True)

    services_parser = subparsers.add_parser(
        "services", help="Inspect service registrations and dependencies"
    )
    _add_common_options(services_parser)
    services_parser.add_argument("declarations", help="Declarations JSONL file")
    services_parser.add_argument(
        "--graph", action="store_true", help="Show the dependency graph"
    )
    services_parser.add_argument(
        "--interfaces",
        action="store_true",
        help="Show interface compatibility checks",
    )
    services_parser.add_argument(
        "--verbose", action="store_true", help="Show declaration sources"
    )
    services_parser.add_argument(
        "--module", default=None, help="Only show graph entries for this module"
    )
    services_parser.add_argument(
        "--json", action="store_true", help="Emit the structured report as JSON"
    )

    config_parser = subparsers.add_parser(
        "config", help="Analyze module configuration structures"
    )
    _add_common_options(config_parser)
    config_parser.add_argument("configs", help="Config structures JSONL file")
    config_parser.add_argument(
        "--validate",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Summarize required fields (default: [report] validation)",
    )
    config_parser.add_argument(
        "--show-defaults",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show default values (default: [report] show_defaults)",
    )
    config_parser.add_argument(
        "--verbose", action="store_true", help="Show config sources"
    )
    config_parser.add_argument(
        "--module", default=None, help="Only show this module"
    )

    interface_parser = subparsers.add_parser(
        "interface", help="Probe whether a type satisfies a capability"
    )
    _add_common_options(interface_parser)
    interface_parser.add_argument(
        "--type", dest="type_descriptor", required=True, help="Type descriptor"
    )
    interface_parser.add_argument(
        "--interface", dest="capability", required=True, help="Capability"
    )
    interface_parser.add_argument(
        "--verbose", action="store_true", help="Show detailed analysis"
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Validate a declarations file"
    )
    _add_common_options(validate_parser)
    validate_parser.add_argument("declarations", help="Declarations JSONL file")
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat a missing schema_version as an error",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify that analysis runs are idempotent"
    )
    _add_common_options(verify_parser)
    verify_parser.add_argument("declarations", help="Declarations JSONL file")

    return parser


def _write_messages(result: ValidationResult) -> None:
    for error in result.errors:
        sys.stderr.write(f"{error.location()}: error: {error.message}\n")
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")


def _handle_services(args: argparse.Namespace, config: SvcMapConfig) -> int:
    records, result = load_declarations(Path(args.declarations))
    _write_messages(result)

    report = analyze_services(
        records,
        config=config,
        graph=args.graph,
        interfaces=args.interfaces,
        verbose=args.verbose,
        module_filter=args.module,
    )
    if args.json:
        sys.stdout.write(
            orjson.dumps(
                report.model_dump(mode="json"),
                option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
            ).decode("utf-8")
            + "\n"
        )
    else:
        sys.stdout.write(report.text)

    if not result.ok or not report.ok:
        return 1
    return 0


def _handle_config(args: argparse.Namespace, config: SvcMapConfig) -> int:
    records, result = load_configs(Path(args.configs))
    _write_messages(result)

    report = analyze_configs(
        records,
        config=config,
        validation=args.validate,
        show_defaults=args.show_defaults,
        verbose=args.verbose,
        module_filter=args.module,
    )
    sys.stdout.write(report.text)
    return 0 if result.ok else 1


def _handle_interface(args: argparse.Namespace, config: SvcMapConfig) -> int:
    report = probe_capability(
        args.type_descriptor,
        args.capability,
        config=config,
        verbose=args.verbose,
    )
    sys.stdout.write(report.text)
    return 0


def _handle_validate(args: argparse.Namespace, config: SvcMapConfig) -> int:
    result = validate_declarations(
        Path(args.declarations), strict_schema_version=args.strict
    )
    _write_messages(result)
    return 0 if result.ok else 1


def _handle_verify(args: argparse.Namespace, config: SvcMapConfig) -> int:
    records, load_result = load_declarations(Path(args.declarations))
    if not load_result.ok:
        _write_messages(load_result)
        return 2

    result = verify_idempotence(records, config=config)
    if not result.ok:
        for key in result.mismatches:
            sys.stderr.write(f"mismatch: {key}\n")
        return 1
    return 0


_HANDLERS = {
    "services": _handle_services,
    "config": _handle_config,
    "interface": _handle_interface,
    "validate": _handle_validate,
    "verify": _handle_verify,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    root = Path(args.root).expanduser().resolve()
    handler = _HANDLERS.get(args.command)
    if handler is None:
        raise AssertionError

    try:
        config = load_config(root)
        return handler(args, config)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2
    except FileNotFoundError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
