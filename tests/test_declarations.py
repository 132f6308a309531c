from __future__ import annotations

import pytest
from pydantic import ValidationError

from model.declarations import DeclarationSet, ServiceDeclaration


def _provided(module: str, name: str, **kwargs: object) -> ServiceDeclaration:
    return ServiceDeclaration(module=module, kind="provided", service_name=name, **kwargs)


def _required(module: str, name: str, **kwargs: object) -> ServiceDeclaration:
    return ServiceDeclaration(module=module, kind="required", service_name=name, **kwargs)


def test_declaration_set_rejects_none() -> None:
    with pytest.raises(TypeError, match="not None"):
        DeclarationSet(None)  # type: ignore[arg-type]


def test_declaration_set_rejects_foreign_items() -> None:
    with pytest.raises(TypeError, match="expected ServiceDeclaration"):
        DeclarationSet([{"module": "A"}])  # type: ignore[list-item]


def test_modules_follow_encounter_order() -> None:
    declarations = DeclarationSet(
        [
            _required("web", "db"),
            _provided("storage", "db"),
            _provided("web", "http"),
            _provided("auth", "tokens"),
        ]
    )

    assert declarations.modules == ("web", "storage", "auth")


def test_empty_service_names_are_dropped() -> None:
    declarations = DeclarationSet(
        [
            _provided("A", ""),
            _required("A", "db"),
            _provided("B", ""),
        ]
    )

    assert len(declarations) == 1
    assert declarations.dropped == 2
    assert declarations.modules == ("A",)


def test_for_module_and_kind_views_keep_order() -> None:
    declarations = DeclarationSet(
        [
            _provided("A", "one"),
            _required("A", "two"),
            _provided("A", "three"),
            _provided("B", "four"),
        ]
    )

    assert [d.service_name for d in declarations.for_module("A")] == [
        "one",
        "two",
        "three",
    ]
    assert [d.service_name for d in declarations.for_module("A", "provided")] == [
        "one",
        "three",
    ]
    assert [d.service_name for d in declarations.provided] == ["one", "three", "four"]
    assert [d.service_name for d in declarations.required] == ["two"]


def test_providers_of_returns_every_provider() -> None:
    declarations = DeclarationSet(
        [
            _provided("X", "cache"),
            _required("Z", "cache"),
            _provided("Y", "cache"),
        ]
    )

    assert [d.module for d in declarations.providers_of("cache")] == ["X", "Y"]
    assert declarations.providers_of("missing") == []


def test_declaration_is_immutable() -> None:
    declaration = _provided("A", "db")

    with pytest.raises(ValidationError):
        declaration.module = "B"  # type: ignore[misc]


def test_declaration_rejects_unknown_kind() -> None:
    with pytest.raises(ValidationError):
        ServiceDeclaration(module="A", kind="exported", service_name="db")  # type: ignore[arg-type]
