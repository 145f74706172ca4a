"""Conformance fixture loader for urlschema.

Loads YAML fixtures from tests/fixtures/ and turns each document into a
Schema (through the config path) plus a list of decode/encode cases for
parametrized testing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import yaml

from urlschema import (
    EncodingStrategy,
    Registry,
    Schema,
    default_registry,
    parse_schema_config,
)

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class FixtureCase:
    """A single decode or encode case from a conformance fixture."""

    fixture_name: str
    case_name: str
    schema: Schema
    operation: str
    inputs: dict[str, Any]
    expect: Any = None
    expect_error: str | None = None
    error_attrs: dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


# ─── YAML → urlschema type conversion ──────────────────────────────────────


def normalize(value: Any) -> Any:
    """Make decoded values comparable with plain YAML scalars."""
    if isinstance(value, enum.Enum):
        return value.value
    return value


def coerce_values(schema: Schema, values: dict[str, Any]) -> dict[str, Any]:
    """Turn YAML scalars into field values (enum members are given by value)."""
    coerced: dict[str, Any] = {}
    for name, value in values.items():
        converter = getattr(schema.definition(name), "converter", None)
        if converter is not None and not converter.accepts(value) and isinstance(value, str):
            converted = converter.try_convert(value)
            if converted is not None:
                value = converted
        coerced[name] = value
    return coerced


def parse_strategy(raw: str | None) -> EncodingStrategy:
    if raw is None:
        return EncodingStrategy.EMBED_VALUE
    return EncodingStrategy(raw)


# ─── Fixture loading ───────────────────────────────────────────────────────


def load_fixtures(registry: Registry | None = None) -> list[FixtureCase]:
    """Load every conformance fixture file, in file name order."""
    registry = registry or default_registry()
    cases: list[FixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_file(yaml_file, registry))
    return cases


def _load_file(path: Path, registry: Registry) -> list[FixtureCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[FixtureCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            fixture_name = doc["name"]
            schema = registry.load_schema(parse_schema_config(doc["schema"]))
            for case in doc["cases"]:
                operation = "decode" if "decode" in case else "encode"
                cases.append(
                    FixtureCase(
                        fixture_name=fixture_name,
                        case_name=case["name"],
                        schema=schema,
                        operation=operation,
                        inputs=case[operation] or {},
                        expect=case.get("expect"),
                        expect_error=case.get("expect_error"),
                        error_attrs=case.get("error_attrs", {}),
                    )
                )
    return cases


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    if "fixture_case" in metafunc.fixturenames:
        cases = load_fixtures()
        metafunc.parametrize("fixture_case", cases, ids=[c.id for c in cases])


@pytest.fixture
def registry() -> Registry:
    """Registry with the built-in converters."""
    return default_registry()
