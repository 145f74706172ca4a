"""Config types for data-driven schema construction.

A schema can be declared as a JSON/YAML dict instead of a Record class.
Config-driven construction path:
  dict → parse_schema_config() → SchemaConfig → Registry.load_schema() → Schema

Relationship to runtime types:

| Config type        | Runtime type |
|--------------------|--------------|
| SchemaConfig       | Schema       |
| StaticPathConfig   | StaticPath   |
| DynamicPathConfig  | DynamicPath  |
| QueryConfig        | Query        |
| TypedConfig        | Converter    |

Example::

    fields:
      - {kind: static, name: users}
      - {kind: dynamic, name: id, type: int}
      - {kind: query, name: sort, type: {name: enum, config: {values: [asc, desc]}}}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

# ═══════════════════════════════════════════════════════════════════════════════
# Config types (frozen dataclasses)
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TypedConfig:
    """Reference to a registered converter with its configuration.

    - name identifies the registered converter factory
    - config carries the converter-specific payload
    """

    name: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class StaticPathConfig:
    """Literal segments; None means the field name is the only segment."""

    name: str
    segments: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class DynamicPathConfig:
    """One typed path segment."""

    name: str
    value_type: TypedConfig
    placeholder: str | None = None
    optional: bool = False


@dataclass(frozen=True, slots=True)
class QueryConfig:
    """One typed query parameter.

    A string default is converted through the field's converter when the
    schema is loaded; any other default is used as-is.
    """

    name: str
    value_type: TypedConfig
    key: str | None = None
    default: Any = None
    placeholder: str | None = None
    optional: bool = False


FieldConfig: TypeAlias = StaticPathConfig | DynamicPathConfig | QueryConfig


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    """Configuration for a Schema.

    Loaded into a runtime Schema via Registry.load_schema().
    """

    fields: tuple[FieldConfig, ...]


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_FIELD_KINDS = frozenset({"static", "dynamic", "query"})


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def parse_schema_config(data: dict[str, Any]) -> SchemaConfig:
    """Parse a dict into a SchemaConfig.

    This is the main entry point for config loading.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_fields = data.get("fields")
    if raw_fields is None:
        msg = "missing required field 'fields'"
        raise ConfigParseError(msg)
    if not isinstance(raw_fields, list):
        msg = f"'fields' must be a list, got {type(raw_fields).__name__}"
        raise ConfigParseError(msg)

    return SchemaConfig(fields=tuple(_parse_field(f) for f in raw_fields))


def _parse_field(data: dict[str, Any]) -> FieldConfig:
    """Parse one field dict.

    Uses 'kind' discriminant: static, dynamic, query.
    """
    if not isinstance(data, dict):
        msg = f"field must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    kind = data.get("kind")
    if kind is None:
        msg = "field missing required field 'kind'"
        raise ConfigParseError(msg)
    if kind not in _FIELD_KINDS:
        msg = f"unknown field kind: {kind!r} (expected one of {sorted(_FIELD_KINDS)})"
        raise ConfigParseError(msg)

    name = data.get("name")
    if not isinstance(name, str) or not name:
        msg = f"{kind} field requires a non-empty 'name' string"
        raise ConfigParseError(msg)

    if kind == "static":
        return _parse_static(name, data)
    if kind == "dynamic":
        return DynamicPathConfig(
            name=name,
            value_type=_parse_typed_config(name, data),
            placeholder=_optional_str(name, data, "placeholder"),
            optional=_optional_bool(name, data, "optional"),
        )
    return QueryConfig(
        name=name,
        value_type=_parse_typed_config(name, data),
        key=_optional_str(name, data, "key"),
        default=data.get("default"),
        placeholder=_optional_str(name, data, "placeholder"),
        optional=_optional_bool(name, data, "optional"),
    )


def _parse_static(name: str, data: dict[str, Any]) -> StaticPathConfig:
    segments = data.get("segments")
    if segments is None:
        return StaticPathConfig(name=name)
    if isinstance(segments, str):
        segments = [segments]
    if not isinstance(segments, list) or not segments:
        msg = f"field {name!r}: 'segments' must be a non-empty list of strings"
        raise ConfigParseError(msg)
    for segment in segments:
        if not isinstance(segment, str):
            msg = (
                f"field {name!r}: segment must be a string, "
                f"got {type(segment).__name__}"
            )
            raise ConfigParseError(msg)
    return StaticPathConfig(name=name, segments=tuple(segments))


def _parse_typed_config(name: str, data: dict[str, Any]) -> TypedConfig:
    """Parse a field's 'type': a converter name or {name, config}."""
    if "type" not in data:
        msg = f"field {name!r} missing required field 'type'"
        raise ConfigParseError(msg)

    raw = data["type"]
    if isinstance(raw, str):
        return TypedConfig(name=raw)
    if not isinstance(raw, dict):
        msg = f"field {name!r}: 'type' must be a string or dict, got {type(raw).__name__}"
        raise ConfigParseError(msg)

    type_name = raw.get("name")
    if not isinstance(type_name, str):
        msg = f"field {name!r}: type 'name' must be a string"
        raise ConfigParseError(msg)

    config = raw.get("config", {})
    if not isinstance(config, dict):
        msg = f"field {name!r}: type 'config' must be a dict, got {type(config).__name__}"
        raise ConfigParseError(msg)

    return TypedConfig(name=type_name, config=config)


def _optional_str(name: str, data: dict[str, Any], attr: str) -> str | None:
    value = data.get(attr)
    if value is not None and not isinstance(value, str):
        msg = f"field {name!r}: {attr!r} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _optional_bool(name: str, data: dict[str, Any], attr: str) -> bool:
    value = data.get(attr, False)
    if not isinstance(value, bool):
        msg = f"field {name!r}: {attr!r} must be a boolean, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value
