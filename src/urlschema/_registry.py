"""Converter registry for config-driven schema construction.

The registry enables generic config loading: JSON/YAML config → Schema
without declaring a Record class.

- RegistryBuilder → .build() → Registry (immutable)
- Factories are plain callables: (config: dict) → Converter
- load_schema() walks a SchemaConfig and constructs definitions

Example::

    builder = register_core_converters(RegistryBuilder())
    builder.converter("slug", lambda cfg: ComponentConverter(Slug))
    registry = builder.build()

    config = parse_schema_config(yaml.safe_load(text))
    schema = registry.load_schema(config)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from urlschema._config import (
    DynamicPathConfig,
    QueryConfig,
    StaticPathConfig,
)
from urlschema._converters import (
    BOOL,
    DOUBLE,
    FLOAT,
    INT8,
    INT16,
    INT32,
    INT64,
    STRING,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    EnumConverter,
    OptionalConverter,
)
from urlschema._definition import DynamicPath, Query, StaticPath
from urlschema._errors import InvalidConfigError, SchemaError, UnknownConverterError
from urlschema._schema import Schema, SchemaField

if TYPE_CHECKING:
    from collections.abc import Callable

    from urlschema._config import FieldConfig, SchemaConfig, TypedConfig
    from urlschema._types import Converter

# Factory type alias
ConverterFactory: TypeAlias = "Callable[[dict[str, Any]], Converter[Any]]"


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register converter factories by name, then call build() to produce an
    immutable Registry. No registration after build.
    """

    def __init__(self) -> None:
        self._factories: dict[str, ConverterFactory] = {}

    def converter(self, name: str, factory: ConverterFactory) -> RegistryBuilder:
        """Register a converter factory under a name."""
        self._factories[name] = factory
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(_factories=MappingProxyType(dict(self._factories)))


def register_core_converters(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the built-in converters.

    Names: string, bool, int, int8, int16, int32, int64, uint, uint8,
    uint16, uint32, uint64, float, double, enum.
    """
    for name, converter in (
        ("string", STRING),
        ("bool", BOOL),
        ("int", INT64),
        ("int8", INT8),
        ("int16", INT16),
        ("int32", INT32),
        ("int64", INT64),
        ("uint", UINT64),
        ("uint8", UINT8),
        ("uint16", UINT16),
        ("uint32", UINT32),
        ("uint64", UINT64),
        ("float", FLOAT),
        ("double", DOUBLE),
    ):
        builder.converter(name, _constant(converter))
    return builder.converter("enum", _enum_factory)


def default_registry() -> Registry:
    """A registry holding only the built-in converters."""
    return register_core_converters(RegistryBuilder()).build()


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of converter factories.

    Constructed via RegistryBuilder. Use load_schema() to compile config
    into a runtime Schema.
    """

    _factories: MappingProxyType[str, ConverterFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_schema(self, config: SchemaConfig) -> Schema:
        """Load a Schema from configuration.

        Raises:
            UnknownConverterError: a field's type is not registered
            InvalidConfigError: a converter config or default is invalid
            SchemaError: duplicate field names
        """
        return Schema(tuple(self._load_field(f) for f in config.fields))

    @property
    def converter_count(self) -> int:
        """Number of registered converters."""
        return len(self._factories)

    def contains_converter(self, name: str) -> bool:
        """Check if a converter name is registered."""
        return name in self._factories

    def converter_names(self) -> list[str]:
        """Return all registered converter names (sorted)."""
        return sorted(self._factories.keys())

    def converter(self, config: TypedConfig) -> Converter[Any]:
        """Construct a converter from its typed config.

        Raises:
            UnknownConverterError: name not registered
            InvalidConfigError: the factory rejected the config
        """
        factory = self._factories.get(config.name)
        if factory is None:
            raise UnknownConverterError(config.name, list(self._factories.keys()))
        try:
            return factory(config.config)
        except Exception as e:
            raise InvalidConfigError(str(e)) from e

    # ── Private loading methods ────────────────────────────────────────────

    def _load_field(self, config: FieldConfig) -> SchemaField:
        match config:
            case StaticPathConfig(name=name, segments=segments):
                return SchemaField(name, StaticPath(*(segments or ())))
            case DynamicPathConfig(name=name):
                converter = self._field_converter(config.value_type, config.optional)
                return SchemaField(name, DynamicPath(converter, config.placeholder))
            case QueryConfig(name=name):
                converter = self._field_converter(config.value_type, config.optional)
                default = _load_default(name, converter, config.default)
                definition = Query(
                    converter,
                    key=config.key,
                    default=default,
                    placeholder=config.placeholder,
                )
                return SchemaField(name, definition)
            case _:  # pragma: no cover
                msg = f"unknown field config type: {type(config).__name__}"
                raise InvalidConfigError(msg)

    def _field_converter(self, config: TypedConfig, optional: bool) -> Converter[Any]:
        converter = self.converter(config)
        return OptionalConverter(converter) if optional else converter


def _load_default(name: str, converter: Converter[Any], default: Any) -> Any:
    """Convert string defaults through the converter and type-check the result."""
    if default is None:
        return None
    if isinstance(default, str) and not converter.accepts(default):
        converted = converter.try_convert(default)
        if converted is None:
            msg = f"default {default!r} for field {name!r} cannot be converted"
            raise InvalidConfigError(msg)
        default = converted
    if not converter.accepts(default):
        msg = f"default {default!r} for field {name!r} does not fit its type"
        raise InvalidConfigError(msg)
    return default


# ═══════════════════════════════════════════════════════════════════════════════
# Built-in factories
# ═══════════════════════════════════════════════════════════════════════════════


def _constant(converter: Converter[Any]) -> ConverterFactory:
    def factory(_config: dict[str, Any]) -> Converter[Any]:
        return converter

    return factory


def _enum_factory(config: dict[str, Any]) -> EnumConverter:
    values = config.get("values")
    if not isinstance(values, list) or not values:
        msg = "enum converter requires a non-empty 'values' list"
        raise ValueError(msg)
    name = config.get("name", "ConfigEnum")
    if not isinstance(name, str):
        msg = "enum converter 'name' must be a string"
        raise ValueError(msg)
    try:
        enum_type = enum.Enum(name, [(str(v), v) for v in values])
    except (TypeError, ValueError) as e:
        msg = f"invalid enum values {values!r}: {e}"
        raise ValueError(msg) from e
    try:
        return EnumConverter(enum_type)
    except SchemaError as e:
        raise ValueError(str(e)) from e
