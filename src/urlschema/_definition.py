"""Definition model — how one record field maps onto a URL.

StaticPath consumes fixed literal path segments, DynamicPath consumes one
path segment as a typed value, Query reads one query parameter.

Definitions describe structure only; they never hold a runtime value. The
Definition union type is pattern-matchable via match/case.

Every "fallback to the field name" rule lives here so the decoder and the
encoder agree on keys, literals and placeholders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

from urlschema._converters import OptionalConverter, resolve_converter
from urlschema._errors import InvalidStateError, NoValueError, SchemaError


@dataclass(frozen=True, slots=True, init=False)
class StaticPath:
    """Fixed literal path segments.

    With no segments, the field name itself is the single expected segment.

        users = StaticPath()             # matches /users
        api = StaticPath("api", "v1")    # matches /api/v1
    """

    expected: tuple[str, ...] | None

    def __init__(self, *expected: str) -> None:
        for segment in expected:
            if not isinstance(segment, str):
                msg = f"static path segments must be strings, got {segment!r}"
                raise SchemaError(msg)
        object.__setattr__(self, "expected", tuple(expected) or None)

    def segments_for(self, name: str) -> tuple[str, ...]:
        return self.expected if self.expected is not None else (name,)


@dataclass(frozen=True, slots=True)
class DynamicPath:
    """One path segment converted to a typed value.

    value_type is a Converter or a type understood by converter_for().
    The placeholder defaults to ``:<field name>``.
    """

    value_type: Any
    placeholder: str | None = None
    converter: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "converter", resolve_converter(self.value_type))

    def placeholder_for(self, name: str) -> str:
        return self.placeholder if self.placeholder is not None else f":{name}"


@dataclass(frozen=True, slots=True)
class Query:
    """A query parameter converted to a typed value.

    The key defaults to the field name and the placeholder to
    ``:<field name>``. When the parameter is absent, an optional value type
    yields None, otherwise the default is used; with neither the value is
    required.
    """

    value_type: Any
    key: str | None = None
    default: Any = None
    placeholder: str | None = None
    converter: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "converter", resolve_converter(self.value_type))

    @property
    def optional(self) -> bool:
        return isinstance(self.converter, OptionalConverter)

    def key_for(self, name: str) -> str:
        return self.key if self.key is not None else name

    def placeholder_for(self, name: str) -> str:
        return self.placeholder if self.placeholder is not None else f":{name}"

    def resolve_default(self, key: str) -> Any:
        """Value used when the parameter is absent or the field was never set.

        Raises:
            NoValueError: The value is required and there is no default.
            InvalidStateError: The default does not fit the value type.
        """
        if self.optional:
            return None
        if self.default is None:
            raise NoValueError(key)
        if not self.converter.accepts(self.default):
            msg = (
                f"default {self.default!r} for {key!r} is not a valid "
                f"{getattr(self.converter.value_type, '__name__', self.converter.value_type)}"
            )
            raise InvalidStateError(msg)
        return self.default


# Union type — one per declared field.
Definition: TypeAlias = StaticPath | DynamicPath | Query
