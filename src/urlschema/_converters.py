"""Concrete converters implementing the Converter protocol.

Each converter is a frozen dataclass, immutable after construction and
shared by every definition that uses it. try_convert returns None for
strings that are not a valid value; try_render returns None only where a
value should vanish from the URL (an absent optional).

Numeric syntax is validated with ``google-re2`` full matches before the
string reaches ``int()``/``float()``, which would otherwise accept
whitespace, underscores and other spellings that do not round-trip.
"""

from __future__ import annotations

import enum
import functools
import math
import struct
import types
import typing
from dataclasses import dataclass, field
from typing import Any

import re2

from urlschema._errors import SchemaError
from urlschema._types import Converter, URLComponent

_SIGNED_INT = re2.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re2.compile(r"\+?[0-9]+")
_FLOAT = re2.compile(
    r"(?i)[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?|inf|infinity|nan)"
)


@dataclass(frozen=True, slots=True)
class StringConverter:
    """Identity conversion."""

    @property
    def value_type(self) -> type[str]:
        return str

    def try_convert(self, raw: str, /) -> str | None:
        return raw

    def try_render(self, value: str, /) -> str | None:
        return value

    def accepts(self, value: Any, /) -> bool:
        return isinstance(value, str)


@dataclass(frozen=True, slots=True)
class BoolConverter:
    """Booleans spelled exactly ``true`` or ``false``."""

    @property
    def value_type(self) -> type[bool]:
        return bool

    def try_convert(self, raw: str, /) -> bool | None:
        if raw == "true":
            return True
        if raw == "false":
            return False
        return None

    def try_render(self, value: bool, /) -> str | None:
        return "true" if value else "false"

    def accepts(self, value: Any, /) -> bool:
        return isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class IntConverter:
    """Fixed-width integers.

    Accepts an optional sign followed by ASCII digits. Values outside the
    range of the width are rejected rather than wrapped. Unsigned widths do
    not accept a leading minus sign, not even for zero.
    """

    bits: int = 64
    signed: bool = True
    _min: int = field(init=False, repr=False)
    _max: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.bits not in (8, 16, 32, 64):
            msg = f"unsupported integer width: {self.bits}"
            raise SchemaError(msg)
        if self.signed:
            bounds = (-(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1)
        else:
            bounds = (0, (1 << self.bits) - 1)
        object.__setattr__(self, "_min", bounds[0])
        object.__setattr__(self, "_max", bounds[1])

    @property
    def value_type(self) -> type[int]:
        return int

    def try_convert(self, raw: str, /) -> int | None:
        pattern = _SIGNED_INT if self.signed else _UNSIGNED_INT
        if pattern.fullmatch(raw) is None:
            return None
        value = int(raw)
        if not self._min <= value <= self._max:
            return None
        return value

    def try_render(self, value: int, /) -> str | None:
        return str(value)

    def accepts(self, value: Any, /) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and self._min <= value <= self._max
        )


@dataclass(frozen=True, slots=True)
class FloatConverter:
    """IEEE floating point at single (32) or double (64) precision.

    Single-precision values are rounded on the way in and rendered as the
    shortest text that reads back to the same single-precision value.
    """

    bits: int = 64

    def __post_init__(self) -> None:
        if self.bits not in (32, 64):
            msg = f"unsupported float width: {self.bits}"
            raise SchemaError(msg)

    @property
    def value_type(self) -> type[float]:
        return float

    def try_convert(self, raw: str, /) -> float | None:
        if _FLOAT.fullmatch(raw) is None:
            return None
        value = float(raw)
        if self.bits == 32:
            return _to_float32(value)
        return value

    def try_render(self, value: float, /) -> str | None:
        if self.bits == 32 and math.isfinite(value):
            return _shortest_float32(value)
        return repr(float(value))

    def accepts(self, value: Any, /) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        # Out of single-precision range
        return math.copysign(math.inf, value)


def _shortest_float32(value: float) -> str:
    target = _to_float32(value)
    for digits in range(1, 10):
        text = f"{target:.{digits}g}"
        if _to_float32(float(text)) == target:
            break
    if not any(c in text for c in ".en"):
        text += ".0"
    return text


@dataclass(frozen=True, slots=True)
class EnumConverter:
    """Enum members addressed by their value.

    The member values must all share one convertible type; conversion goes
    through that type's converter first, then through the enum lookup.
    """

    enum_type: type[enum.Enum]
    raw: Any = None

    def __post_init__(self) -> None:
        if self.raw is not None:
            return
        value_types = {type(member.value) for member in self.enum_type}
        if len(value_types) != 1:
            msg = (
                f"enum {self.enum_type.__name__} needs members of a single "
                f"value type, got {sorted(t.__name__ for t in value_types)}"
            )
            raise SchemaError(msg)
        object.__setattr__(self, "raw", converter_for(value_types.pop()))

    @property
    def value_type(self) -> type[enum.Enum]:
        return self.enum_type

    def try_convert(self, raw: str, /) -> enum.Enum | None:
        value = self.raw.try_convert(raw)
        if value is None:
            return None
        try:
            return self.enum_type(value)
        except ValueError:
            return None

    def try_render(self, value: enum.Enum, /) -> str | None:
        return self.raw.try_render(value.value)

    def accepts(self, value: Any, /) -> bool:
        return isinstance(value, self.enum_type)


@dataclass(frozen=True, slots=True)
class ComponentConverter:
    """Delegates to a class implementing the URLComponent protocol."""

    component_type: type[URLComponent]

    @property
    def value_type(self) -> type[URLComponent]:
        return self.component_type

    def try_convert(self, raw: str, /) -> URLComponent | None:
        return self.component_type.from_url_component(raw)

    def try_render(self, value: URLComponent, /) -> str | None:
        return value.to_url_component()

    def accepts(self, value: Any, /) -> bool:
        return isinstance(value, self.component_type)


@dataclass(frozen=True, slots=True)
class OptionalConverter:
    """Wraps another converter to allow an absent (None) value.

    Parsing delegates to the inner converter, so a malformed string is still
    a conversion failure. Rendering None suppresses the value.
    """

    inner: Any

    @property
    def value_type(self) -> Any:
        return self.inner.value_type | None

    def try_convert(self, raw: str, /) -> Any:
        return self.inner.try_convert(raw)

    def try_render(self, value: Any, /) -> str | None:
        if value is None:
            return None
        return self.inner.try_render(value)

    def accepts(self, value: Any, /) -> bool:
        return value is None or self.inner.accepts(value)


STRING = StringConverter()
BOOL = BoolConverter()
INT = IntConverter(64)
INT8 = IntConverter(8)
INT16 = IntConverter(16)
INT32 = IntConverter(32)
INT64 = INT
UINT = IntConverter(64, signed=False)
UINT8 = IntConverter(8, signed=False)
UINT16 = IntConverter(16, signed=False)
UINT32 = IntConverter(32, signed=False)
UINT64 = UINT
FLOAT = FloatConverter(32)
DOUBLE = FloatConverter(64)

_BUILTIN_CONVERTERS: dict[Any, Any] = {
    str: STRING,
    bool: BOOL,
    int: INT,
    float: DOUBLE,
}


@functools.cache
def converter_for(value_type: Any) -> Any:
    """Return the converter for a Python type or type expression.

    Supports str, bool, int (64-bit signed), float (double precision),
    Enum subclasses, URLComponent classes and ``X | None`` of any of these.
    The result is cached, so every field of the same type shares one
    converter instance.

    Raises:
        SchemaError: If the type has no URL representation.
    """
    if value_type in _BUILTIN_CONVERTERS:
        return _BUILTIN_CONVERTERS[value_type]

    if isinstance(value_type, types.UnionType) or typing.get_origin(value_type) is typing.Union:
        members = [t for t in typing.get_args(value_type) if t is not type(None)]
        if len(members) != 1 or len(typing.get_args(value_type)) != 2:
            msg = f"only 'X | None' unions are supported, got {value_type!r}"
            raise SchemaError(msg)
        return OptionalConverter(converter_for(members[0]))

    if isinstance(value_type, type):
        if issubclass(value_type, enum.Enum):
            return EnumConverter(value_type)
        if issubclass(value_type, URLComponent):
            return ComponentConverter(value_type)

    msg = f"no URL converter for type {value_type!r}"
    raise SchemaError(msg)


def resolve_converter(value_type: Any) -> Any:
    """Accept either a ready converter instance or a type to look up."""
    if not isinstance(value_type, type) and isinstance(value_type, Converter):
        return value_type
    return converter_for(value_type)
