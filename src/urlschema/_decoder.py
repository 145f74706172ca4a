"""Decoding engine — URL parts to field values.

Fields are processed strictly in schema order:

- StaticPath pops its literal segments off the path cursor and checks them
- DynamicPath pops one segment and converts it
- Query looks up its key and converts it, falling back to None (optional
  value types) or the configured default

The path cursor is shared sequentially by all path fields, so swapping two
DynamicPath fields swaps which segment binds to which field. Query fields
never touch the cursor. Path components left over once every field is
bound are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from urlschema._definition import DynamicPath, Query, StaticPath
from urlschema._errors import (
    InvalidDynamicPathValueError,
    InvalidQueryValueError,
    InvalidStateError,
    MissingDynamicPathError,
    MissingStaticPathError,
    StaticPathMismatchError,
    URLCodingError,
)
from urlschema._types import as_query_lookup

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from urlschema._schema import Schema
    from urlschema._types import QueryLookup

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PathCursor:
    """Forward-only position in a sequence of path components."""

    components: tuple[str, ...]
    offset: int = field(default=0)

    def pop(self) -> str | None:
        """Consume and return the next component, or None when exhausted."""
        if self.offset >= len(self.components):
            return None
        component = self.components[self.offset]
        self.offset += 1
        return component

    @property
    def remaining(self) -> tuple[str, ...]:
        return self.components[self.offset :]


def decode_fields(
    schema: Schema,
    path_components: Sequence[str],
    query_parameter: QueryLookup | Mapping[str, str],
) -> dict[str, Any]:
    """Bind every field of the schema from URL parts.

    Returns a dict of field name to value in declaration order. StaticPath
    fields are bound to None.

    Raises:
        MissingStaticPathError: Path ran out before a literal segment.
        StaticPathMismatchError: A literal segment had the wrong value.
        MissingDynamicPathError: Path ran out before a typed segment.
        InvalidDynamicPathValueError: A typed segment failed conversion.
        InvalidQueryValueError: A query value failed conversion.
        NoValueError: A required query parameter is absent.
        InvalidStateError: A default does not fit its field's value type.
    """
    cursor = PathCursor(tuple(path_components))
    lookup = as_query_lookup(query_parameter)
    values: dict[str, Any] = {}

    for f in schema.fields:
        try:
            values[f.name] = _decode_field(f.name, f.definition, cursor, lookup)
        except URLCodingError as e:
            logger.debug("decoding field %r failed: %s", f.name, e)
            raise

    if cursor.remaining:
        logger.debug("ignoring trailing path components %r", cursor.remaining)
    return values


def _decode_field(
    name: str, definition: Any, cursor: PathCursor, lookup: QueryLookup
) -> Any:
    match definition:
        case StaticPath():
            _consume_static(definition.segments_for(name), cursor)
            return None
        case DynamicPath(converter=converter):
            raw = cursor.pop()
            if raw is None:
                raise MissingDynamicPathError(converter.value_type, name)
            value = converter.try_convert(raw)
            if value is None:
                raise InvalidDynamicPathValueError(raw, converter.value_type, name)
            return value
        case Query(converter=converter):
            key = definition.key_for(name)
            raw = lookup(key)
            if raw is None:
                return definition.resolve_default(key)
            value = converter.try_convert(raw)
            if value is None:
                raise InvalidQueryValueError(raw, key)
            return value
        case _:  # pragma: no cover
            msg = f"unknown definition type for {name!r}: {type(definition).__name__}"
            raise InvalidStateError(msg)


def _consume_static(expected: tuple[str, ...], cursor: PathCursor) -> None:
    for segment in expected:
        actual = cursor.pop()
        if actual is None:
            raise MissingStaticPathError(segment)
        if actual != segment:
            raise StaticPathMismatchError(segment, actual)
