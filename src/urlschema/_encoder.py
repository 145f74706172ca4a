"""Encoding engine — field states to URL parts.

Fields are processed in schema order under one of two strategies:

- EMBED_VALUE renders each bound value (recomputing query defaults for
  fields that were never set)
- PLACEHOLDER ignores values and emits ``:<name>`` or the custom
  placeholder, producing a route template

StaticPath fields emit their literals under both strategies. A value whose
converter renders None is suppressed: no path segment, no query key.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from urlschema._definition import DynamicPath, Query, StaticPath
from urlschema._errors import InvalidStateError, NoValueError, URLCodingError
from urlschema._state import Bound

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from urlschema._schema import Schema
    from urlschema._state import FieldState

logger = logging.getLogger(__name__)


class EncodingStrategy(enum.Enum):
    """What the encoder writes for dynamic path and query fields."""

    EMBED_VALUE = "embed_value"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True, slots=True)
class EncodedURL:
    """Path components in emission order plus the query parameters.

    Unpacks as a pair: ``path, query = record.encode()``.
    """

    path_components: tuple[str, ...] = ()
    query_parameters: dict[str, str] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Any]:
        return iter((self.path_components, self.query_parameters))


def encode_fields(
    schema: Schema,
    states: Mapping[str, FieldState],
    strategy: EncodingStrategy = EncodingStrategy.EMBED_VALUE,
) -> EncodedURL:
    """Render field states into path components and query parameters.

    A field missing from ``states`` counts as never set. For duplicate query
    keys, the last field in declaration order wins.

    Raises:
        NoValueError: A dynamic path field is unset, or an unset query
            field has neither an optional value type nor a default.
        InvalidStateError: A value or default does not fit its field's
            value type.
    """
    path: list[str] = []
    query: dict[str, str] = {}

    for f in schema.fields:
        state = states.get(f.name)
        try:
            _encode_field(f.name, f.definition, state, strategy, path, query)
        except URLCodingError as e:
            logger.debug("encoding field %r failed: %s", f.name, e)
            raise

    return EncodedURL(tuple(path), query)


def _encode_field(
    name: str,
    definition: Any,
    state: FieldState | None,
    strategy: EncodingStrategy,
    path: list[str],
    query: dict[str, str],
) -> None:
    match definition:
        case StaticPath():
            path.extend(definition.segments_for(name))
        case DynamicPath(converter=converter):
            if strategy is EncodingStrategy.PLACEHOLDER:
                path.append(definition.placeholder_for(name))
                return
            if not isinstance(state, Bound):
                raise NoValueError(name)
            rendered = converter.try_render(_checked(name, converter, state.value))
            if rendered is not None:
                path.append(rendered)
        case Query(converter=converter):
            key = definition.key_for(name)
            if strategy is EncodingStrategy.PLACEHOLDER:
                query[key] = definition.placeholder_for(name)
                return
            if isinstance(state, Bound):
                value = _checked(name, converter, state.value)
            else:
                value = definition.resolve_default(key)
            rendered = converter.try_render(value)
            if rendered is not None:
                query[key] = rendered
        case _:  # pragma: no cover
            msg = f"unknown definition type for {name!r}: {type(definition).__name__}"
            raise InvalidStateError(msg)


def _checked(name: str, converter: Any, value: Any) -> Any:
    if not converter.accepts(value):
        msg = f"value {value!r} for {name!r} does not fit its value type"
        raise InvalidStateError(msg)
    return value
