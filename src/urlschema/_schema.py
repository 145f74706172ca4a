"""Schema — the ordered list of fields shared by both engines.

Declaration order is load-bearing for path fields: the decoder consumes and
the encoder emits path segments in that order. Query fields are addressed
by key and their position does not matter.

Example::

    schema = (
        SchemaBuilder()
        .static("users")
        .dynamic("id", int)
        .query("active", bool, default=True)
        .build()
    )
    schema.decode(["users", "42"], {"active": "false"})
    # {'users': None, 'id': 42, 'active': False}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from urlschema._decoder import decode_fields
from urlschema._definition import DynamicPath, Query, StaticPath
from urlschema._encoder import EncodedURL, EncodingStrategy, encode_fields
from urlschema._errors import InvalidStateError, SchemaError
from urlschema._state import Bound

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from urlschema._definition import Definition
    from urlschema._types import QueryLookup


@dataclass(frozen=True, slots=True)
class SchemaField:
    """A named field and its definition."""

    name: str
    definition: Definition


@dataclass(frozen=True, slots=True)
class Schema:
    """Immutable, ordered collection of fields.

    Field names are unique. Construct directly, via SchemaBuilder, from a
    Record subclass, or from config via Registry.load_schema().
    """

    fields: tuple[SchemaField, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for f in self.fields:
            if not f.name:
                msg = "field names must be non-empty"
                raise SchemaError(msg)
            if f.name in seen:
                msg = f"duplicate field name: {f.name!r}"
                raise SchemaError(msg)
            if not isinstance(f.definition, (StaticPath, DynamicPath, Query)):
                msg = f"field {f.name!r} has no URL definition: {f.definition!r}"
                raise SchemaError(msg)
            seen.add(f.name)

    def __iter__(self) -> Iterator[SchemaField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def names(self) -> list[str]:
        """Field names in declaration order."""
        return [f.name for f in self.fields]

    def definition(self, name: str) -> Definition:
        """Look up a field's definition by name.

        Raises:
            KeyError: If the schema has no such field.
        """
        for f in self.fields:
            if f.name == name:
                return f.definition
        raise KeyError(name)

    def decode(
        self,
        path_components: Sequence[str],
        query_parameter: QueryLookup | Mapping[str, str],
    ) -> dict[str, Any]:
        """Decode URL parts into a dict of field values (see decode_fields)."""
        return decode_fields(self, path_components, query_parameter)

    def encode(
        self,
        values: Mapping[str, Any],
        strategy: EncodingStrategy = EncodingStrategy.EMBED_VALUE,
    ) -> EncodedURL:
        """Encode field values into URL parts.

        Fields missing from ``values`` are treated as never set.

        Raises:
            InvalidStateError: If ``values`` names a field the schema lacks.
        """
        known = set(self.names())
        for name in values:
            if name not in known:
                msg = f"unknown field {name!r}"
                raise InvalidStateError(msg)
        states = {name: Bound(value) for name, value in values.items()}
        return encode_fields(self, states, strategy)


class SchemaBuilder:
    """Builder for constructing a Schema one field at a time.

    Each method appends a field and returns the builder, so calls chain.
    build() freezes the result.
    """

    def __init__(self) -> None:
        self._fields: list[SchemaField] = []

    def field(self, name: str, definition: Definition) -> SchemaBuilder:
        """Append a field with an existing definition."""
        self._fields.append(SchemaField(name, definition))
        return self

    def static(self, name: str, *segments: str) -> SchemaBuilder:
        """Append a StaticPath field (segments default to the name)."""
        return self.field(name, StaticPath(*segments))

    def dynamic(
        self, name: str, value_type: Any, placeholder: str | None = None
    ) -> SchemaBuilder:
        """Append a DynamicPath field."""
        return self.field(name, DynamicPath(value_type, placeholder))

    def query(
        self,
        name: str,
        value_type: Any,
        key: str | None = None,
        default: Any = None,
        placeholder: str | None = None,
    ) -> SchemaBuilder:
        """Append a Query field."""
        return self.field(
            name,
            Query(value_type, key=key, default=default, placeholder=placeholder),
        )

    def build(self) -> Schema:
        """Freeze the schema.

        Raises:
            SchemaError: On duplicate or empty field names.
        """
        return Schema(tuple(self._fields))
