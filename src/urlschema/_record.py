"""Record — declare a URL shape once as a class, decode and encode with it.

Fields are declared as class attributes holding a Definition. Declaration
order is the order of the class body, and subclasses extend the parent's
fields (redeclaring a name replaces the definition but keeps its position).

Example::

    class ListUserRepos(Record):
        users = StaticPath()
        user_name = DynamicPath(str)
        repos = StaticPath()
        type = Query(RepoType | None)
        sort = Query(Sort, default=Sort.CREATED)

    r = ListUserRepos.decode(["users", "kate", "repos"], {"type": "all"})
    r.user_name            # 'kate'
    r.encode()             # EncodedURL(('users', 'kate', 'repos'), {'type': 'all', 'sort': 'created'})
    ListUserRepos.placeholders().path_components   # ('users', ':user_name', 'repos')

The schema is built once when the class is created and cached on the class
as ``__schema__``; it is never modified afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self

from urlschema._definition import DynamicPath, Query, StaticPath
from urlschema._encoder import EncodedURL, EncodingStrategy, encode_fields
from urlschema._errors import InvalidStateError, SchemaError
from urlschema._schema import Schema, SchemaField
from urlschema._state import Bound, Pending

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from urlschema._definition import Definition
    from urlschema._state import FieldState
    from urlschema._types import QueryLookup

_DEFINITION_TYPES = (StaticPath, DynamicPath, Query)


class _FieldSlot:
    """Descriptor standing in for a declared field on a Record class.

    Class access returns the Definition. Instance access returns the bound
    value and raises InvalidStateError while the field is still Pending.
    """

    __slots__ = ("name", "definition")

    def __init__(self, name: str, definition: Definition) -> None:
        self.name = name
        self.definition = definition

    def __get__(self, instance: Record | None, owner: type | None = None) -> Any:
        if instance is None:
            return self.definition
        match instance._states[self.name]:
            case Bound(value=value):
                return value
            case Pending():
                msg = f"field {self.name!r} of {type(instance).__name__} has no value yet"
                raise InvalidStateError(msg)

    def __set__(self, instance: Record, value: Any) -> None:
        if isinstance(self.definition, StaticPath):
            if value is not None:
                msg = f"static path field {self.name!r} carries no value"
                raise TypeError(msg)
        elif not self.definition.converter.accepts(value):
            msg = (
                f"{value!r} is not a valid value for field {self.name!r} "
                f"of {type(instance).__name__}"
            )
            raise TypeError(msg)
        instance._states[self.name] = Bound(value)

    def __delete__(self, instance: Record) -> None:
        if not isinstance(self.definition, StaticPath):
            instance._states[self.name] = Pending(self.definition)


class Record:
    """Base class for URL-shaped records.

    Construct with keyword values for any subset of the fields; the rest
    stay Pending. StaticPath fields carry no data and are always bound.
    """

    __slots__ = ("_states",)
    __schema__: ClassVar[Schema] = Schema()

    _states: dict[str, FieldState]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        definitions: dict[str, Definition] = {}
        for base in reversed(cls.__mro__[1:]):
            for name, value in vars(base).items():
                if isinstance(value, _FieldSlot):
                    definitions[name] = value.definition

        for name, value in list(vars(cls).items()):
            if not isinstance(value, _DEFINITION_TYPES):
                continue
            if name.startswith("_") or name in _RESERVED:
                msg = f"{cls.__name__}.{name} cannot be used as a field name"
                raise SchemaError(msg)
            definitions[name] = value
            setattr(cls, name, _FieldSlot(name, value))

        cls.__schema__ = Schema(
            tuple(SchemaField(name, d) for name, d in definitions.items())
        )

    def __init__(self, **values: Any) -> None:
        self._states = _initial_states(type(self).__schema__)
        for name, value in values.items():
            if name not in self._states:
                msg = f"{type(self).__name__}() got an unexpected field {name!r}"
                raise TypeError(msg)
            setattr(self, name, value)

    @classmethod
    def decode(
        cls,
        path_components: Sequence[str],
        query_parameter: QueryLookup | Mapping[str, str],
    ) -> Self:
        """Decode URL parts into a fully bound record.

        ``query_parameter`` is a lookup function or a mapping; it is only
        ever asked for the keys this record declares.

        Raises:
            DecodingError: The URL does not fit this record (see decode_fields).
            InvalidStateError: A declared default does not fit its value type.
        """
        values = cls.__schema__.decode(path_components, query_parameter)
        record = cls.__new__(cls)
        record._states = {name: Bound(value) for name, value in values.items()}
        return record

    def encode(
        self, strategy: EncodingStrategy = EncodingStrategy.EMBED_VALUE
    ) -> EncodedURL:
        """Encode this record into path components and query parameters.

        Raises:
            NoValueError: A required field was never given a value.
            InvalidStateError: A declared default does not fit its value type.
        """
        return encode_fields(type(self).__schema__, self._states, strategy)

    @classmethod
    def placeholders(cls) -> EncodedURL:
        """Route template of this record: every value replaced by its placeholder."""
        return encode_fields(cls.__schema__, {}, EncodingStrategy.PLACEHOLDER)

    def field_state(self, name: str) -> FieldState:
        """Current Pending/Bound state of a field.

        Raises:
            KeyError: If the record has no such field.
        """
        return self._states[name]

    def is_bound(self, name: str) -> bool:
        return isinstance(self.field_state(name), Bound)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record) or type(other) is not type(self):
            return NotImplemented
        return self._states == other._states

    def __repr__(self) -> str:
        parts = []
        for name, state in self._states.items():
            if isinstance(state, Bound):
                parts.append(f"{name}={state.value!r}")
            else:
                parts.append(f"{name}=<pending>")
        return f"{type(self).__name__}({', '.join(parts)})"


def _initial_states(schema: Schema) -> dict[str, FieldState]:
    states: dict[str, FieldState] = {}
    for f in schema.fields:
        if isinstance(f.definition, StaticPath):
            states[f.name] = Bound(None)
        else:
            states[f.name] = Pending(f.definition)
    return states


_RESERVED = frozenset(dir(Record))
