"""Core protocols and type aliases for urlschema.

- Converter is the per-value-type string conversion port used by both engines
- URLComponent lets a user type describe its own URL representation
- QueryLookup is the caller-supplied query parameter lookup
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, Self, TypeAlias, TypeVar, runtime_checkable

# Pure key -> value lookup. The engines only ask for keys they know about;
# they never enumerate the query.
QueryLookup: TypeAlias = Callable[[str], str | None]

T = TypeVar("T")


@runtime_checkable
class Converter(Protocol[T]):
    """Convert between a URL string and a typed value.

    try_convert returns None when the string is not a valid T.
    try_render returns None to suppress emission of the value entirely.

    For every value produced by try_convert, converting the rendered string
    again must give back an equal value.
    """

    @property
    def value_type(self) -> Any: ...

    def try_convert(self, raw: str, /) -> T | None: ...

    def try_render(self, value: T, /) -> str | None: ...

    def accepts(self, value: Any, /) -> bool: ...


@runtime_checkable
class URLComponent(Protocol):
    """A type that knows how to appear in a URL.

    >>> class Slug:
    ...     def __init__(self, text): self.text = text
    ...     @classmethod
    ...     def from_url_component(cls, raw): return cls(raw) if raw.isidentifier() else None
    ...     def to_url_component(self): return self.text
    """

    @classmethod
    def from_url_component(cls, raw: str, /) -> Self | None: ...

    def to_url_component(self) -> str | None: ...


def as_query_lookup(query: QueryLookup | Mapping[str, str]) -> QueryLookup:
    """Accept either a lookup function or a plain mapping of query values."""
    if isinstance(query, Mapping):
        return query.get
    return query
