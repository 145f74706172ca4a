"""Test utilities for urlschema.

Provides a dict-backed query lookup for use in tests and examples. It
exists to reduce boilerplate when exploring urlschema without a real URL
or request object.

For real requests, use urlschema.http.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DictQuery:
    """Query lookup backed by a dict, recording which keys were asked for.

    The simplest possible QueryLookup. Useful in tests and for checking
    that decoding only asks for the keys a schema declares.

    >>> from urlschema import SchemaBuilder
    >>> q = DictQuery({"limit": "5", "other": "x"})
    >>> SchemaBuilder().query("limit", int).build().decode([], q)
    {'limit': 5}
    >>> q.requested
    ['limit']
    """

    values: dict[str, str] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list, compare=False)

    def __call__(self, key: str, /) -> str | None:
        self.requested.append(key)
        return self.values.get(key)
