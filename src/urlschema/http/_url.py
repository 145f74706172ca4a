"""Full-URL glue over ``yarl``.

The engines work on path components and query maps only. These helpers
split a URL into those parts for decoding, and assemble parts onto a base
URL after encoding (percent-encoding happens here, never in the engines).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar
from urllib.parse import quote

from yarl import URL

from urlschema._encoder import EncodingStrategy
from urlschema._errors import URLParseError

if TYPE_CHECKING:
    from urlschema._record import Record
    from urlschema._types import QueryLookup

R = TypeVar("R", bound="Record")

# RFC 3986 pchar minus the unreserved set, which quote() never escapes.
_PATH_SAFE = "!$&'()*+,;=:@"


def split_url(url: str | URL) -> tuple[tuple[str, ...], QueryLookup]:
    """Split a URL into decoded path components and a query lookup.

    The leading root is dropped, as are empty segments. For a repeated
    query key the last value wins.

    Raises:
        URLParseError: The string is not a valid URL.
    """
    try:
        parsed = url if isinstance(url, URL) else URL(url)
    except (TypeError, ValueError) as e:
        raise URLParseError(str(url), str(e)) from e

    parts = parsed.parts
    if parts and parts[0] == "/":
        parts = parts[1:]
    components = tuple(p for p in parts if p)

    query = parsed.query

    def lookup(key: str) -> str | None:
        values = query.getall(key, [])
        return values[-1] if values else None

    return components, lookup


def decode_url(record_type: type[R], url: str | URL) -> R:
    """Decode a record from a URL's path and query.

    Raises:
        URLParseError: The string is not a valid URL.
        DecodingError: The URL does not fit the record.
    """
    components, lookup = split_url(url)
    return record_type.decode(components, lookup)


def encode_url(
    record: Record,
    base_url: str | URL,
    strategy: EncodingStrategy = EncodingStrategy.EMBED_VALUE,
) -> URL:
    """Encode a record onto a base URL.

    The record replaces the base URL's path and query; scheme, credentials,
    host and port are kept.

    Raises:
        URLParseError: The base URL is not a valid absolute URL.
        NoValueError: A required field was never given a value.
    """
    try:
        base = base_url if isinstance(base_url, URL) else URL(base_url)
    except (TypeError, ValueError) as e:
        raise URLParseError(str(base_url), str(e)) from e
    if not base.is_absolute():
        raise URLParseError(str(base_url), "base URL must be absolute")

    path, query = record.encode(strategy)
    encoded = "/" + "/".join(quote(p, safe=_PATH_SAFE) for p in path)
    return base.with_path(encoded, encoded=True).with_query(query or None)


def route_template(record_type: type[Record], prefix: str = "") -> str:
    """Render a record's placeholder encoding as a route string.

    ``/users/:id?active=:active``. Nothing is percent-encoded, so the
    result is meant for route tables and documentation, not for requests.
    """
    path, query = record_type.placeholders()
    route = prefix.rstrip("/") + "/" + "/".join(path)
    if query:
        route += "?" + "&".join(f"{k}={v}" for k, v in query.items())
    return route
