"""HttpRequest — raw request line context for decoding.

Holds method, raw path (may include the query string) and headers, and
splits the raw path into percent-decoded path components and query
parameters the way a server sees them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar
from urllib.parse import unquote, unquote_plus

if TYPE_CHECKING:
    from urlschema._record import Record

R = TypeVar("R", bound="Record")


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """HTTP request context for decoding.

    The path should be provided as-is from the wire (may include query string).
    Query parameters are parsed and percent-decoded; for a repeated key the
    last occurrence wins. Empty path segments (``//``, trailing ``/``) are
    dropped from path_components.

    Headers are stored with lowercased keys for case-insensitive lookup.
    """

    method: str = "GET"
    raw_path: str = "/"
    headers: dict[str, str] = field(default_factory=dict)

    # Computed fields — parsed from raw_path
    _clean_path: str = field(init=False, repr=False)
    _path_components: tuple[str, ...] = field(init=False, repr=False)
    _query_params: dict[str, str] = field(init=False, repr=False)
    _lower_headers: dict[str, str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        path, _, query_string = self.raw_path.partition("?")
        params: dict[str, str] = {}
        for part in query_string.split("&"):
            if "=" in part:
                k, v = part.split("=", 1)
                params[unquote_plus(k)] = unquote_plus(v)
            elif part:
                params[unquote_plus(part)] = ""
        object.__setattr__(self, "_clean_path", path)
        object.__setattr__(self, "_query_params", params)
        object.__setattr__(
            self,
            "_path_components",
            tuple(unquote(segment) for segment in path.split("/") if segment),
        )

        # Lowercase header keys for case-insensitive lookup
        object.__setattr__(
            self,
            "_lower_headers",
            {k.lower(): v for k, v in self.headers.items()},
        )

    @property
    def path(self) -> str:
        """Path without query string (still percent-encoded)."""
        return self._clean_path

    @property
    def path_components(self) -> tuple[str, ...]:
        """Decoded, non-empty path segments."""
        return self._path_components

    @property
    def query_params(self) -> dict[str, str]:
        """Parsed query parameters."""
        return self._query_params

    def header(self, name: str) -> str | None:
        """Get a header value by name (case-insensitive)."""
        return self._lower_headers.get(name.lower())

    def query_param(self, name: str) -> str | None:
        """Get a query parameter by name."""
        return self._query_params.get(name)


def decode_request(record_type: type[R], request: HttpRequest) -> R:
    """Decode a record from an incoming request's path and query string.

    Raises:
        DecodingError: The request path does not fit the record.
    """
    return record_type.decode(request.path_components, request.query_param)

