"""Error types for URL decoding and encoding.

Every error is terminal for the decode/encode call that raised it; the
engines never return a partially populated record.

- DecodingError and its subclasses describe bad input (a URL that does not
  fit the schema). An HTTP layer maps them to a 4xx rejection.
- InvalidStateError and SchemaError describe misuse of the schema machinery
  and should be treated as programming errors.
"""

from __future__ import annotations

from typing import Any


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or str(value_type)


class URLCodingError(Exception):
    """Base class for all urlschema errors."""


# ═══════════════════════════════════════════════════════════════════════════════
# Decode errors (bad input)
# ═══════════════════════════════════════════════════════════════════════════════


class DecodingError(URLCodingError):
    """The URL does not fit the schema."""


class MissingStaticPathError(DecodingError):
    """The path ran out before an expected literal segment."""

    def __init__(self, expected: str) -> None:
        self.expected = expected
        super().__init__(f"missing static path component {expected!r}")


class StaticPathMismatchError(DecodingError):
    """A literal segment was present but had the wrong value."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"static path mismatch: expected {expected!r}, got {actual!r}"
        )


class MissingDynamicPathError(DecodingError):
    """The path ran out where a typed segment was required."""

    def __init__(self, value_type: Any, key: str) -> None:
        self.value_type = value_type
        self.key = key
        super().__init__(
            f"missing dynamic path component for {key!r} "
            f"(expected {_type_name(value_type)})"
        )


class InvalidDynamicPathValueError(DecodingError):
    """A path segment could not be converted to the field's value type."""

    def __init__(self, raw: str, value_type: Any, key: str) -> None:
        self.raw = raw
        self.value_type = value_type
        self.key = key
        super().__init__(
            f"invalid path component {raw!r} for {key!r}: "
            f"not a valid {_type_name(value_type)}"
        )


class InvalidQueryValueError(DecodingError):
    """A query value could not be converted to the field's value type."""

    def __init__(self, raw: str, key: str) -> None:
        self.raw = raw
        self.key = key
        super().__init__(f"invalid query value {raw!r} for key {key!r}")


class NoValueError(DecodingError):
    """A required value is absent and no default or optional fallback applies.

    Raised by decoding for a missing required query parameter, and by
    encoding for a field that was never given a value.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"no value for {key!r}")


# ═══════════════════════════════════════════════════════════════════════════════
# Programming errors
# ═══════════════════════════════════════════════════════════════════════════════


class InvalidStateError(URLCodingError):
    """Internal contract violation (e.g. reading a field that was never bound)."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"invalid state: {description}")


class SchemaError(URLCodingError):
    """A schema declaration is invalid."""


class UnknownConverterError(SchemaError):
    """A converter name was not found in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown converter: {name!r} (registered: {registered})"
        else:
            msg = f"unknown converter: {name!r} (no converters are registered)"
        super().__init__(msg)


class InvalidConfigError(SchemaError):
    """A schema config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class URLParseError(URLCodingError):
    """A URL could not be split into path components and query parameters."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"cannot use URL {url!r}: {reason}")
