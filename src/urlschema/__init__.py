"""urlschema — Declare a URL shape once, decode and encode typed records.

All public types are exported from this module for flat imports:

    from urlschema import Record, StaticPath, DynamicPath, Query
"""

__version__ = "0.1.0"

# Config types — see urlschema._config for details
from urlschema._config import (
    ConfigParseError,
    DynamicPathConfig,
    FieldConfig,
    QueryConfig,
    SchemaConfig,
    StaticPathConfig,
    TypedConfig,
    parse_schema_config,
)

# Converters
from urlschema._converters import (
    BOOL,
    DOUBLE,
    FLOAT,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    STRING,
    UINT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    BoolConverter,
    ComponentConverter,
    EnumConverter,
    FloatConverter,
    IntConverter,
    OptionalConverter,
    StringConverter,
    converter_for,
)

# Engines
from urlschema._decoder import PathCursor, decode_fields

# Definitions
from urlschema._definition import Definition, DynamicPath, Query, StaticPath
from urlschema._encoder import EncodedURL, EncodingStrategy, encode_fields

# Errors
from urlschema._errors import (
    DecodingError,
    InvalidConfigError,
    InvalidDynamicPathValueError,
    InvalidQueryValueError,
    InvalidStateError,
    MissingDynamicPathError,
    MissingStaticPathError,
    NoValueError,
    SchemaError,
    StaticPathMismatchError,
    UnknownConverterError,
    URLCodingError,
    URLParseError,
)
from urlschema._record import Record

# Registry — see urlschema._registry for details
from urlschema._registry import (
    Registry,
    RegistryBuilder,
    default_registry,
    register_core_converters,
)
from urlschema._schema import Schema, SchemaBuilder, SchemaField
from urlschema._state import Bound, FieldState, Pending
from urlschema._types import Converter, QueryLookup, URLComponent

__all__ = [
    # Protocols
    "Converter",
    "URLComponent",
    "QueryLookup",
    # Definitions
    "StaticPath",
    "DynamicPath",
    "Query",
    "Definition",
    # State
    "Pending",
    "Bound",
    "FieldState",
    # Schema
    "Schema",
    "SchemaField",
    "SchemaBuilder",
    "Record",
    # Engines
    "PathCursor",
    "decode_fields",
    "EncodedURL",
    "EncodingStrategy",
    "encode_fields",
    # Converters
    "StringConverter",
    "BoolConverter",
    "IntConverter",
    "FloatConverter",
    "EnumConverter",
    "ComponentConverter",
    "OptionalConverter",
    "converter_for",
    "STRING",
    "BOOL",
    "INT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "FLOAT",
    "DOUBLE",
    # Config types
    "TypedConfig",
    "StaticPathConfig",
    "DynamicPathConfig",
    "QueryConfig",
    "FieldConfig",
    "SchemaConfig",
    "ConfigParseError",
    "parse_schema_config",
    # Registry
    "RegistryBuilder",
    "Registry",
    "register_core_converters",
    "default_registry",
    # Errors
    "URLCodingError",
    "DecodingError",
    "MissingStaticPathError",
    "StaticPathMismatchError",
    "MissingDynamicPathError",
    "InvalidDynamicPathValueError",
    "InvalidQueryValueError",
    "NoValueError",
    "InvalidStateError",
    "SchemaError",
    "UnknownConverterError",
    "InvalidConfigError",
    "URLParseError",
]
