"""Tests for urlschema config parsing (urlschema._config).

Validates the dict → config type conversion.
"""

import pytest

from urlschema import (
    ConfigParseError,
    DynamicPathConfig,
    QueryConfig,
    SchemaConfig,
    StaticPathConfig,
    TypedConfig,
    parse_schema_config,
)


class TestParseSchemaConfig:
    """Tests for parse_schema_config()."""

    def test_all_field_kinds(self) -> None:
        data = {
            "fields": [
                {"kind": "static", "name": "users"},
                {"kind": "dynamic", "name": "id", "type": "int"},
                {"kind": "query", "name": "active", "type": "bool", "default": True},
            ]
        }
        config = parse_schema_config(data)
        assert config == SchemaConfig(
            fields=(
                StaticPathConfig(name="users"),
                DynamicPathConfig(name="id", value_type=TypedConfig("int")),
                QueryConfig(name="active", value_type=TypedConfig("bool"), default=True),
            )
        )

    def test_empty_fields(self) -> None:
        assert parse_schema_config({"fields": []}).fields == ()

    def test_static_segments(self) -> None:
        config = parse_schema_config(
            {"fields": [{"kind": "static", "name": "api", "segments": ["api", "v1"]}]}
        )
        assert config.fields[0] == StaticPathConfig(name="api", segments=("api", "v1"))

    def test_static_single_segment_string(self) -> None:
        config = parse_schema_config(
            {"fields": [{"kind": "static", "name": "root", "segments": "users"}]}
        )
        assert config.fields[0].segments == ("users",)

    def test_typed_config_dict(self) -> None:
        config = parse_schema_config(
            {
                "fields": [
                    {
                        "kind": "query",
                        "name": "sort",
                        "type": {"name": "enum", "config": {"values": ["asc", "desc"]}},
                        "key": "order",
                        "placeholder": "{order}",
                        "optional": True,
                    }
                ]
            }
        )
        field = config.fields[0]
        assert isinstance(field, QueryConfig)
        assert field.value_type == TypedConfig("enum", {"values": ["asc", "desc"]})
        assert field.key == "order"
        assert field.placeholder == "{order}"
        assert field.optional is True

    def test_dynamic_placeholder_and_optional(self) -> None:
        config = parse_schema_config(
            {
                "fields": [
                    {
                        "kind": "dynamic",
                        "name": "page",
                        "type": "uint",
                        "placeholder": "{page}",
                        "optional": True,
                    }
                ]
            }
        )
        assert config.fields[0] == DynamicPathConfig(
            name="page", value_type=TypedConfig("uint"), placeholder="{page}", optional=True
        )


class TestParseErrors:
    def test_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="expected dict"):
            parse_schema_config([])

    def test_missing_fields(self) -> None:
        with pytest.raises(ConfigParseError, match="'fields'"):
            parse_schema_config({})

    def test_fields_not_a_list(self) -> None:
        with pytest.raises(ConfigParseError, match="must be a list"):
            parse_schema_config({"fields": {"kind": "static"}})

    def test_field_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="field must be a dict"):
            parse_schema_config({"fields": ["users"]})

    def test_missing_kind(self) -> None:
        with pytest.raises(ConfigParseError, match="'kind'"):
            parse_schema_config({"fields": [{"name": "users"}]})

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown field kind"):
            parse_schema_config({"fields": [{"kind": "header", "name": "x"}]})

    @pytest.mark.parametrize("name", [None, "", 5])
    def test_bad_name(self, name: object) -> None:
        with pytest.raises(ConfigParseError, match="non-empty 'name'"):
            parse_schema_config({"fields": [{"kind": "static", "name": name}]})

    def test_missing_type(self) -> None:
        with pytest.raises(ConfigParseError, match="'type'"):
            parse_schema_config({"fields": [{"kind": "dynamic", "name": "id"}]})

    def test_type_wrong_shape(self) -> None:
        with pytest.raises(ConfigParseError, match="string or dict"):
            parse_schema_config({"fields": [{"kind": "dynamic", "name": "id", "type": 3}]})

    def test_type_name_missing(self) -> None:
        with pytest.raises(ConfigParseError, match="type 'name'"):
            parse_schema_config(
                {"fields": [{"kind": "dynamic", "name": "id", "type": {"config": {}}}]}
            )

    def test_type_config_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="type 'config'"):
            parse_schema_config(
                {"fields": [{"kind": "query", "name": "q", "type": {"name": "enum", "config": []}}]}
            )

    def test_empty_segments(self) -> None:
        with pytest.raises(ConfigParseError, match="non-empty list"):
            parse_schema_config({"fields": [{"kind": "static", "name": "x", "segments": []}]})

    def test_non_string_segment(self) -> None:
        with pytest.raises(ConfigParseError, match="segment must be a string"):
            parse_schema_config({"fields": [{"kind": "static", "name": "x", "segments": [1]}]})

    def test_key_not_a_string(self) -> None:
        with pytest.raises(ConfigParseError, match="'key' must be a string"):
            parse_schema_config(
                {"fields": [{"kind": "query", "name": "q", "type": "string", "key": 1}]}
            )

    def test_optional_not_a_bool(self) -> None:
        with pytest.raises(ConfigParseError, match="'optional' must be a boolean"):
            parse_schema_config(
                {"fields": [{"kind": "query", "name": "q", "type": "string", "optional": "yes"}]}
            )
