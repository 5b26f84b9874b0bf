"""Tests for logical-type classification and per-dialect rendering."""

import pytest

from ddlbridge.services.sql_conversion.converters.declarative.type_mapper import (
    LOGICAL_TYPES,
    RENDERERS,
    BooleanType,
    EnumType,
    IntegerType,
    TimestampType,
    TypeRenderer,
    VarcharType,
    classify,
    is_recognized_type,
    map_type,
    parse_enum_literals,
)
from ddlbridge.services.sql_conversion.errors import UnrecognizedType, UnsupportedDialect


class TestClassify:
    def test_integer_width(self) -> None:
        assert classify("INT", "11") == IntegerType(size="int", width=11)

    def test_tinyint_one_is_boolean(self) -> None:
        assert classify("tinyint", "1") == BooleanType()
        assert classify("tinyint", "4") == IntegerType(size="tiny", width=4)

    def test_serial(self) -> None:
        assert classify("bigserial") == IntegerType(size="big", serial=True)

    def test_multi_word_aliases(self) -> None:
        assert classify("character varying", "50") == VarcharType(length=50)
        assert classify("timestamp with time zone") == TimestampType(with_zone=True)

    def test_inline_length(self) -> None:
        assert classify("VARCHAR(40)") == VarcharType(length=40)

    def test_enum_literals_from_length(self) -> None:
        assert classify("enum", "'a','it''s'") == EnumType(values=("a", "it's"))

    def test_unknown_type(self) -> None:
        with pytest.raises(UnrecognizedType) as excinfo:
            classify("geometry")
        assert excinfo.value.type_name == "geometry"

    def test_is_recognized_type(self) -> None:
        assert is_recognized_type("NVARCHAR")
        assert is_recognized_type("jsonb")
        assert not is_recognized_type("geometry")

    def test_parse_enum_literals(self) -> None:
        assert parse_enum_literals("'x', 'yy'") == ("x", "yy")
        assert parse_enum_literals("") == ()


class TestEnumMapping:
    def test_sized_text_for_sqlite_and_pgsql(self) -> None:
        values = ["a", "bb", "ccc"]
        assert map_type("ENUM", "'a','bb','ccc'", "sqlite", values) == "NVARCHAR(5)"
        assert map_type("ENUM", "'a','bb','ccc'", "pgsql", values) == "CHARACTER VARYING(5)"

    def test_native_enum_for_mysql(self) -> None:
        assert map_type("ENUM", "'a','bb','ccc'", "mysql", ["a", "bb", "ccc"]) == "enum('a','bb','ccc')"

    def test_values_parsed_from_length_when_omitted(self) -> None:
        assert map_type("enum", "'x','yyyy'", "sqlite") == "NVARCHAR(6)"

    def test_set_maps_like_enum(self) -> None:
        assert map_type("set", "'r','w'", "mysql") == "set('r','w')"
        assert map_type("set", "'r','w'", "postgresql") == "CHARACTER VARYING(3)"


class TestDialectMapping:
    @pytest.mark.parametrize(
        "source,length,expected",
        [
            ("INTEGER", "", "INTEGER"),
            ("REAL", "", "REAL"),
            ("TEXT", "", "TEXT"),
            ("BLOB", "", "BLOB"),
            ("NVARCHAR", "255", "NVARCHAR(255)"),
            ("NVARCHAR", "", "NVARCHAR"),
        ],
    )
    def test_sqlite_native_types_are_stable(self, source: str, length: str, expected: str) -> None:
        assert map_type(source, length, "sqlite") == expected

    @pytest.mark.parametrize(
        "dialect,expected", [("mysql", "TINYINT(1)"), ("pgsql", "BOOLEAN"), ("sqlite", "INTEGER")]
    )
    def test_tinyint_one(self, dialect: str, expected: str) -> None:
        assert map_type("TINYINT", "1", dialect) == expected

    def test_integer_width_only_for_mysql(self) -> None:
        assert map_type("int", "11", "mysql") == "INT(11)"
        assert map_type("int", "11", "pgsql") == "INTEGER"
        assert map_type("int", "11", "sqlite") == "INTEGER"

    @pytest.mark.parametrize(
        "dialect,expected",
        [("mysql", "TIMESTAMP"), ("pgsql", "TIMESTAMP WITH TIME ZONE"), ("sqlite", "TEXT")],
    )
    def test_timestamptz(self, dialect: str, expected: str) -> None:
        assert map_type("timestamptz", "", dialect) == expected

    def test_datetime(self) -> None:
        assert map_type("DATETIME", "", "pgsql") == "TIMESTAMP WITHOUT TIME ZONE"
        assert map_type("DATETIME", "", "mysql") == "DATETIME"

    def test_decimal(self) -> None:
        assert map_type("decimal", "10,2", "mysql") == "DECIMAL(10,2)"
        assert map_type("numeric", "10,2", "pgsql") == "NUMERIC(10,2)"
        assert map_type("decimal", "10,2", "sqlite") == "REAL"

    def test_varchar(self) -> None:
        assert map_type("varchar", "255", "pgsql") == "CHARACTER VARYING(255)"
        assert map_type("character varying", "255", "mysql") == "VARCHAR(255)"
        assert map_type("varchar", "255", "sqlite") == "NVARCHAR(255)"

    def test_serial_types(self) -> None:
        assert map_type("bigserial", "", "pgsql") == "BIGSERIAL"
        assert map_type("serial", "", "pgsql") == "SERIAL"
        assert map_type("bigserial", "", "mysql") == "BIGINT"
        assert map_type("serial", "", "sqlite") == "INTEGER"

    def test_text_sizes(self) -> None:
        assert map_type("longtext", "", "mysql") == "LONGTEXT"
        assert map_type("longtext", "", "pgsql") == "TEXT"

    def test_document_and_identifier_types(self) -> None:
        assert map_type("json", "", "pgsql") == "JSONB"
        assert map_type("jsonb", "", "mysql") == "JSON"
        assert map_type("uuid", "", "mysql") == "CHAR(36)"
        assert map_type("bytea", "", "mysql") == "BLOB"
        assert map_type("mediumblob", "", "pgsql") == "BYTEA"

    def test_dialect_aliases(self) -> None:
        assert map_type("int", "", "mariadb") == map_type("int", "", "mysql")
        assert map_type("int", "", "postgres") == map_type("int", "", "pgsql")

    def test_unsupported_dialect(self) -> None:
        with pytest.raises(UnsupportedDialect):
            map_type("int", "", "oracle")

    def test_unknown_type(self) -> None:
        with pytest.raises(UnrecognizedType):
            map_type("geometry", "", "mysql")


class TestRenderers:
    @pytest.mark.parametrize("dialect", sorted(RENDERERS))
    def test_every_logical_type_renders(self, dialect: str) -> None:
        renderer = RENDERERS[dialect]
        for ltype in LOGICAL_TYPES:
            assert renderer.render(ltype())

    def test_incomplete_renderer_is_rejected(self) -> None:
        class PartialRenderer(TypeRenderer):
            def render_integer(self, t):
                return "INT"

        with pytest.raises(TypeError, match="no renderer for"):
            PartialRenderer()

    def test_incomplete_renderer_names_its_dialect(self) -> None:
        class HalfSqliteRenderer(TypeRenderer):
            dialect = "sqlite"

            def render_integer(self, t):
                return "INTEGER"

        with pytest.raises(TypeError, match=r"HalfSqliteRenderer \(sqlite\) has no renderer for: FloatType"):
            HalfSqliteRenderer()
