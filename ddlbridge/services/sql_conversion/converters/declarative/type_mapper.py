"""
Cross-dialect column type mapping.

Source type keywords are first classified into a small set of dialect-neutral
logical types (``IntegerType``, ``VarcharType``, ``EnumType``, ...). Each target
dialect then supplies one render method per logical type. Renderers are checked
for completeness at import time, so a logical type can never silently fall
through to a generic default.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple, Type

from ...errors import UnrecognizedType
from ...utils.dialect_utils import MYSQL, PGSQL, SQLITE, resolve_dialect


# ---------------------------------------------------------------------------
# Logical types
# ---------------------------------------------------------------------------

class LogicalType:
    """Marker base for dialect-neutral column types."""


@dataclass(frozen=True)
class IntegerType(LogicalType):
    size: str = 'int'  # tiny | small | medium | int | big
    width: Optional[int] = None
    serial: bool = False


@dataclass(frozen=True)
class FloatType(LogicalType):
    double: bool = False


@dataclass(frozen=True)
class NumericType(LogicalType):
    precision: Optional[int] = None
    scale: Optional[int] = None


@dataclass(frozen=True)
class MoneyType(LogicalType):
    pass


@dataclass(frozen=True)
class BooleanType(LogicalType):
    pass


@dataclass(frozen=True)
class CharType(LogicalType):
    length: Optional[int] = None


@dataclass(frozen=True)
class VarcharType(LogicalType):
    length: Optional[int] = None


@dataclass(frozen=True)
class TextType(LogicalType):
    size: str = ''  # '' | tiny | medium | long


@dataclass(frozen=True)
class DateType(LogicalType):
    pass


@dataclass(frozen=True)
class TimeType(LogicalType):
    pass


@dataclass(frozen=True)
class DateTimeType(LogicalType):
    pass


@dataclass(frozen=True)
class TimestampType(LogicalType):
    with_zone: bool = False


@dataclass(frozen=True)
class YearType(LogicalType):
    pass


@dataclass(frozen=True)
class JsonType(LogicalType):
    binary: bool = False


@dataclass(frozen=True)
class UuidType(LogicalType):
    pass


@dataclass(frozen=True)
class BinaryType(LogicalType):
    size: str = ''  # '' | tiny | medium | long


@dataclass(frozen=True)
class BitType(LogicalType):
    length: Optional[int] = None


@dataclass(frozen=True)
class EnumType(LogicalType):
    values: Tuple[str, ...] = ()
    is_set: bool = False

    @property
    def max_length(self) -> int:
        return max((len(v) for v in self.values), default=0)


LOGICAL_TYPES: Tuple[Type[LogicalType], ...] = (
    IntegerType, FloatType, NumericType, MoneyType, BooleanType, CharType,
    VarcharType, TextType, DateType, TimeType, DateTimeType, TimestampType,
    YearType, JsonType, UuidType, BinaryType, BitType, EnumType,
)


# ---------------------------------------------------------------------------
# Classification: source keyword -> logical type
# ---------------------------------------------------------------------------

_ENUM_LITERAL_RX = re.compile(r"'((?:[^']|'')*)'")
_MULTIWORD_ALIASES = {
    'double precision': 'double',
    'character varying': 'varchar',
    'timestamp with time zone': 'timestamptz',
    'timestamp without time zone': 'timestamp',
    'time with time zone': 'time',
    'time without time zone': 'time',
}


def _positive_int(text: str) -> Optional[int]:
    text = (text or '').strip()
    if text.isdigit() and int(text) > 0:
        return int(text)
    return None


def _precision_scale(text: str) -> Tuple[Optional[int], Optional[int]]:
    parts = [p.strip() for p in (text or '').split(',')]
    precision = _positive_int(parts[0]) if parts else None
    scale = None
    if precision is not None and len(parts) > 1 and parts[1].isdigit():
        scale = int(parts[1])
    return precision, scale


def parse_enum_literals(length: str) -> Tuple[str, ...]:
    """Extract the quoted literals of an ENUM/SET argument list."""
    return tuple(m.replace("''", "'") for m in _ENUM_LITERAL_RX.findall(length or ''))


def _integer(size: str, serial: bool = False) -> Callable[[str, Optional[Sequence[str]]], LogicalType]:
    def build(length, _values):
        return IntegerType(size=size, width=None if serial else _positive_int(length), serial=serial)
    return build


def _tinyint(length, _values) -> LogicalType:
    # TINYINT(1) is MySQL's boolean spelling.
    if _positive_int(length) == 1:
        return BooleanType()
    return IntegerType(size='tiny', width=_positive_int(length))


def _enum(is_set: bool) -> Callable[[str, Optional[Sequence[str]]], LogicalType]:
    def build(length, values):
        if values is None:
            values = parse_enum_literals(length)
        return EnumType(values=tuple(values), is_set=is_set)
    return build


def _numeric(length, _values) -> LogicalType:
    precision, scale = _precision_scale(length)
    return NumericType(precision=precision, scale=scale)


_SOURCE_TYPES: Dict[str, Callable[[str, Optional[Sequence[str]]], LogicalType]] = {
    # serial variants
    'serial': _integer('int', serial=True),
    'serial4': _integer('int', serial=True),
    'smallserial': _integer('small', serial=True),
    'serial2': _integer('small', serial=True),
    'bigserial': _integer('big', serial=True),
    'serial8': _integer('big', serial=True),
    # integer variants
    'tinyint': _tinyint,
    'smallint': _integer('small'),
    'int2': _integer('small'),
    'mediumint': _integer('medium'),
    'int': _integer('int'),
    'integer': _integer('int'),
    'int4': _integer('int'),
    'bigint': _integer('big'),
    'int8': _integer('big'),
    # numeric
    'real': lambda length, values: FloatType(double=False),
    'float': lambda length, values: FloatType(double=False),
    'float4': lambda length, values: FloatType(double=False),
    'double': lambda length, values: FloatType(double=True),
    'float8': lambda length, values: FloatType(double=True),
    'decimal': _numeric,
    'numeric': _numeric,
    'money': lambda length, values: MoneyType(),
    # boolean
    'boolean': lambda length, values: BooleanType(),
    'bool': lambda length, values: BooleanType(),
    # character
    'char': lambda length, values: CharType(length=_positive_int(length)),
    'character': lambda length, values: CharType(length=_positive_int(length)),
    'nchar': lambda length, values: CharType(length=_positive_int(length)),
    'varchar': lambda length, values: VarcharType(length=_positive_int(length)),
    'nvarchar': lambda length, values: VarcharType(length=_positive_int(length)),
    # text
    'text': lambda length, values: TextType(),
    'tinytext': lambda length, values: TextType(size='tiny'),
    'mediumtext': lambda length, values: TextType(size='medium'),
    'longtext': lambda length, values: TextType(size='long'),
    # temporal
    'date': lambda length, values: DateType(),
    'time': lambda length, values: TimeType(),
    'datetime': lambda length, values: DateTimeType(),
    'timestamp': lambda length, values: TimestampType(with_zone=False),
    'timestamptz': lambda length, values: TimestampType(with_zone=True),
    'year': lambda length, values: YearType(),
    # enumerations
    'enum': _enum(is_set=False),
    'set': _enum(is_set=True),
    # documents, identifiers, binary
    'json': lambda length, values: JsonType(binary=False),
    'jsonb': lambda length, values: JsonType(binary=True),
    'uuid': lambda length, values: UuidType(),
    'blob': lambda length, values: BinaryType(),
    'tinyblob': lambda length, values: BinaryType(size='tiny'),
    'mediumblob': lambda length, values: BinaryType(size='medium'),
    'longblob': lambda length, values: BinaryType(size='long'),
    'bytea': lambda length, values: BinaryType(),
    'bit': lambda length, values: BitType(length=_positive_int(length)),
}

RECOGNIZED_TYPES = frozenset(_SOURCE_TYPES)
SERIAL_TYPES = frozenset({'serial', 'serial2', 'serial4', 'serial8', 'smallserial', 'bigserial'})


def is_recognized_type(type_name: str) -> bool:
    return (type_name or '').lower() in RECOGNIZED_TYPES


def _split_source_type(source_type: str) -> Tuple[str, str]:
    """Return ``(keyword, inline_length)`` for inputs such as ``'VARCHAR(255)'``."""
    text = re.sub(r"\s+", ' ', (source_type or '').strip().lower())
    inline_length = ''
    paren = text.find('(')
    if paren != -1:
        inline_length = text[paren + 1:text.rfind(')')] if ')' in text else text[paren + 1:]
        text = text[:paren].strip()
    return _MULTIWORD_ALIASES.get(text, text), inline_length


def classify(source_type: str, length: str = '', enum_values: Optional[Sequence[str]] = None) -> LogicalType:
    """Classify a source type keyword into its logical type.

    Raises:
        UnrecognizedType: the keyword is outside the recognised vocabulary.
    """
    keyword, inline_length = _split_source_type(source_type)
    build = _SOURCE_TYPES.get(keyword)
    if build is None:
        raise UnrecognizedType(source_type)
    return build(length or inline_length, enum_values)


# ---------------------------------------------------------------------------
# Rendering: logical type -> dialect syntax
# ---------------------------------------------------------------------------

def _sized(base: str, length: Optional[int]) -> str:
    return f"{base}({length})" if length else base


def _enum_literal(keyword: str, values: Sequence[str]) -> str:
    return keyword + "(" + ",".join("'" + v.replace("'", "''") + "'" for v in values) + ")"


_RENDER_METHODS: Dict[Type[LogicalType], str] = {
    IntegerType: 'render_integer',
    FloatType: 'render_float',
    NumericType: 'render_numeric',
    MoneyType: 'render_money',
    BooleanType: 'render_boolean',
    CharType: 'render_char',
    VarcharType: 'render_varchar',
    TextType: 'render_text',
    DateType: 'render_date',
    TimeType: 'render_time',
    DateTimeType: 'render_datetime',
    TimestampType: 'render_timestamp',
    YearType: 'render_year',
    JsonType: 'render_json',
    UuidType: 'render_uuid',
    BinaryType: 'render_binary',
    BitType: 'render_bit',
    EnumType: 'render_enum',
}


class TypeRenderer:
    """Base class for dialect renderers.

    Subclasses define one ``render_<kind>`` method per logical type (see
    ``_RENDER_METHODS``). Construction fails with ``TypeError`` when any is
    missing, so an incomplete dialect never reaches the emitter.
    """

    dialect: str = ''

    def __init__(self):
        missing = [t.__name__ for t in LOGICAL_TYPES
                   if t not in _RENDER_METHODS or not callable(getattr(self, _RENDER_METHODS[t], None))]
        if missing:
            label = self.dialect or "unnamed dialect"
            raise TypeError(f"{type(self).__name__} ({label}) has no renderer for: {', '.join(missing)}")
        self._dispatch: Dict[Type[LogicalType], Callable[[LogicalType], str]] = {
            t: getattr(self, name) for t, name in _RENDER_METHODS.items()
        }

    def render(self, ltype: LogicalType) -> str:
        return self._dispatch[type(ltype)](ltype)


class SqliteTypeRenderer(TypeRenderer):
    """SQLite storage classes: everything collapses onto INTEGER, REAL, TEXT, NVARCHAR or BLOB."""

    dialect = SQLITE

    def render_integer(self, t):
        return 'INTEGER'

    def render_float(self, t):
        return 'REAL'

    def render_numeric(self, t):
        return 'REAL'

    def render_money(self, t):
        return 'REAL'

    def render_boolean(self, t):
        return 'INTEGER'

    def render_char(self, t):
        return 'TEXT'

    def render_varchar(self, t):
        return _sized('NVARCHAR', t.length)

    def render_text(self, t):
        return 'TEXT'

    def render_date(self, t):
        return 'TEXT'

    def render_time(self, t):
        return 'TEXT'

    def render_datetime(self, t):
        return 'TEXT'

    def render_timestamp(self, t):
        return 'TEXT'

    def render_year(self, t):
        return 'INTEGER'

    def render_json(self, t):
        return 'TEXT'

    def render_uuid(self, t):
        return 'TEXT'

    def render_binary(self, t):
        return 'BLOB'

    def render_bit(self, t):
        return 'INTEGER'

    def render_enum(self, t):
        return f"NVARCHAR({t.max_length + 2})"


class MySqlTypeRenderer(TypeRenderer):
    dialect = MYSQL

    _INTEGER_NAMES = {'tiny': 'TINYINT', 'small': 'SMALLINT', 'medium': 'MEDIUMINT', 'int': 'INT', 'big': 'BIGINT'}
    _SIZE_PREFIX = {'': '', 'tiny': 'TINY', 'medium': 'MEDIUM', 'long': 'LONG'}

    def render_integer(self, t):
        return _sized(self._INTEGER_NAMES[t.size], t.width)

    def render_float(self, t):
        return 'DOUBLE' if t.double else 'FLOAT'

    def render_numeric(self, t):
        if t.precision and t.scale is not None:
            return f"DECIMAL({t.precision},{t.scale})"
        return _sized('DECIMAL', t.precision)

    def render_money(self, t):
        return 'DECIMAL(19,4)'

    def render_boolean(self, t):
        return 'TINYINT(1)'

    def render_char(self, t):
        return 'TEXT'

    def render_varchar(self, t):
        return _sized('VARCHAR', t.length)

    def render_text(self, t):
        return self._SIZE_PREFIX[t.size] + 'TEXT'

    def render_date(self, t):
        return 'DATE'

    def render_time(self, t):
        return 'TIME'

    def render_datetime(self, t):
        return 'DATETIME'

    def render_timestamp(self, t):
        return 'TIMESTAMP'

    def render_year(self, t):
        return 'YEAR'

    def render_json(self, t):
        return 'JSON'

    def render_uuid(self, t):
        return 'CHAR(36)'

    def render_binary(self, t):
        return self._SIZE_PREFIX[t.size] + 'BLOB'

    def render_bit(self, t):
        return 'BIT'

    def render_enum(self, t):
        return _enum_literal('set' if t.is_set else 'enum', t.values)


class PostgresTypeRenderer(TypeRenderer):
    dialect = PGSQL

    _INTEGER_NAMES = {'tiny': 'SMALLINT', 'small': 'SMALLINT', 'medium': 'INTEGER', 'int': 'INTEGER', 'big': 'BIGINT'}
    _SERIAL_NAMES = {'tiny': 'SMALLSERIAL', 'small': 'SMALLSERIAL', 'medium': 'SERIAL', 'int': 'SERIAL', 'big': 'BIGSERIAL'}

    def render_integer(self, t):
        return (self._SERIAL_NAMES if t.serial else self._INTEGER_NAMES)[t.size]

    def render_float(self, t):
        return 'DOUBLE PRECISION' if t.double else 'REAL'

    def render_numeric(self, t):
        if t.precision and t.scale is not None:
            return f"NUMERIC({t.precision},{t.scale})"
        return _sized('NUMERIC', t.precision)

    def render_money(self, t):
        return 'MONEY'

    def render_boolean(self, t):
        return 'BOOLEAN'

    def render_char(self, t):
        return 'TEXT'

    def render_varchar(self, t):
        return _sized('CHARACTER VARYING', t.length)

    def render_text(self, t):
        return 'TEXT'

    def render_date(self, t):
        return 'DATE'

    def render_time(self, t):
        return 'TIME'

    def render_datetime(self, t):
        return 'TIMESTAMP WITHOUT TIME ZONE'

    # MySQL TIMESTAMP values are stored as UTC instants, so both spellings
    # land on the zone-aware PostgreSQL type.
    def render_timestamp(self, t):
        return 'TIMESTAMP WITH TIME ZONE'

    def render_year(self, t):
        return 'INTEGER'

    def render_json(self, t):
        return 'JSONB'

    def render_uuid(self, t):
        return 'UUID'

    def render_binary(self, t):
        return 'BYTEA'

    def render_bit(self, t):
        return 'BIT'

    def render_enum(self, t):
        return f"CHARACTER VARYING({t.max_length + 2})"


RENDERERS: Dict[str, TypeRenderer] = {
    SQLITE: SqliteTypeRenderer(),
    MYSQL: MySqlTypeRenderer(),
    PGSQL: PostgresTypeRenderer(),
}


def map_type(source_type: str, length: str = '', dialect: str = SQLITE,
             enum_values: Optional[Sequence[str]] = None) -> str:
    """Translate one column type into *dialect* syntax.

    Args:
        source_type: type keyword as written in the source DDL (``VARCHAR``, ``enum`` ...).
        length: text of the parenthesised qualifier (``'255'``, ``'10,2'``, enum literal list).
        dialect: any identifier accepted by ``resolve_dialect``.
        enum_values: pre-extracted ENUM/SET literals; parsed from *length* when omitted.

    Raises:
        UnrecognizedType: *source_type* is outside the recognised vocabulary.
        UnsupportedDialect: *dialect* is not supported.
    """
    renderer = RENDERERS[resolve_dialect(dialect)]
    return renderer.render(classify(source_type, length, enum_values))
