"""
Parses a single CREATE TABLE statement into a ``TableDefinition``.

The body between the header's opening parenthesis and its matching close is
lexed (see ``utils.lexer``) and split on top-level commas. Each fragment is
either a column, following the rule::

    column := name type ('(' length ')')? clause*

or a table-level constraint. A fragment is a column when its second word is a
recognised type keyword; otherwise it is inspected for ``PRIMARY KEY (...)`` and
``UNIQUE KEY name (...)`` forms and ignored when it is neither.
"""
import re
from typing import Dict, List, Optional, Set, Tuple

from ddlbridge.utils.logger import setup_logger
from ...errors import MalformedDefault, MalformedEnum, MalformedStatement, NoTableFound
from ...models import ColumnDefinition, TableDefinition
from ...utils.default_values import normalize_default
from ...utils.lexer import (
    LPAREN, NUMBER, QUOTED, STRING, SYMBOL, WORD, Lexeme,
    read_group, render, split_top_level, tokenize,
)
from .type_mapper import SERIAL_TYPES, is_recognized_type

_COMMENT_RX = re.compile(r"--[^\n]*|#[^\n]*|/\*.*?\*/", re.DOTALL)
_HEADER_RX = re.compile(
    r"^(?:\s|--[^\n]*|#[^\n]*|/\*.*?\*/)*"
    r"create\s+(?:temporary\s+|temp\s+)?table\s+(?:if\s+not\s+exists\s+)?"
    r"(?P<name>[^\s(][^(]*?)\s*\(",
    re.IGNORECASE | re.DOTALL,
)
_NAME_KINDS = (WORD, QUOTED, STRING)
_AUTO_INCREMENT_WORDS = ('AUTO_INCREMENT', 'AUTOINCREMENT', 'IDENTITY')
_ENUM_TYPES = ('enum', 'set')
_CONSTRAINT_WORDS = frozenset({
    'CONSTRAINT', 'PRIMARY', 'UNIQUE', 'KEY', 'INDEX', 'FOREIGN', 'CHECK',
    'FULLTEXT', 'SPATIAL', 'EXCLUDE',
})


def _clean_table_name(raw: str) -> str:
    raw = _COMMENT_RX.sub(' ', raw)
    parts = [p.strip().strip('"[]').strip() for p in raw.strip().split('.')]
    return '.'.join(p for p in parts if p)


class _ParsedColumn:
    """A column plus the parse facts that are not part of the public model."""

    def __init__(self, column: ColumnDefinition, inline_pk: bool):
        self.column = column
        self.inline_pk = inline_pk


class TableParser:
    """Turns ``CREATE TABLE`` text into a ``TableDefinition``."""

    def __init__(self):
        self.logger = setup_logger('TableParser')

    def parse(self, statement: str) -> TableDefinition:
        """
        Parse one CREATE TABLE statement.

        Raises:
            NoTableFound: the statement does not open with a table header.
            MalformedStatement: the body cannot be tokenised or holds no columns.
        """
        header = _HEADER_RX.match(statement or '')
        if not header:
            raise NoTableFound("Statement does not start with CREATE TABLE <name> (")

        table_name = _clean_table_name(header.group('name'))
        lexemes = tokenize(statement[header.end():])
        fragments, _ = split_top_level(lexemes, 0)

        parsed: List[_ParsedColumn] = []
        seen: Set[str] = set()
        key_marks: List[str] = []
        explicit_pk: Optional[str] = None

        for fragment in fragments:
            if not fragment:
                continue
            if self._is_column(fragment):
                item = self._parse_column(fragment)
                name = item.column.field
                if name in seen:
                    self.logger.debug(f"{table_name}: duplicate column '{name}' ignored; first declaration wins.")
                    continue
                seen.add(name)
                parsed.append(item)
                continue

            pk_columns = self._table_primary_key(fragment)
            if pk_columns is not None:
                key_marks.extend(pk_columns)
                if len(pk_columns) == 1 and explicit_pk is None:
                    explicit_pk = pk_columns[0]
                continue

            key_columns = self._key_constraint(fragment)
            if key_columns is not None:
                key_marks.extend(key_columns)
                continue

            if fragment[0].kind == WORD and len(fragment) > 1 and fragment[1].kind == WORD \
                    and not is_recognized_type(fragment[1].text) and fragment[0].upper not in _CONSTRAINT_WORDS:
                self.logger.info(f"{table_name}: dropping column '{fragment[0].text}' "
                                 f"with unrecognized type '{fragment[1].text}'")
            else:
                self.logger.debug(f"{table_name}: ignoring table constraint '{render(fragment)}'.")

        if not parsed:
            raise MalformedStatement(f"Table '{table_name}' has no recognisable columns")

        table = TableDefinition(table_name=table_name, columns=[p.column for p in parsed])
        self._apply_keys(table, parsed, key_marks, explicit_pk)
        self.logger.debug(f"Parsed table '{table_name}' with {len(table.columns)} column(s).")
        return table

    # ------------------------------------------------------------------
    # Fragment classification
    # ------------------------------------------------------------------

    @staticmethod
    def _is_column(fragment: List[Lexeme]) -> bool:
        if TableParser._is_index_line(fragment):
            return False
        return (
            len(fragment) >= 2
            and fragment[0].kind in _NAME_KINDS
            and fragment[1].kind == WORD
            and is_recognized_type(fragment[1].text)
        )

    @staticmethod
    def _is_index_line(fragment: List[Lexeme]) -> bool:
        """
        True for ``KEY date (date)``-style lines whose index name happens to be a
        type keyword. A column named ``key`` still parses as a column because its
        type qualifier holds a length or literals, never a column name.
        """
        head = fragment[0]
        if head.kind != WORD or head.upper not in _CONSTRAINT_WORDS:
            return False
        if head.upper == 'CONSTRAINT':
            return True
        if len(fragment) < 3 or fragment[2].kind != LPAREN:
            return False
        inner, _ = read_group(fragment, 2)
        return bool(inner) and inner[0].kind in (WORD, QUOTED)

    def _table_primary_key(self, fragment: List[Lexeme]) -> Optional[List[str]]:
        """Column names of a ``[CONSTRAINT x] PRIMARY KEY (...)`` fragment, else ``None``."""
        words = [lx.upper for lx in fragment if lx.kind == WORD]
        if 'PRIMARY' not in words or 'KEY' not in words:
            return None
        for i, lx in enumerate(fragment):
            if lx.is_word('KEY'):
                return self._column_list(fragment, i + 1)
        return None

    def _key_constraint(self, fragment: List[Lexeme]) -> Optional[List[str]]:
        """Column names of a ``UNIQUE KEY|INDEX [name] (...)`` fragment, else ``None``."""
        start = 0
        if fragment[0].is_word('CONSTRAINT'):
            start = 2
        if start >= len(fragment) or not fragment[start].is_word('UNIQUE'):
            return None
        i = start + 1
        if i >= len(fragment) or not fragment[i].is_word('KEY', 'INDEX'):
            return None
        return self._column_list(fragment, i + 1)

    @staticmethod
    def _column_list(fragment: List[Lexeme], start: int) -> List[str]:
        """Names inside the first parenthesised group at or after *start*."""
        for i in range(start, len(fragment)):
            if fragment[i].kind == LPAREN:
                group, _ = read_group(fragment, i)
                return [lx.text for lx in group if lx.kind in _NAME_KINDS]
        return []

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def _parse_column(self, fragment: List[Lexeme]) -> _ParsedColumn:
        name = fragment[0].text
        type_name = fragment[1].text
        n = len(fragment)
        i = 2

        length = ''
        enum_values: Optional[List[str]] = None
        if i < n and fragment[i].kind == LPAREN:
            group, i = read_group(fragment, i)
            length = render(group)
            if type_name.lower() in _ENUM_TYPES:
                enum_values = self._enum_values(name, group)
        elif type_name.lower() in _ENUM_TYPES:
            enum_values = self._enum_values(name, [])

        if i + 2 < n and fragment[i].is_word('WITH', 'WITHOUT') \
                and fragment[i + 1].is_word('TIME') and fragment[i + 2].is_word('ZONE'):
            if fragment[i].is_word('WITH') and type_name.lower() == 'timestamp':
                type_name += 'TZ' if type_name.isupper() else 'tz'
            i += 3

        column = ColumnDefinition(field=name, type=type_name, length=length, enum_values=enum_values)
        column.auto_increment = type_name.lower() in SERIAL_TYPES
        inline_pk = False

        while i < n:
            lx = fragment[i]
            nxt = fragment[i + 1] if i + 1 < n else None
            if lx.is_word('NOT') and nxt is not None and nxt.is_word('NULL'):
                column.nullable = False
                i += 2
            elif lx.is_word('PRIMARY') and nxt is not None and nxt.is_word('KEY'):
                inline_pk = True
                i += 2
            elif lx.is_word('BY') and nxt is not None and nxt.is_word('DEFAULT'):
                # GENERATED BY DEFAULT AS IDENTITY
                i += 2
            elif lx.is_word('DEFAULT'):
                try:
                    raw, i = self._read_default(fragment, i + 1)
                except MalformedDefault as e:
                    self.logger.warning(f"Column '{name}': {e}")
                    i += 1
                    continue
                if column.default is None:
                    column.default = normalize_default(raw)
            elif lx.is_word('COMMENT') and nxt is not None and nxt.is_literal():
                if column.comment is None:
                    column.comment = nxt.text
                i += 2
            elif lx.is_word(*_AUTO_INCREMENT_WORDS):
                column.auto_increment = True
                i += 1
            elif lx.kind == LPAREN:
                _, i = read_group(fragment, i)
            else:
                i += 1

        if column.default and 'NEXTVAL(' in column.default.upper():
            column.auto_increment = True
        return _ParsedColumn(column, inline_pk)

    def _enum_values(self, name: str, group: List[Lexeme]) -> List[str]:
        try:
            values = [lx.text for lx in group if lx.is_literal()]
            if not values:
                raise MalformedEnum(f"Column '{name}' declares ENUM/SET without quoted values")
            return values
        except MalformedEnum as e:
            self.logger.warning(str(e))
            return []

    @staticmethod
    def _read_default(fragment: List[Lexeme], i: int) -> Tuple[str, int]:
        """Read the value of a ``DEFAULT`` clause starting at *i*.

        Returns the raw value text and the index just past it. Casts
        (``::type``) and ``ON UPDATE``/``ON INSERT`` suffixes are kept on the
        value; the emitter decides what each target can express.
        """
        n = len(fragment)
        if i >= n:
            raise MalformedDefault("DEFAULT clause has no value")

        lx = fragment[i]
        if lx.kind == SYMBOL and lx.text in ('-', '+') and i + 1 < n and fragment[i + 1].kind == NUMBER:
            raw = lx.text + fragment[i + 1].text
            i += 2
        elif lx.kind in (STRING, NUMBER):
            raw = lx.sql()
            i += 1
        elif lx.kind == LPAREN:
            group, i = read_group(fragment, i)
            raw = '(' + render(group) + ')'
        elif lx.kind in (WORD, QUOTED):
            start = i
            i += 1
            if i < n and fragment[i].kind == LPAREN:
                _, i = read_group(fragment, i)
            raw = render(fragment[start:i])
        elif lx.kind == SYMBOL:
            # bit and hex literals: b'0', x'ff'
            raw = lx.text
            i += 1
        else:
            raise MalformedDefault(f"Unexpected DEFAULT value '{lx.text}'")

        while i + 1 < n and fragment[i].text == '::' and fragment[i + 1].kind == WORD:
            raw += '::' + fragment[i + 1].text
            i += 2
            # Multi-word cast targets: character varying, double precision, ... time zone
            while i < n and fragment[i].is_word('VARYING', 'PRECISION', 'WITH', 'WITHOUT', 'TIME', 'ZONE'):
                raw += ' ' + fragment[i].text
                i += 1
            if i < n and fragment[i].kind == LPAREN:
                group, i = read_group(fragment, i)
                raw += '(' + render(group) + ')'

        if i + 2 < n and fragment[i].is_word('ON') and fragment[i + 1].is_word('UPDATE', 'INSERT'):
            event = fragment[i + 1].upper
            start = i + 2
            i = start + 1
            if i < n and fragment[i].kind == LPAREN:
                _, i = read_group(fragment, i)
            raw += f" ON {event} " + render(fragment[start:i])

        return raw, i

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def _apply_keys(self, table: TableDefinition, parsed: List[_ParsedColumn],
                    key_marks: List[str], explicit_pk: Optional[str]) -> None:
        by_name: Dict[str, ColumnDefinition] = {c.field: c for c in table.columns}
        by_lower: Dict[str, ColumnDefinition] = {}
        for c in table.columns:
            by_lower.setdefault(c.field.lower(), c)

        for item in parsed:
            if item.inline_pk:
                item.column.key = True

        for col_name in key_marks:
            col = by_name.get(col_name) or by_lower.get(col_name.lower())
            if col is None:
                self.logger.debug(f"{table.table_name}: key references unknown column '{col_name}'.")
                continue
            col.key = True

        if explicit_pk is not None:
            col = by_name.get(explicit_pk) or by_lower.get(explicit_pk.lower())
            table.primary_key = col.field if col is not None else None
        if table.primary_key is None:
            inline = [item.column.field for item in parsed if item.inline_pk]
            if inline:
                table.primary_key = inline[0]

        for col in table.columns:
            if col.key:
                col.nullable = False


_default_parser: Optional[TableParser] = None


def parse_table(statement: str) -> TableDefinition:
    """Module-level shortcut around a shared ``TableParser``."""
    global _default_parser
    if _default_parser is None:
        _default_parser = TableParser()
    return _default_parser.parse(statement)
