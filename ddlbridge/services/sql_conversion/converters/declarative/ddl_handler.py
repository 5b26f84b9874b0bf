"""
Renders a parsed ``TableDefinition`` as CREATE TABLE DDL for one target dialect.
"""
import re
from typing import List, Optional

from ddlbridge.utils.logger import setup_logger
from ...errors import UnsupportedDialect
from ...models import ColumnDefinition, TableDefinition
from ...utils.default_values import is_now_function, strip_on_clause
from ...utils.dialect_utils import MYSQL, PGSQL, SQLITE, quote_identifier
from ..base_converter import BaseConverter
from .table_parser import parse_table
from .type_mapper import map_type

LINE_BREAK = '\r\n'

_VARCHAR_CAST_RX = re.compile(r"::character\s+varying\b", re.IGNORECASE)
_ANY_CAST_RX = re.compile(r"::[\w ]+?(?:\([^)]*\))?(?=$|\)|\s+ON\s|::)", re.IGNORECASE)
_NEXTVAL_RX = re.compile(r"\bnextval\s*\(", re.IGNORECASE)


class DdlHandler(BaseConverter):
    """
    Emits CREATE TABLE statements in the target dialect: identifier quoting,
    mapped column types, nullability, primary key and default values.
    """
    def __init__(self, target_dialect: str):
        super().__init__(target_dialect)
        if self.target_dialect is None:
            raise UnsupportedDialect(target_dialect)
        self.logger = setup_logger('DdlHandler')

    def convert_statement(self, statement: str) -> str:
        return self.emit(parse_table(statement))

    def emit(self, table: TableDefinition) -> str:
        """Render *table*; the schema qualifier on its name is dropped."""
        lines = [self._column_line(table, col) for col in table.columns]
        name = quote_identifier(table.bare_name, self.target_dialect)
        self.logger.debug(f"Emitting {len(lines)} column(s) for table {name} ({self.target_dialect}).")
        return (
            f"CREATE TABLE {name}{LINE_BREAK}({LINE_BREAK}"
            + f",{LINE_BREAK}".join(lines)
            + f"{LINE_BREAK});"
        )

    def _column_line(self, table: TableDefinition, col: ColumnDefinition) -> str:
        col_type = map_type(col.type, col.length, self.target_dialect, col.enum_values)
        parts: List[str] = [quote_identifier(col.field, self.target_dialect), col_type]

        if table.primary_key is not None and col.field == table.primary_key:
            parts.append('NOT NULL PRIMARY KEY')
            return '\t' + ' '.join(parts)

        parts.append('NOT NULL' if (col.key or not col.nullable) else 'NULL')
        default = self.target_default(col.default)
        if default is not None:
            parts.append(f"DEFAULT {default}")
        return '\t' + ' '.join(parts)

    def target_default(self, value: Optional[str]) -> Optional[str]:
        """
        Adapt a normalised default to what the target dialect can express.

        Returns ``None`` when the default must be dropped.
        """
        if not value:
            return None

        value = _VARCHAR_CAST_RX.sub('', value)
        if self.target_dialect != PGSQL:
            value = _ANY_CAST_RX.sub('', value)
            if _NEXTVAL_RX.search(value):
                self.logger.debug(f"Dropping sequence default '{value}' for {self.target_dialect}.")
                return None
        if self.target_dialect != MYSQL:
            value = strip_on_clause(value)
        if self.target_dialect == SQLITE and is_now_function(value):
            self.logger.debug(f"Dropping default '{value}': SQLite has no NOW().")
            return None

        value = value.strip()
        return value or None
