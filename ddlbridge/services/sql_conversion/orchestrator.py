"""SchemaTranslator – high-level driver for CREATE TABLE conversion.

Responsibilities
----------------
1. Resolve the target dialect (the only failure that reaches the caller).
2. Apply the script-level preprocessing rules.
3. Split the script into statements (comment lines, DELIMITER directives).
4. For each statement:
     • parse → TableDefinition, or record why it was skipped
     • emit the table in the target dialect
5. Join the emitted tables into one CRLF script.

All detailed parsing and rendering logic lives in the converter layer; the
translator only sequences the stages and aggregates results. It holds no
state between calls, so one instance can be shared freely.

FUNCTIONS:
==========
Public Functions (called by external code):
  - translate(): script + target dialect -> converted script.
  - parse_all(): script -> (tables, skipped statements), no emission.
"""
from typing import List, Optional, Tuple

from ddlbridge.utils.logger import setup_logger
from .converters.declarative.ddl_handler import LINE_BREAK
from .converters.declarative.statement_converter import StatementConverter
from .errors import UnsupportedDialect
from .models import SkippedStatement, TableDefinition
from .utils.result_formatter import create_result_dictionary, result_status
from .utils.sql_preprocessing import preprocess_script
from .utils.statement_splitter import split_statements


class SchemaTranslator:

    def __init__(self, target_dialect: Optional[str] = None):
        self.logger = setup_logger("SchemaTranslator")
        self.statement_converter = StatementConverter(target_dialect)
        self.target_dialect = self.statement_converter.target_dialect

    def parse_all(self, script: str) -> Tuple[List[TableDefinition], List[SkippedStatement]]:
        """Parse every CREATE TABLE statement in *script*.

        A statement that fails to parse is recorded as skipped and never
        affects the others.
        """
        tables: List[TableDefinition] = []
        skipped: List[SkippedStatement] = []
        for index, statement in enumerate(self._statements(script)):
            table, skip = self.statement_converter.parse_statement(statement, index)
            if table is not None:
                tables.append(table)
            else:
                skipped.append(skip)
        return tables, skipped

    def translate(self, script: str) -> str:
        """Convert every CREATE TABLE in *script* to the target dialect."""
        output, _, _ = self._translate(script)
        return output

    def translate_with_report(self, script: str) -> dict:
        """Like ``translate`` but also returns the parsed tables and skip reasons."""
        output, tables, skipped = self._translate(script)
        message = f"Converted {len(tables)} table(s) to {self.target_dialect}; skipped {len(skipped)} statement(s)."
        return create_result_dictionary(
            result_status(tables, skipped), message, self.target_dialect, output, tables, skipped
        )

    def _translate(self, script: str) -> Tuple[str, List[TableDefinition], List[SkippedStatement]]:
        if self.target_dialect is None:
            raise UnsupportedDialect(None)

        tables, skipped = self.parse_all(script)
        emitted: List[str] = []
        for table in tables:
            emitted.append(self.statement_converter.ddl_handler.emit(table))
            emitted.append('')

        self.logger.info(
            f"Translated {len(tables)} table(s) to {self.target_dialect}; {len(skipped)} statement(s) skipped."
        )
        return LINE_BREAK.join(emitted), tables, skipped

    def _statements(self, script: str) -> List[str]:
        statements = split_statements(preprocess_script(script or ''))
        self.logger.debug(f"Script split into {len(statements)} statement(s).")
        return [s.text for s in statements]


def translate(script: str, target_dialect: str) -> str:
    """
    Convert the CREATE TABLE statements of *script* into *target_dialect*.

    Args:
        script: Raw SQL script (any mix of SQLite, MySQL/MariaDB, PostgreSQL DDL).
        target_dialect: 'sqlite', 'mysql', 'mariadb', 'pgsql' or 'postgresql'
            (plus a few aliases, see ``supported_dialects``).

    Returns:
        The converted script: one CREATE TABLE per parsed table, CRLF line
        breaks, a blank line after each table. Empty when nothing parsed.

    Raises:
        UnsupportedDialect: *target_dialect* is not recognised.
    """
    return SchemaTranslator(target_dialect).translate(script)


def parse_all(script: str) -> Tuple[List[TableDefinition], List[SkippedStatement]]:
    """Parse every CREATE TABLE in *script* without emitting anything."""
    return SchemaTranslator().parse_all(script)
