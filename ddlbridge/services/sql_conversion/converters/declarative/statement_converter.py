from typing import Optional, Tuple

from ddlbridge.utils.logger import setup_logger
from ...errors import MalformedStatement, NoTableFound, UnsupportedDialect
from ...models import SkippedStatement, TableDefinition
from ..base_converter import BaseConverter
from .ddl_handler import DdlHandler
from .table_parser import TableParser

SNIPPET_LENGTH = 80


def make_snippet(statement: str) -> str:
    """First line of *statement*, shortened for reports and log lines."""
    first = (statement or '').strip().splitlines()[0] if (statement or '').strip() else ''
    if len(first) > SNIPPET_LENGTH:
        return first[:SNIPPET_LENGTH - 3] + '...'
    return first


class StatementConverter(BaseConverter):
    """
    Routes one statement through the table parser and, when it is a table,
    through the DDL handler. Anything that is not a parseable CREATE TABLE
    is turned into a ``SkippedStatement`` instead of an exception.
    """
    def __init__(self, target_dialect: Optional[str] = None):
        super().__init__(target_dialect)
        self.logger = setup_logger('StatementConverter')
        self.table_parser = TableParser()
        self.ddl_handler = DdlHandler(self.target_dialect) if self.target_dialect else None

    def parse_statement(self, statement: str, index: int = 0) -> Tuple[Optional[TableDefinition], Optional[SkippedStatement]]:
        """Parse one statement, returning either a table or the reason it was skipped."""
        try:
            return self.table_parser.parse(statement), None
        except NoTableFound as e:
            self.logger.debug(f"Statement {index} is not a CREATE TABLE: {make_snippet(statement)!r}")
            return None, SkippedStatement(index, str(e), make_snippet(statement))
        except MalformedStatement as e:
            self.logger.warning(f"Statement {index} skipped: {e}")
            return None, SkippedStatement(index, str(e), make_snippet(statement))

    def convert_statement(self, statement: str, index: int = 0) -> Tuple[Optional[str], Optional[SkippedStatement]]:
        if self.ddl_handler is None:
            raise UnsupportedDialect(None)
        table, skipped = self.parse_statement(statement, index)
        if table is None:
            return None, skipped
        self.logger.info(f"Converting table '{table.table_name}' to {self.target_dialect}.")
        return self.ddl_handler.emit(table), None
