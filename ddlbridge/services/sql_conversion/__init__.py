"""
SQL Conversion Package - CREATE TABLE conversion between SQLite, MySQL/MariaDB and PostgreSQL.

Main Components:
    - SchemaTranslator: Main entry point; splits a script, parses each table and re-emits it
    - TableParser: Recovers table/column metadata from one CREATE TABLE statement
    - Type mapper: Canonical logical types rendered per target dialect
    - DdlHandler: Renders a parsed table in the target dialect
    - Utils: Statement splitting, preprocessing, default normalisation, dialect names

Usage:
    from ddlbridge.services.sql_conversion import translate

    ddl = translate("CREATE TABLE t (id INT PRIMARY KEY);", "pgsql")
"""

from .errors import SchemaConversionError, UnsupportedDialect
from .models import ColumnDefinition, SkippedStatement, TableDefinition
from .orchestrator import SchemaTranslator, parse_all, translate
from .utils.dialect_utils import supported_dialects

__all__ = [
    'SchemaTranslator',
    'translate',
    'parse_all',
    'supported_dialects',
    'ColumnDefinition',
    'TableDefinition',
    'SkippedStatement',
    'SchemaConversionError',
    'UnsupportedDialect',
]
