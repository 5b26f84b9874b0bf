"""
Script-level rewrites applied before any statement is parsed.

The rules run uniformly regardless of the target dialect: they fold the
verbose spellings that PostgreSQL dumps use into the short keywords the table
parser recognises, and drop identifier quoting the parser does not need.
"""
import logging
from typing import Dict, List

from .regex_utils import compile_rule

logger = logging.getLogger(__name__)

PREPROCESSING_RULES: List[Dict[str, str]] = [
    {
        'name': 'strip_backtick_quoting',
        'regex': r'`',
        'replacement': '',
        'flags': '',
    },
    {
        'name': 'collapse_timestamp_with_time_zone',
        'regex': r'\s+timestamp\s+with\s+time\s+zone\b',
        'replacement': ' timestamptz',
        'flags': 'IGNORECASE',
    },
    {
        'name': 'collapse_timestamp_without_time_zone',
        'regex': r'\s+timestamp\s+without\s+time\s+zone\b',
        'replacement': ' timestamp',
        'flags': 'IGNORECASE',
    },
    {
        'name': 'collapse_character_varying',
        'regex': r'\s+character\s+varying\b',
        'replacement': ' varchar',
        'flags': 'IGNORECASE',
    },
    {
        'name': 'strip_pg_catalog_collation',
        'regex': r'\s+COLLATE\s+pg_catalog\."default"',
        'replacement': '',
        'flags': 'IGNORECASE',
    },
]

_COMPILED_RULES = [(rule, compile_rule(rule)) for rule in PREPROCESSING_RULES]


def preprocess_script(sql: str) -> str:
    """Apply every rule in ``PREPROCESSING_RULES`` to *sql*, in order."""
    if not sql:
        return ''

    for rule, pattern in _COMPILED_RULES:
        old_sql = sql
        sql = pattern.sub(rule['replacement'], sql)
        if sql != old_sql:
            logger.debug("Applied preprocessing rule '%s'", rule['name'])
    return sql
