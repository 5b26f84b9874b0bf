"""
Dialect identifier utilities.
Handles the accepted spellings of each target dialect and its identifier quoting.
"""
from typing import Dict, List

from ..errors import UnsupportedDialect

SQLITE = 'sqlite'
MYSQL = 'mysql'
PGSQL = 'pgsql'

_DIALECT_MAP: Dict[str, str] = {
    'sqlite': SQLITE,
    'sqlite3': SQLITE,
    'mysql': MYSQL,
    'mariadb': MYSQL,
    'pgsql': PGSQL,
    'postgresql': PGSQL,
    'postgres': PGSQL,
}

_IDENTIFIER_QUOTES: Dict[str, str] = {
    SQLITE: '',
    MYSQL: '`',
    PGSQL: '"',
}


def resolve_dialect(target_type: str) -> str:
    """
    Map a user-facing dialect identifier to its canonical name.

    Args:
        target_type: e.g. 'mysql', 'mariadb', 'pgsql', 'postgresql', 'sqlite'

    Returns:
        One of 'sqlite', 'mysql', 'pgsql'.

    Raises:
        UnsupportedDialect: the identifier is not recognised.
    """
    key = (target_type or '').strip().lower()
    if key not in _DIALECT_MAP:
        raise UnsupportedDialect(target_type)
    return _DIALECT_MAP[key]


def supported_dialects() -> List[str]:
    return sorted(_DIALECT_MAP)


def quote_identifier(name: str, dialect: str) -> str:
    quote = _IDENTIFIER_QUOTES[resolve_dialect(dialect)]
    if not quote:
        return name
    return f"{quote}{name.replace(quote, quote * 2)}{quote}"
