"""
Canonicalisation of raw ``DEFAULT`` values.

Classification order (first match wins):

1. bare ``NULL``                                -> ``NULL``
2. pure number                                  -> single-quoted (``5`` -> ``'5'``)
3. ``CURRENT_TIMESTAMP`` / ``NOW()`` family      -> upper-cased
4. ``TRUE`` / ``FALSE``                         -> upper-cased
5. date or datetime literal                     -> single-quoted
6. quoted literal                               -> re-quoted with ``''`` escaping
7. anything else                                -> unchanged
"""
import re
from typing import Optional

from .lexer import quote_literal

_NULL_RX = re.compile(r"\bNULL\b", re.IGNORECASE)
_NUMBER_RX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_CLOCK = r"(?:CURRENT_TIMESTAMP(?:\s*\(\s*\d*\s*\))?|NOW\s*\(\s*\)|CURRENT_DATE|CURRENT_TIME|LOCALTIMESTAMP)"
_CLOCK_RX = re.compile(
    rf"^{_CLOCK}(?:\s+ON\s+(?:UPDATE|INSERT)\s+{_CLOCK})?$",
    re.IGNORECASE,
)
_BOOLEAN_RX = re.compile(r"^(?:TRUE|FALSE)$", re.IGNORECASE)
_QUOTED_DATE_RX = re.compile(r"^'\d{4}-\d{2}-\d{2}'$")
_BARE_DATETIME_RX = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[ T]\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?)?$")
_QUOTED_RX = re.compile(r"^(['\"])(.*)\1$", re.DOTALL)
_NOW_RX = re.compile(r"\bNOW\s*\(", re.IGNORECASE)
_ON_CLAUSE_RX = re.compile(r"\s+ON\s+(?:UPDATE|INSERT)\s+.*$", re.IGNORECASE | re.DOTALL)


def normalize_default(raw: Optional[str]) -> Optional[str]:
    """Return the canonical spelling of *raw*, or ``None`` when it is empty."""
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    quoted = _QUOTED_RX.match(value)

    if not quoted and _NULL_RX.search(value):
        return 'NULL'
    if _NUMBER_RX.match(value):
        return f"'{value}'"
    if _CLOCK_RX.match(value):
        return value.upper()
    if _BOOLEAN_RX.match(value):
        return value.upper()
    if _QUOTED_DATE_RX.match(value):
        return value
    if _BARE_DATETIME_RX.match(value):
        return quote_literal(value)
    if quoted:
        return quote_literal(_unescape(quoted.group(2), quoted.group(1)))
    return value


def _unescape(inner: str, quote: str) -> str:
    return inner.replace(quote * 2, quote).replace('\\' + quote, quote)


def is_now_function(value: str) -> bool:
    """True for ``NOW()``-class defaults, which SQLite cannot express."""
    return bool(_NOW_RX.search(value))


def strip_on_clause(value: str) -> str:
    """Drop a MySQL ``ON UPDATE ...`` / ``ON INSERT ...`` suffix."""
    return _ON_CLAUSE_RX.sub('', value)
