"""Helpers for the declarative regex rules used by script preprocessing."""
import re
from typing import Dict, Pattern

_FLAG_NAMES: Dict[str, int] = {
    'IGNORECASE': re.IGNORECASE,
    'DOTALL': re.DOTALL,
    'MULTILINE': re.MULTILINE,
}


def re_flags(flags_str: str) -> int:
    """
    Turn a rule's flag string (e.g. ``'IGNORECASE|DOTALL'``) into ``re`` flags.

    Raises:
        ValueError: a flag name is not one of IGNORECASE, DOTALL, MULTILINE.
    """
    flags = 0
    for name in (flags_str or '').split('|'):
        name = name.strip().upper()
        if not name:
            continue
        if name not in _FLAG_NAMES:
            raise ValueError(f"Unknown regex flag: {name!r}")
        flags |= _FLAG_NAMES[name]
    return flags


def compile_rule(rule: Dict[str, str]) -> Pattern:
    return re.compile(rule['regex'], re_flags(rule.get('flags', '')))
