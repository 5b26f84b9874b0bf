"""
Line-oriented statement splitter.

Splits a multi-statement SQL script into ``(text, terminator)`` pairs. The
scanner understands three things only:

* comments (``-- ...``, ``# ...`` and ``/* ... */`` across lines) and blank
  lines between statements, which are dropped from the statement text;
* ``DELIMITER <token>`` directives, which change the terminator for all
  following statements and never appear in the output;
* quoted literals/identifiers, inside which the terminator has no effect.

It is not a SQL parser: nested block comments, dollar-quoted bodies and the
like are not recognised.
"""
import re
from typing import List, NamedTuple, Optional

DEFAULT_TERMINATOR = ';'

_DELIMITER_RX = re.compile(r"^\s*DELIMITER\s+(\S+)\s*$", re.IGNORECASE)
_QUOTE_CHARS = ("'", '"', '`')


class Statement(NamedTuple):
    text: str
    terminator: str


class _SplitState:
    """Mutable scanner state for one ``split_statements`` call."""

    def __init__(self):
        self.terminator = DEFAULT_TERMINATOR
        self.buffer: List[str] = []
        self.quote: Optional[str] = None
        self.in_comment = False
        self.statements: List[Statement] = []

    @property
    def at_start(self) -> bool:
        return not self.buffer

    def close(self, tail: str, terminator: str) -> None:
        self.buffer.append(tail)
        text = "\n".join(self.buffer).strip()
        self.buffer = []
        if text:
            self.statements.append(Statement(text, terminator))


def split_statements(script: str) -> List[Statement]:
    """Split *script* into statements, each paired with the terminator that closed it.

    A trailing statement that never sees its terminator is still returned,
    paired with an empty terminator.
    """
    state = _SplitState()
    if not script:
        return state.statements

    text = script.replace('\r\n', '\n').replace('\r', '\n')
    if text.startswith('\ufeff'):
        text = text[1:]

    for line in text.split('\n'):
        if state.quote is None and not state.in_comment:
            stripped = line.strip()
            if not stripped:
                # A blank line inside a statement is kept as a line break.
                if not state.at_start:
                    state.buffer.append('')
                continue
            if stripped.startswith(('--', '#')):
                continue
            directive = _DELIMITER_RX.match(line)
            if directive:
                if not state.at_start:
                    state.close('', '')
                state.terminator = directive.group(1)
                continue

        _scan_line(line, state)

    if state.buffer:
        state.close('', '')
    return state.statements


def _scan_line(line: str, state: _SplitState) -> None:
    """Feed one line to the scanner, dropping comment text from the statement."""
    terminator = state.terminator
    kept: List[str] = []
    i = 0
    n = len(line)
    while i < n:
        if state.in_comment:
            end = line.find('*/', i)
            if end < 0:
                break
            state.in_comment = False
            kept.append(' ')
            i = end + 2
            continue

        ch = line[i]
        if state.quote is not None:
            if ch == '\\' and state.quote == "'":
                kept.append(line[i:i + 2])
                i += 2
                continue
            if ch == state.quote:
                if line.startswith(ch * 2, i):
                    kept.append(ch * 2)
                    i += 2
                    continue
                state.quote = None
            kept.append(ch)
            i += 1
            continue

        if line.startswith(terminator, i):
            state.close(''.join(kept), terminator)
            kept = []
            i += len(terminator)
            continue
        if ch in _QUOTE_CHARS:
            state.quote = ch
        elif line.startswith('/*', i):
            state.in_comment = True
            i += 2
            continue
        elif line.startswith('--', i) or ch == '#':
            # Line comment: nothing after it is part of the statement.
            break
        kept.append(ch)
        i += 1

    remainder = ''.join(kept)
    if remainder.strip() or state.quote is not None:
        state.buffer.append(remainder)
