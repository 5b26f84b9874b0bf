"""
Small lexer for CREATE TABLE bodies, built on sqlglot's tokenizer.

sqlglot does the hard part (quoted literals with escapes, comments, numbers);
this module flattens its token stream into a handful of lexeme kinds the table
parser cares about. Keyword tokens are re-read from the source text so that
the original spelling survives (sqlglot upper-cases keywords and merges
multi-word ones such as ``PRIMARY KEY``); those are split back into words.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from sqlglot.dialects.mysql import MySQL
from sqlglot.errors import TokenError
from sqlglot.tokens import TokenType

from ..errors import MalformedStatement

WORD = 'WORD'
STRING = 'STRING'
QUOTED = 'QUOTED'
NUMBER = 'NUMBER'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
COMMA = 'COMMA'
SYMBOL = 'SYMBOL'

# MySQL rules: both quote styles delimit string literals and backslash escapes
# are honoured, which is what dump files from all three dialects need for the
# DEFAULT/ENUM literals we extract.
_DIALECT = MySQL()

_STRING_TOKEN_TYPES = {TokenType.STRING, TokenType.NATIONAL_STRING}
_PUNCTUATION = {
    TokenType.L_PAREN: LPAREN,
    TokenType.R_PAREN: RPAREN,
    TokenType.COMMA: COMMA,
}
_WORD_RX = re.compile(r"^[\w$]+$")


@dataclass(frozen=True)
class Lexeme:
    kind: str
    text: str

    @property
    def upper(self) -> str:
        return self.text.upper()

    def is_word(self, *words: str) -> bool:
        return self.kind == WORD and self.upper in words

    def is_literal(self) -> bool:
        return self.kind == STRING

    def sql(self) -> str:
        """Render the lexeme back to SQL text (string literals single-quoted)."""
        if self.is_literal():
            return quote_literal(self.text)
        return self.text


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def tokenize(sql: str) -> List[Lexeme]:
    """Tokenise *sql* into lexemes.

    Raises:
        MalformedStatement: sqlglot could not tokenise the text.
    """
    try:
        tokens = _DIALECT.tokenize(sql)
    except TokenError as e:
        raise MalformedStatement(f"Could not tokenize statement: {e}") from e

    lexemes: List[Lexeme] = []
    for tok in tokens:
        tt = tok.token_type
        if tt in _STRING_TOKEN_TYPES:
            lexemes.append(Lexeme(STRING, tok.text))
        elif tt == TokenType.IDENTIFIER:
            lexemes.append(Lexeme(QUOTED, tok.text))
        elif tt == TokenType.NUMBER:
            lexemes.append(Lexeme(NUMBER, tok.text))
        elif tt in _PUNCTUATION:
            lexemes.append(Lexeme(_PUNCTUATION[tt], tok.text))
        else:
            raw = sql[tok.start:tok.end + 1] or tok.text
            for word in raw.split():
                lexemes.append(Lexeme(WORD if _WORD_RX.match(word) else SYMBOL, word))
    return lexemes


def render(lexemes: List[Lexeme]) -> str:
    """Join lexemes back into compact SQL text.

    No whitespace is placed around ``,``, ``::`` or inside parentheses, so
    ``DECIMAL(10, 2)`` renders its qualifier as ``10,2``.
    """
    out = ''
    prev = None
    for lx in lexemes:
        piece = lx.sql()
        if prev is not None and not _is_tight(prev, lx):
            out += ' '
        out += piece
        prev = lx
    return out


def _is_tight(prev: Lexeme, cur: Lexeme) -> bool:
    if prev.kind in (LPAREN, COMMA) or cur.kind in (RPAREN, COMMA):
        return True
    if prev.text == '::' or cur.text == '::':
        return True
    # Function call: NOW(), nextval(...)
    if cur.kind == LPAREN and prev.kind == WORD:
        return True
    return False


def split_top_level(lexemes: List[Lexeme], start: int = 0) -> tuple[List[List[Lexeme]], int]:
    """Split the parenthesised list opened just before *start* on top-level commas.

    Returns the fragments and the index just past the closing parenthesis (or
    ``len(lexemes)`` when the list is never closed).
    """
    fragments: List[List[Lexeme]] = []
    current: List[Lexeme] = []
    depth = 1
    i = start
    while i < len(lexemes):
        lx = lexemes[i]
        i += 1
        if lx.kind == LPAREN:
            depth += 1
        elif lx.kind == RPAREN:
            depth -= 1
            if depth == 0:
                break
        elif lx.kind == COMMA and depth == 1:
            fragments.append(current)
            current = []
            continue
        current.append(lx)
    if current:
        fragments.append(current)
    return fragments, i


def read_group(lexemes: List[Lexeme], start: int) -> tuple[List[Lexeme], int]:
    """Return the lexemes inside the parenthesis at *start* and the index past its close."""
    if start >= len(lexemes) or lexemes[start].kind != LPAREN:
        return [], start
    depth = 0
    i = start
    while i < len(lexemes):
        lx = lexemes[i]
        if lx.kind == LPAREN:
            depth += 1
        elif lx.kind == RPAREN:
            depth -= 1
            if depth == 0:
                return lexemes[start + 1:i], i + 1
        i += 1
    return lexemes[start + 1:], len(lexemes)
