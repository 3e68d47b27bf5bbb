"""Tokenizer for math markup.

A single regex scan; anything that matches none of the alternatives is
skipped silently, so tokenizing never fails.
"""

from __future__ import annotations

import re

from mathbox.parser.model import ROW_BREAK, Token, TokenKind

_TOKEN_PATTERN = re.compile(
    r"(?P<row_break>\\\\)"
    r"|\\(?P<command>[a-zA-Z]+)"
    r"|(?P<literal>[a-zA-Z0-9+\-=<>!(),/\[\]|.&~\":;])"
    r"|(?P<space>\s+)"
    r"|(?P<structural>[{}^_])"
)


def tokenize(text: str) -> list[Token]:
    """Split markup into an ordered token list (whitespace dropped)."""
    tokens: list[Token] = []
    for m in _TOKEN_PATTERN.finditer(text):
        if m.group("row_break"):
            tokens.append(Token(TokenKind.ROW_BREAK, ROW_BREAK))
        elif m.group("command"):
            tokens.append(Token(TokenKind.COMMAND, m.group("command")))
        elif m.group("literal"):
            tokens.append(Token(TokenKind.LITERAL, m.group("literal")))
        elif m.group("structural"):
            tokens.append(Token(TokenKind.STRUCTURAL, m.group("structural")))
    return tokens
