"""Recursive-descent parser for math markup.

The parser is greedy and never backtracks. It walks an explicit
``TokenCursor``; bracket matching splices the enclosed span out of the
remaining stream and parses it with a cursor of its own.

Malformed input never raises. Unmatched braces end a group early, unknown
commands become upright text, orphan scripts are dropped, and unbalanced
brackets fall back to plain OPEN/CLOSE atoms.
"""

from __future__ import annotations

import logging

from mathbox.parser.model import (
    CELL_SEPARATOR,
    ROW_BREAK,
    AstNode,
    AtomType,
    CharNode,
    DelimNode,
    FracNode,
    GroupNode,
    MatrixNode,
    PlaceholderMode,
    PlaceholderNode,
    ScriptNode,
    SqrtNode,
    Token,
    TokenKind,
)
from mathbox.parser.symbols import CLOSING_DELIMITERS, DELIMITER_PAIRS, lookup
from mathbox.parser.tokenizer import tokenize

logger = logging.getLogger(__name__)

MISSING_ARGUMENT = "?"

WIDE_BOX_FACTOR = 1.5

# Commands that only steer sizing in LaTeX; sizing here is automatic.
_IGNORED_COMMANDS = frozenset({"left", "right"})


class TokenCursor:
    """Read position over a token list, shared by one nesting chain."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def peek(self) -> Token | None:
        if self.at_end():
            return None
        return self._tokens[self._pos]

    def next(self) -> Token | None:
        tok = self.peek()
        if tok is not None:
            self._pos += 1
        return tok

    def take_balanced(self, open_char: str, close_char: str) -> TokenCursor | None:
        """Splice out the span up to the close matching an already-read open.

        Counts nested opens/closes of the same kind over the rest of the
        stream (braces are not respected). On a match, returns a cursor over
        the enclosed tokens and advances past the close; otherwise leaves
        the position unchanged and returns None.
        """
        balance = 1
        for i in range(self._pos, len(self._tokens)):
            tok = self._tokens[i]
            if tok.kind is not TokenKind.LITERAL:
                continue
            if tok.value == open_char:
                balance += 1
            elif tok.value == close_char:
                balance -= 1
            if balance == 0:
                span = self._tokens[self._pos:i]
                self._pos = i + 1
                return TokenCursor(span)
        return None


def parse_markup(text: str) -> list[AstNode]:
    """Tokenize and parse a markup string."""
    return parse(tokenize(text))


def parse(tokens: list[Token]) -> list[AstNode]:
    """Parse a token list into the top-level node sequence."""
    return _parse_sequence(TokenCursor(list(tokens)))


def _parse_sequence(cursor: TokenCursor) -> list[AstNode]:
    """Parse nodes until an unmatched close brace (consumed) or end of input."""
    nodes: list[AstNode] = []
    while not cursor.at_end():
        tok = cursor.next()

        if tok.is_structural("}"):
            return nodes

        if tok.is_structural("{"):
            nodes.append(GroupNode(_parse_sequence(cursor)))
            continue

        if tok.is_structural("^") or tok.is_structural("_"):
            _attach_script(nodes, tok.value, cursor)
            continue

        if tok.kind is TokenKind.COMMAND:
            node = _parse_command(tok.value, cursor)
            if node is not None:
                nodes.append(node)
            continue

        if tok.kind is TokenKind.ROW_BREAK:
            # Outside a grid a row break lays out as a zero-width SEP box
            nodes.append(CharNode(ROW_BREAK, AtomType.SEP))
            continue

        value = tok.value
        if value in DELIMITER_PAIRS:
            span = cursor.take_balanced(value, DELIMITER_PAIRS[value])
            if span is None:
                logger.debug("Unbalanced %r, emitting a plain OPEN atom", value)
                nodes.append(CharNode(value, AtomType.OPEN))
            else:
                nodes.append(DelimNode(open=value, children=_parse_sequence(span)))
        elif value in CLOSING_DELIMITERS:
            nodes.append(CharNode(value, AtomType.CLOSE))
        elif value == CELL_SEPARATOR:
            # Stray & outside a grid: drawn as a glyph, typed SEP so it takes no glue
            nodes.append(CharNode(CELL_SEPARATOR, AtomType.SEP))
        else:
            nodes.append(_char_node(value))

    return nodes


def _attach_script(nodes: list[AstNode], op: str, cursor: TokenCursor) -> None:
    """Attach a ``^``/``_`` script to the preceding node, merging sup+sub."""
    if not nodes:
        logger.debug("Dropping %r with no preceding node", op)
        return
    prev = nodes.pop()
    script = _read_argument(cursor)

    if op == "^":
        if isinstance(prev, ScriptNode) and prev.kind == "sub":
            nodes.append(ScriptNode(prev.base, sup=script, sub=prev.sub))
        else:
            nodes.append(ScriptNode(prev, sup=script))
    else:
        if isinstance(prev, ScriptNode) and prev.kind == "sup":
            nodes.append(ScriptNode(prev.base, sup=prev.sup, sub=script))
        else:
            nodes.append(ScriptNode(prev, sub=script))


def _parse_command(name: str, cursor: TokenCursor) -> AstNode | None:
    if name in _IGNORED_COMMANDS:
        return None

    if name == "frac":
        num = _read_argument(cursor)
        den = _read_argument(cursor)
        return FracNode(num, den)

    if name == "sqrt":
        return SqrtNode(_read_argument(cursor))

    if name == "box":
        return PlaceholderNode(width_factor=1.0, mode=PlaceholderMode.BOX)
    if name == "widebox":
        return PlaceholderNode(width_factor=WIDE_BOX_FACTOR, mode=PlaceholderMode.BOX)
    if name == "gap":
        return PlaceholderNode(width_factor=1.0, mode=PlaceholderMode.UNDERLINE)

    next_tok = cursor.peek()
    if name in ("pmatrix", "bmatrix") or (
        name == "table" and next_tok is not None and next_tok.is_structural("{")
    ):
        arg = _read_argument(cursor)
        children = arg.children if isinstance(arg, GroupNode) else []
        return MatrixNode(rows=_split_rows(children), is_table=name == "table")

    if name == "mat":
        return MatrixNode(
            rows=[[[_blank_underline()] for _ in range(2)] for _ in range(2)]
        )

    if name == "table":
        return _default_table()

    symbol = lookup(name)
    if symbol is not None:
        return CharNode(symbol.char, symbol.atom_type)

    logger.debug("Unknown command \\%s rendered as text", name)
    return CharNode(name, AtomType.ORD, upright=True)


def _read_argument(cursor: TokenCursor) -> AstNode:
    """Read one argument: a braced group or a single token."""
    tok = cursor.next()
    if tok is None:
        return CharNode(MISSING_ARGUMENT)
    if tok.is_structural("{"):
        return GroupNode(_parse_sequence(cursor))
    if tok.kind is TokenKind.COMMAND:
        symbol = lookup(tok.value)
        if symbol is None:
            logger.debug("Unsupported command argument \\%s", tok.value)
            return CharNode(MISSING_ARGUMENT)
        return CharNode(symbol.char, symbol.atom_type)
    if tok.kind is TokenKind.ROW_BREAK:
        return CharNode(ROW_BREAK, AtomType.SEP)
    return _char_node(tok.value)


def _char_node(value: str) -> CharNode:
    symbol = lookup(value)
    if symbol is not None:
        return CharNode(symbol.char, symbol.atom_type)
    return CharNode(value, AtomType.ORD)


def _split_rows(children: list[AstNode]) -> list[list[list[AstNode]]]:
    """Split a flat node list into rows (row breaks) and cells (``&``)."""
    rows: list[list[list[AstNode]]] = []
    row: list[list[AstNode]] = []
    cell: list[AstNode] = []
    for node in children:
        if isinstance(node, CharNode) and node.is_row_break:
            row.append(cell)
            rows.append(row)
            row = []
            cell = []
        elif isinstance(node, CharNode) and node.is_cell_separator:
            row.append(cell)
            cell = []
        else:
            cell.append(node)
    if cell:
        row.append(cell)
    if row:
        rows.append(row)
    return rows


def _blank_underline() -> PlaceholderNode:
    return PlaceholderNode(width_factor=None, mode=PlaceholderMode.UNDERLINE)


def _default_table() -> MatrixNode:
    """Bare ``\\table``: a 3x3 table with a header row."""
    rows = [["A", "B", "C"], ["1", "2", "3"], ["4", "5", "6"]]
    return MatrixNode(
        rows=[[[CharNode(text)] for text in row] for row in rows],
        is_table=True,
    )
