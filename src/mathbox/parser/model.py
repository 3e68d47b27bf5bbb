"""Data model for math markup: tokens, atom classes and the parse tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class TokenKind(Enum):
    """Lexical category of a markup token."""

    COMMAND = "command"
    STRUCTURAL = "structural"
    LITERAL = "literal"
    ROW_BREAK = "row_break"


@dataclass(frozen=True)
class Token:
    """A single markup token.

    COMMAND values are the bare command name (``frac``, not ``\\frac``).
    """

    kind: TokenKind
    value: str

    def is_structural(self, char: str) -> bool:
        return self.kind is TokenKind.STRUCTURAL and self.value == char


class AtomType(Enum):
    """Spacing class of a box, as in TeX's math atoms."""

    ORD = "ORD"
    BIN = "BIN"
    REL = "REL"
    OPEN = "OPEN"
    CLOSE = "CLOSE"
    PUNCT = "PUNCT"
    INNER = "INNER"
    OP = "OP"
    BOX = "BOX"
    SEP = "SEP"


class PlaceholderMode(Enum):
    """How a fill-in placeholder is drawn."""

    BOX = "box"
    UNDERLINE = "underline"


ROW_BREAK = "\\\\"
"""Text value carried by row-break char nodes."""

CELL_SEPARATOR = "&"


@dataclass
class CharNode:
    """A literal glyph (or, when ``upright``, a run of upright text)."""

    value: str
    atom_type: AtomType = AtomType.ORD
    upright: bool = False

    @property
    def is_row_break(self) -> bool:
        return self.atom_type is AtomType.SEP and self.value == ROW_BREAK

    @property
    def is_cell_separator(self) -> bool:
        return self.atom_type is AtomType.SEP and self.value == CELL_SEPARATOR


@dataclass
class GroupNode:
    """A braced (or implicit) horizontal list of nodes."""

    children: list[AstNode] = field(default_factory=list)


@dataclass
class FracNode:
    num: AstNode
    den: AstNode


@dataclass
class SqrtNode:
    child: AstNode


@dataclass
class ScriptNode:
    """A base with a superscript, a subscript, or both."""

    base: AstNode
    sup: AstNode | None = None
    sub: AstNode | None = None

    @property
    def kind(self) -> str:
        if self.sup is not None and self.sub is not None:
            return "supsub"
        return "sup" if self.sup is not None else "sub"


@dataclass
class DelimNode:
    """Content wrapped in an auto-sized bracket pair."""

    open: str
    children: list[AstNode] = field(default_factory=list)


@dataclass
class PlaceholderNode:
    """An exam-style fill-in box or underline."""

    width_factor: float | None = 1.0
    mode: PlaceholderMode = PlaceholderMode.BOX


@dataclass
class MatrixNode:
    """A grid of cells; each cell is a list of nodes laid out as a group.

    ``is_table`` selects bordered table mode instead of a bracketed matrix.
    """

    rows: list[list[list[AstNode]]] = field(default_factory=list)
    is_table: bool = False


AstNode = Union[
    CharNode,
    GroupNode,
    FracNode,
    SqrtNode,
    ScriptNode,
    DelimNode,
    PlaceholderNode,
    MatrixNode,
]

AST_NODE_TYPES: tuple[type, ...] = (
    CharNode,
    GroupNode,
    FracNode,
    SqrtNode,
    ScriptNode,
    DelimNode,
    PlaceholderNode,
    MatrixNode,
)
