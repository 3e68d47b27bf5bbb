"""Tests for the math markup parser."""

import pytest

from mathbox.parser.markup import TokenCursor, parse, parse_markup
from mathbox.parser.model import (
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
)
from mathbox.parser.tokenizer import tokenize


def _atoms(nodes):
    return [n.atom_type for n in nodes]


def test_atom_sequence():
    nodes = parse_markup("a+b=c")
    assert _atoms(nodes) == [
        AtomType.ORD,
        AtomType.BIN,
        AtomType.ORD,
        AtomType.REL,
        AtomType.ORD,
    ]


def test_minus_becomes_unicode_minus():
    (a, minus, b) = parse_markup("a-b")
    assert minus == CharNode("−", AtomType.BIN)


@pytest.mark.parametrize("markup,char,atom", [
    (r"\pi", "π", AtomType.ORD),
    (r"\leq", "≤", AtomType.REL),
    (r"\times", "×", AtomType.BIN),
    (r"\rightarrow", "→", AtomType.REL),
    (",", ",", AtomType.PUNCT),
    (";", ";", AtomType.PUNCT),
    ("<", "<", AtomType.REL),
])
def test_symbol_table(markup, char, atom):
    assert parse_markup(markup) == [CharNode(char, atom)]


def test_unknown_command_becomes_upright_text():
    assert parse_markup(r"\sin") == [CharNode("sin", AtomType.ORD, upright=True)]


def test_parse_accepts_token_list():
    assert parse(tokenize("xy")) == [CharNode("x"), CharNode("y")]


class TestGroups:
    def test_braced_group(self):
        assert parse_markup("{ab}") == [GroupNode([CharNode("a"), CharNode("b")])]

    def test_unclosed_group_ends_at_input_end(self):
        assert parse_markup("{a") == [GroupNode([CharNode("a")])]

    def test_unmatched_close_brace_ends_parse(self):
        assert parse_markup("a}b") == [CharNode("a")]


class TestScripts:
    def test_superscript(self):
        (node,) = parse_markup("x^2")
        assert node == ScriptNode(CharNode("x"), sup=CharNode("2"))
        assert node.kind == "sup"

    def test_subscript_group(self):
        (node,) = parse_markup("x_{ij}")
        assert node.kind == "sub"
        assert node.sub == GroupNode([CharNode("i"), CharNode("j")])

    def test_sub_then_sup_merges(self):
        (node,) = parse_markup("x_i^2")
        assert node == ScriptNode(CharNode("x"), sup=CharNode("2"), sub=CharNode("i"))
        assert node.kind == "supsub"

    def test_sup_then_sub_merges(self):
        (node,) = parse_markup("x^2_i")
        assert node.kind == "supsub"
        assert node.base == CharNode("x")

    def test_orphan_script_is_dropped(self):
        assert parse_markup("^2") == [CharNode("2")]

    def test_script_symbol_argument(self):
        (node,) = parse_markup(r"e^\pi")
        assert node.sup == CharNode("π", AtomType.ORD)

    def test_script_unknown_command_argument(self):
        (node,) = parse_markup(r"e^\foo")
        assert node.sup == CharNode("?")

    def test_missing_script_argument(self):
        (node,) = parse_markup("x^")
        assert node.sup == CharNode("?")


class TestCommands:
    def test_fraction_with_groups(self):
        assert parse_markup(r"\frac{1}{2}") == [
            FracNode(GroupNode([CharNode("1")]), GroupNode([CharNode("2")]))
        ]

    def test_fraction_single_tokens(self):
        assert parse_markup(r"\frac12") == [FracNode(CharNode("1"), CharNode("2"))]

    def test_fraction_missing_arguments(self):
        assert parse_markup(r"\frac") == [FracNode(CharNode("?"), CharNode("?"))]

    def test_sqrt(self):
        assert parse_markup(r"\sqrt{x}") == [SqrtNode(GroupNode([CharNode("x")]))]

    def test_placeholders(self):
        box, wide, gap = parse_markup(r"\box \widebox \gap")
        assert box == PlaceholderNode(1.0, PlaceholderMode.BOX)
        assert wide == PlaceholderNode(1.5, PlaceholderMode.BOX)
        assert gap == PlaceholderNode(1.0, PlaceholderMode.UNDERLINE)

    def test_left_right_ignored(self):
        assert parse_markup(r"\left( a \right)") == [DelimNode("(", [CharNode("a")])]


class TestDelimiters:
    def test_balanced_parens(self):
        (node,) = parse_markup("(a+b)")
        assert isinstance(node, DelimNode)
        assert node.open == "("
        assert _atoms(node.children) == [AtomType.ORD, AtomType.BIN, AtomType.ORD]

    def test_nested(self):
        assert parse_markup("((a))") == [
            DelimNode("(", [DelimNode("(", [CharNode("a")])])
        ]

    def test_brackets(self):
        assert parse_markup("[x]") == [DelimNode("[", [CharNode("x")])]

    def test_unbalanced_open(self):
        assert parse_markup("(a") == [CharNode("(", AtomType.OPEN), CharNode("a")]

    def test_stray_close(self):
        assert parse_markup("a)") == [CharNode("a"), CharNode(")", AtomType.CLOSE)]

    def test_balanced_scan_ignores_braces(self):
        (node,) = parse_markup("({a)}")
        assert isinstance(node, DelimNode)
        assert node.children == [GroupNode([CharNode("a")])]


class TestMatrices:
    def test_pmatrix_rows_and_cells(self):
        (node,) = parse_markup(r"\pmatrix{a & b \\ c & d}")
        assert isinstance(node, MatrixNode)
        assert not node.is_table
        assert node.rows == [
            [[CharNode("a")], [CharNode("b")]],
            [[CharNode("c")], [CharNode("d")]],
        ]

    def test_trailing_row_break_and_cell_dropped(self):
        (node,) = parse_markup(r"\bmatrix{a & \\}")
        assert node.rows == [[[CharNode("a")], []]]
        (node,) = parse_markup(r"\bmatrix{a &}")
        assert node.rows == [[[CharNode("a")]]]

    def test_table_with_body(self):
        (node,) = parse_markup(r"\table{x & y}")
        assert node.is_table
        assert node.rows == [[[CharNode("x")], [CharNode("y")]]]

    def test_bare_table_is_default_grid(self):
        (node,) = parse_markup(r"\table")
        assert node.is_table
        assert [[cell[0].value for cell in row] for row in node.rows] == [
            ["A", "B", "C"],
            ["1", "2", "3"],
            ["4", "5", "6"],
        ]

    def test_mat_is_grid_of_underlines(self):
        (node,) = parse_markup(r"\mat")
        assert len(node.rows) == 2
        for row in node.rows:
            assert len(row) == 2
            for (cell,) in row:
                assert cell == PlaceholderNode(None, PlaceholderMode.UNDERLINE)


class TestTokenCursor:
    def test_take_balanced_splices_span(self):
        cursor = TokenCursor(tokenize("a(b)c)d"))
        cursor.next()
        cursor.next()
        span = cursor.take_balanced("(", ")")
        assert [t.value for t in _drain(span)] == ["b"]
        assert cursor.next().value == "c"

    def test_take_balanced_without_match(self):
        cursor = TokenCursor(tokenize("ab"))
        assert cursor.take_balanced("(", ")") is None
        assert cursor.peek().value == "a"


def _drain(cursor):
    out = []
    while not cursor.at_end():
        out.append(cursor.next())
    return out
