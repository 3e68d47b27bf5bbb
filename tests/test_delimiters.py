"""Tests for auto-sized bracket planning."""

import pytest

from mathbox.layout.delimiters import (
    assemble_delimiter,
    covered_height,
    delimiter_width,
    glyph_baseline_shift,
    resolve_delimiter,
)


@pytest.mark.parametrize("content,factor,shortfall,expected", [
    (20.0, 0.9, 2.0, 20.0),
    (100.0, 1.1, 2.0, 110.0),
    (100.0, 0.5, 2.0, 100.0),
])
def test_covered_height_never_short_of_content(content, factor, shortfall, expected):
    assert covered_height(content, factor, shortfall) == pytest.approx(expected)


def test_width_from_outline():
    assert delimiter_width("(", 20) == pytest.approx(5.6)
    assert delimiter_width("[", 20) == pytest.approx(6.5)


def test_unknown_delimiter_width_falls_back():
    assert delimiter_width("{", 20) == pytest.approx(8.0)


def test_resolve_delimiter():
    assert resolve_delimiter("[") == "["
    assert resolve_delimiter("{") == "("
    assert resolve_delimiter("{", ")") == ")"


def test_short_bracket_is_single_glyph():
    a = assemble_delimiter("(", 23.9, 0.9, 2.0, 20)
    assert not a.is_assembled
    assert a.pieces == ()
    assert a.height == pytest.approx(23.9)
    scale = 23.9 / 16
    assert a.glyph.font_size == pytest.approx(20 * scale)
    assert a.glyph.scale_y == pytest.approx(scale)


def test_glyph_stretch_is_capped():
    a = assemble_delimiter("(", 23.0, 0.9, 2.0, 10)
    assert a.glyph.scale_y == 1.5


def test_tall_bracket_is_assembled():
    a = assemble_delimiter("(", 24.1, 0.9, 2.0, 20)
    assert a.is_assembled
    assert [p.part for p in a.pieces] == ["top", "bot", "ext"]
    top, bot, ext = a.pieces
    assert top.y == 0
    assert bot.y == pytest.approx(24.1 - 10)
    assert ext.y == pytest.approx(9.0)
    assert ext.scale_y == pytest.approx(6.1 / 1000)
    assert top.scale_x == top.scale_y == pytest.approx(0.01)


def test_caps_that_meet_need_no_extension():
    a = assemble_delimiter("[", 30.0, 0.9, 4.0, 40)
    assert [p.part for p in a.pieces] == ["top", "bot"]


def test_unknown_tall_delimiter_draws_nothing():
    a = assemble_delimiter("{", 50.0, 0.9, 2.0, 20)
    assert a.is_assembled
    assert a.pieces == ()


def test_glyph_baseline_shift():
    assert glyph_baseline_shift(10, 4) == pytest.approx(-0.6)
