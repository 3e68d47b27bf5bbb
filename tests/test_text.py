"""Tests for mixed text/math labels."""

import pytest

from mathbox.layout import StyleContext, placeholder_order
from mathbox.layout.fonts import text_width_ratio, width_table
from mathbox.render.primitives import RectShape, TextRun
from mathbox.text import TexEngine


@pytest.fixture
def tex():
    return TexEngine()


def test_measure_plain_text(tex):
    m = tex.measure("ab", 20)
    expected = text_width_ratio("ab", width_table(False, False)) * 20
    assert m.width == pytest.approx(expected)
    assert m.height == pytest.approx(20.0)
    assert m.box.width == m.width


def test_text_segments_have_no_glue(tex):
    ctx = StyleContext(font_size=20)
    as_math = tex.layout("a+b", ctx, "math")
    as_text = tex.layout("a+b", ctx, "text")
    assert as_math.width > as_text.width


def test_math_segments_are_typeset(tex):
    plain = tex.measure("x = ", 20)
    mixed = tex.measure("x = $\\frac{1}{2}$", 20)
    assert mixed.width > plain.width
    assert mixed.height > plain.height


def test_unknown_mode(tex):
    with pytest.raises(ValueError, match="Unknown layout mode"):
        tex.layout("a", StyleContext(), "tex")


def test_placeholder_indices_continue_across_segments(tex):
    box = tex.layout("$\\box$ or $\\gap$", StyleContext(), "text")
    assert placeholder_order(box) == [0, 1]
    out = tex.render("$\\box$ or $\\gap$", 0, 0, 20, mode="text")
    hits = [p.index for p in out if isinstance(p, RectShape) and p.role == "hit"]
    assert hits == [0, 1]


@pytest.mark.parametrize("align,factor", [("start", 0), ("middle", 0.5), ("end", 1)])
def test_alignment(tex, align, factor):
    width = tex.measure("a", 20).width
    out = tex.render("a", 100, 50, 20, align=align, mode="text")
    (run,) = out
    assert isinstance(run, TextRun)
    assert run.x == pytest.approx(100 - factor * width)
    assert run.y == 50


def test_bad_alignment(tex):
    with pytest.raises(ValueError, match="Unknown alignment"):
        tex.render("a", 0, 0, 20, align="justify")


def test_background(tex):
    out = tex.render("a+b", 10, 30, 20, background=True)
    bg = out[0]
    assert isinstance(bg, RectShape)
    assert bg.role == "background"
    assert bg.opacity == 0.8
    assert bg.x == pytest.approx(8.0)
    assert bg.y == pytest.approx(30 - 14.4 - 2)


def test_color_reaches_glyphs(tex):
    out = tex.render("x", 0, 0, 20, color="#ff0000")
    assert all(p.color == "#ff0000" for p in out if isinstance(p, TextRun))


def test_math_mode_letters_italic(tex):
    (run,) = tex.render("x", 0, 0, 20)
    assert run.italic
    (run,) = tex.render("x", 0, 0, 20, mode="text")
    assert not run.italic
