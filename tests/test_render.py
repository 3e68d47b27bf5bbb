"""Tests for SVG rendering."""

import xml.etree.ElementTree as ET

import pytest

from mathbox.layout import StyleContext
from mathbox.render.primitives import FilledPath
from mathbox.render.svg import (
    CROP_CLASS,
    render_markup_svg,
    render_surd_svg,
    render_svg,
)
from mathbox.surd import SurdGenerator
from mathbox.text import TexEngine
from mathbox.themes import DARK_THEME, LIGHT_THEME

SVG_NS = "{http://www.w3.org/2000/svg}"


def _parse(svg):
    return ET.fromstring(svg)


def _all(root, tag):
    return list(root.iter(SVG_NS + tag))


def test_render_produces_valid_svg():
    root = _parse(render_markup_svg("a+b", LIGHT_THEME))
    assert root.tag.endswith("svg")


def test_canvas_fits_expression():
    box = TexEngine().layout("a+b", StyleContext(font_size=20))
    root = _parse(render_markup_svg("a+b", LIGHT_THEME))
    assert float(root.get("width")) == pytest.approx(box.width + 20)
    assert float(root.get("height")) == pytest.approx(box.height + 20)


def test_glyphs_are_text_elements():
    root = _parse(render_markup_svg("a+b", LIGHT_THEME))
    texts = _all(root, "text")
    assert [t.text for t in texts] == ["a", "+", "b"]
    assert texts[0].get("font-style") == "italic"
    assert texts[1].get("font-style") == "normal"
    assert all(t.get("class") == CROP_CLASS for t in texts)


def test_light_theme_has_no_background():
    root = _parse(render_markup_svg("a", LIGHT_THEME))
    assert _all(root, "rect") == []


def test_dark_theme_background_and_text():
    root = _parse(render_markup_svg("a", DARK_THEME))
    (bg,) = _all(root, "rect")
    assert bg.get("fill") == DARK_THEME.background_color
    (text,) = _all(root, "text")
    assert text.get("fill") == DARK_THEME.text_color


def test_placeholders_carry_indices():
    root = _parse(render_markup_svg("\\box + \\gap", LIGHT_THEME))
    hits = [r for r in _all(root, "rect") if r.get("pointer-events") == "all"]
    assert [r.get("data-placeholder-index") for r in hits] == ["0", "1"]
    crops = [r for r in _all(root, "rect") if r.get("class") == CROP_CLASS]
    assert len(crops) == 2
    assert all(r.get("pointer-events") == "none" for r in crops)


def test_selected_placeholder_is_highlighted():
    root = _parse(render_markup_svg("\\box\\box", LIGHT_THEME, selected=[1]))
    indexed = [r.get("data-placeholder-index") for r in _all(root, "rect")
               if r.get("data-placeholder-index") is not None]
    # halo plus hit region for the selection, hit region for the other
    assert indexed == ["0", "1", "1"]


def test_radical_is_a_transformed_path():
    root = _parse(render_markup_svg("\\sqrt{x}", LIGHT_THEME))
    (path,) = _all(root, "path")
    assert path.get("d").startswith("M ")
    assert path.get("transform").startswith("translate(")
    assert path.get("class") == CROP_CLASS


def test_debug_outlines():
    plain = _parse(render_markup_svg("ab", LIGHT_THEME))
    debug = _parse(render_markup_svg("ab", LIGHT_THEME, debug=True))
    assert len(_all(debug, "rect")) > len(_all(plain, "rect"))
    assert any(r.get("stroke") == "red" for r in _all(debug, "rect"))


def test_text_mode():
    root = _parse(render_markup_svg("x is $x$", LIGHT_THEME, mode="text"))
    styles = [t.get("font-style") for t in _all(root, "text")]
    assert styles[0] == "normal"
    assert styles[-1] == "italic"


def test_table_lines():
    root = _parse(render_markup_svg("\\table", LIGHT_THEME))
    assert len(_all(root, "line")) == 4
    assert len(_all(root, "text")) == 9


def test_stretched_delimiter_glyph():
    root = _parse(render_markup_svg("(a)", LIGHT_THEME))
    parens = [t for t in _all(root, "text") if t.text in "()"]
    assert len(parens) == 2
    assert all("scale(1," in t.get("transform") for t in parens)


def test_assembled_delimiters_are_paths():
    root = _parse(render_markup_svg("(\\frac{a}{b})", LIGHT_THEME))
    assert len(_all(root, "path")) >= 4


def test_unsupported_primitive():
    with pytest.raises(TypeError):
        render_svg([object()], 10, 10, LIGHT_THEME)


def test_render_svg_raw_primitive():
    root = _parse(render_svg([FilledPath("M 0 0 L 1 1 Z", "#000")], 5, 5, LIGHT_THEME))
    (path,) = _all(root, "path")
    assert path.get("transform") == "translate(0.0, 0.0) scale(1.0)"


class TestSurdSvg:
    def test_outline_and_vinculum(self):
        result = SurdGenerator().generate_path(10, 20)
        root = _parse(render_surd_svg(result, LIGHT_THEME))
        (path,) = _all(root, "path")
        assert path.get("d") == result.path_data
        assert len(_all(root, "rect")) == 1
        assert _all(root, "circle") == []

    def test_node_overlay(self):
        result = SurdGenerator().generate_path(10, 20)
        root = _parse(render_surd_svg(result, DARK_THEME, show_nodes=True))
        assert len(_all(root, "circle")) >= 16
        labels = [t.text for t in _all(root, "text")]
        assert labels[:3] == ["0", "1", "2"]
