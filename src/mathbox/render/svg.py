"""SVG generation for typeset expressions using drawsvg."""

from __future__ import annotations

from typing import Iterable, Mapping

import drawsvg as draw

from mathbox.layout.context import PlaceholderStyle, StyleContext
from mathbox.render.constants import (
    CANVAS_PADDING,
    HANDLE_RADIUS,
    NODE_LABEL_SIZE,
    NODE_RADIUS,
    SURD_CANVAS_PADDING,
)
from mathbox.render.primitives import (
    FilledPath,
    LineSegment,
    Primitive,
    RectShape,
    TextRun,
)
from mathbox.render.style import Theme
from mathbox.surd.diagnostics import get_control_nodes
from mathbox.surd.generator import SurdResult
from mathbox.text import TexEngine

CROP_CLASS = "graph-content"
# Hyphenated and reserved names go in as literal attribute keys
_CROP_ATTRS = {"class": CROP_CLASS}


def render_svg(
    primitives: Iterable[Primitive],
    width: float,
    height: float,
    theme: Theme,
) -> str:
    """Serialize drawing primitives onto a ``width`` x ``height`` canvas."""
    d = draw.Drawing(width, height)
    if theme.background_color != "none":
        d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))
    for prim in primitives:
        d.append(_element(prim))
    return d.as_svg()


def render_markup_svg(
    text: str,
    theme: Theme,
    font_size: float | None = None,
    mode: str = "math",
    debug: bool = False,
    engine: TexEngine | None = None,
    placeholder_style: PlaceholderStyle | None = None,
    overrides: Mapping[int, PlaceholderStyle] | None = None,
    selected: Iterable[int] = (),
    padding: float = CANVAS_PADDING,
) -> str:
    """Typeset ``text`` and render it to a tightly sized SVG string."""
    engine = engine or TexEngine()
    size = font_size or theme.font_size
    # Measure first so the baseline can sit below the tallest part
    box = engine.layout(text, StyleContext(font_size=size, math=False), mode)
    primitives = engine.render(
        text,
        padding,
        padding + box.ascent,
        size,
        color=theme.text_color,
        mode=mode,
        debug=debug,
        placeholder_style=placeholder_style,
        overrides=overrides,
        selected=selected,
    )
    return render_svg(
        primitives,
        box.width + 2 * padding,
        box.height + 2 * padding,
        theme,
    )


def render_surd_svg(
    result: SurdResult,
    theme: Theme,
    show_nodes: bool = False,
    scale: float = 20.0,
) -> str:
    """Draw a generator result, optionally with its control-node overlay.

    The outline is drawn in design units and scaled by ``scale`` px per unit.
    """
    m = result.metrics
    v = result.vinculum
    pad = SURD_CANVAS_PADDING
    min_x = min(m.min_x, v.x) - pad
    max_x = max(m.max_x, v.x + v.width) + pad
    min_y = min(m.min_y, v.y) - pad
    max_y = max(m.max_y, 0.0) + pad

    width = (max_x - min_x) * scale
    height = (max_y - min_y) * scale
    d = draw.Drawing(width, height)
    if theme.background_color != "none":
        d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    g = draw.Group(transform=f"scale({scale}) translate({-min_x}, {-min_y})")
    g.append(draw.Line(
        min_x, 0, max_x, 0,
        stroke=theme.baseline_color,
        stroke_width=1.0 / scale,
    ))
    g.append(draw.Rectangle(
        v.x, v.y, v.width, v.height,
        fill=theme.vinculum_fill,
    ))
    g.append(draw.Path(
        d=result.path_data,
        fill=theme.surd_fill or theme.text_color,
        **_CROP_ATTRS,
    ))
    if show_nodes:
        _render_control_nodes(g, result, theme)
    d.append(g)
    return d.as_svg()


def _render_control_nodes(g: draw.Group, result: SurdResult, theme: Theme) -> None:
    """Anchors as dots, handles as smaller dots joined to their anchor."""
    for node in get_control_nodes(result.raw_points):
        ax, ay = node.anchor
        for present, (hx, hy) in (
            (node.has_in_handle, node.in_handle),
            (node.has_out_handle, node.out_handle),
        ):
            if not present:
                continue
            g.append(draw.Line(
                ax, ay, hx, hy,
                stroke=theme.handle_line_color,
                stroke_width=HANDLE_RADIUS / 2,
            ))
            g.append(draw.Circle(hx, hy, HANDLE_RADIUS, fill=theme.handle_color))
        g.append(draw.Circle(ax, ay, NODE_RADIUS, fill=theme.node_color))
        g.append(draw.Text(
            str(node.index),
            NODE_LABEL_SIZE,
            ax + NODE_RADIUS * 1.5, ay - NODE_RADIUS,
            fill=theme.node_color,
            font_family="monospace",
        ))


def _element(prim: Primitive) -> draw.DrawingElement:
    if isinstance(prim, TextRun):
        return _text(prim)
    if isinstance(prim, LineSegment):
        return draw.Line(
            prim.x1, prim.y1, prim.x2, prim.y2,
            stroke=prim.stroke,
            stroke_width=prim.stroke_width,
        )
    if isinstance(prim, FilledPath):
        return draw.Path(
            d=prim.d,
            fill=prim.fill,
            stroke="none",
            transform=prim.transform,
            **_CROP_ATTRS,
        )
    if isinstance(prim, RectShape):
        return _rect(prim)
    raise TypeError(f"Unsupported primitive {type(prim).__name__}")


def _text(run: TextRun) -> draw.Text:
    extra = {}
    if run.scale_y != 1.0:
        extra["transform"] = f"scale(1, {run.scale_y})"
        extra["style"] = "white-space: pre; transform-box: fill-box; transform-origin: center"
    else:
        extra["style"] = "white-space: pre"
    return draw.Text(
        run.text,
        run.font_size,
        run.x, run.y,
        fill=run.color,
        font_family=run.font_family,
        font_style="italic" if run.italic else "normal",
        font_weight="bold" if run.bold else "normal",
        text_anchor=run.anchor,
        **_CROP_ATTRS,
        **extra,
    )


def _rect(rect: RectShape) -> draw.Rectangle:
    attrs: dict[str, object] = {
        "fill": rect.fill,
        "stroke": rect.stroke,
    }
    if rect.stroke_width:
        attrs["stroke_width"] = rect.stroke_width
    if rect.opacity != 1.0:
        attrs["opacity"] = rect.opacity
    if rect.role == "crop":
        attrs["class"] = CROP_CLASS
        attrs["pointer_events"] = "none"
    elif rect.role == "hit":
        attrs["pointer_events"] = "all"
        attrs["style"] = "cursor: pointer"
    elif rect.role == "debug":
        attrs["pointer_events"] = "none"
    if rect.index is not None:
        attrs["data-placeholder-index"] = rect.index
    return draw.Rectangle(rect.x, rect.y, rect.width, rect.height, **attrs)
