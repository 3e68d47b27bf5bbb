"""Mixed text and math labels.

Text between ``$`` signs is math; everything else is upright text set
glyph by glyph with no glue. ``TexEngine`` wraps a ``MathLayoutEngine``
and adds alignment and an optional translucent label background.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from mathbox.layout.boxes import Box, HorizontalBox, render_box
from mathbox.layout.context import PlaceholderStyle, StyleContext
from mathbox.layout.engine import MathLayoutEngine
from mathbox.layout.metrics import DEFAULT_METRICS, MathMetrics
from mathbox.parser.markup import parse_markup
from mathbox.parser.model import CharNode
from mathbox.render.constants import (
    BACKGROUND_FILL,
    BACKGROUND_OPACITY,
    BACKGROUND_PADDING,
)
from mathbox.render.primitives import Primitive, RectShape
from mathbox.surd.generator import SurdGenerator
from mathbox.surd.tuning import DEFAULT_TUNING, SurdTuning

MATH_DELIMITER = "$"
ALIGNMENTS = ("start", "middle", "end")


@dataclass(frozen=True)
class Measurement:
    width: float
    height: float
    box: Box


class TexEngine:
    def __init__(
        self,
        metrics: MathMetrics | None = None,
        tuning: SurdTuning | None = None,
        generator: SurdGenerator | None = None,
    ) -> None:
        self.math = MathLayoutEngine(
            generator or SurdGenerator(),
            metrics or DEFAULT_METRICS,
            tuning or DEFAULT_TUNING,
        )

    def measure(self, text: str, font_size: float) -> Measurement:
        """Size of a mixed-mode label."""
        box = self.layout_mixed(text, StyleContext(font_size=font_size, math=False))
        return Measurement(box.width, box.height, box)

    def layout(self, text: str, ctx: StyleContext, mode: str = "math") -> Box:
        """Build ``text`` as pure math markup or as a mixed-mode label."""
        if mode == "math":
            return self.math.build(parse_markup(text), ctx.derive(math=True))
        if mode == "text":
            return self.layout_mixed(text, ctx)
        raise ValueError(f"Unknown layout mode {mode!r}; expected 'math' or 'text'")

    def layout_mixed(self, text: str, ctx: StyleContext) -> Box:
        """Lay out alternating text and ``$math$`` segments in one row."""
        ctx = ctx.fresh_pass()
        items: list[tuple[Box, float]] = []
        x = 0.0
        ascent = 0.0
        descent = 0.0
        for i, part in enumerate(text.split(MATH_DELIMITER)):
            if not part:
                continue
            if i % 2 == 1:
                box = self.math.build_row(parse_markup(part), ctx.derive(math=True))
            else:
                box = self.math.build_row(
                    [CharNode(ch, upright=True) for ch in part], ctx.derive(math=False)
                )
            items.append((box, x))
            x += box.width
            ascent = max(ascent, box.ascent)
            descent = max(descent, box.descent)
        return HorizontalBox(x, ascent, descent, items)

    def render(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float,
        color: str = "#000000",
        align: str = "start",
        background: bool = False,
        mode: str = "math",
        debug: bool = False,
        placeholder_style: PlaceholderStyle | None = None,
        overrides: Mapping[int, PlaceholderStyle] | None = None,
        selected: Iterable[int] = (),
    ) -> list[Primitive]:
        """Lay out and draw a label anchored at ``(x, y)`` on its baseline."""
        if align not in ALIGNMENTS:
            raise ValueError(f"Unknown alignment {align!r}")
        ctx = StyleContext(
            font_size=font_size,
            math=False,
            color=color,
            debug=debug,
            placeholder_style=placeholder_style or PlaceholderStyle(),
            overrides=dict(overrides or {}),
            selected=frozenset(selected),
        )
        box = self.layout(text, ctx, mode)

        start_x = x
        if align == "middle":
            start_x -= box.width / 2
        elif align == "end":
            start_x -= box.width

        out: list[Primitive] = []
        if background:
            out.append(
                RectShape(
                    start_x - BACKGROUND_PADDING,
                    y - box.ascent - BACKGROUND_PADDING,
                    box.width + 2 * BACKGROUND_PADDING,
                    box.height + 2 * BACKGROUND_PADDING,
                    fill=BACKGROUND_FILL,
                    role="background",
                    opacity=BACKGROUND_OPACITY,
                )
            )
        out.extend(render_box(box, start_x, y, ctx))
        return out
