"""Box builder: turns a parse tree into a sized box tree.

Layout follows TeX's box-and-glue model in simplified form: atoms get a
spacing class, horizontal lists insert glue between class pairs, and
fractions, radicals, scripts, delimiters and grids each have their own
placement rule driven by ``MathMetrics``.

Metrics and radical tuning may be passed per call; the engine keeps its
own defaults and the injected ``SurdGenerator`` for everything else.
"""

from __future__ import annotations

import logging
from typing import Callable

from mathbox.layout.boxes import (
    Box,
    CharBox,
    DelimiterBox,
    EmptyBox,
    GridContentBox,
    HorizontalBox,
    PlaceholderBox,
    RadicalBox,
    RuleBox,
    TableGridBox,
    VerticalBox,
)
from mathbox.layout.constants import (
    BASE_FONT_SIZE,
    CHAR_ASCENT_RATIO,
    CHAR_DESCENT_RATIO,
    DELIMITER_PADDING,
    FRAC_CONTENT_SCALE,
    PLACEHOLDER_HEIGHT_RATIO,
    PLACEHOLDER_PADDING_LEFT,
    PLACEHOLDER_PADDING_RIGHT,
    PLACEHOLDER_STROKE_WIDTH,
    PLACEHOLDER_WIDTH_RATIO,
    TARGET_SLANT_WIDTH,
    X_HEIGHT_RATIO,
)
from mathbox.layout.context import StyleContext
from mathbox.layout.delimiters import resolve_delimiter
from mathbox.layout.fonts import text_width_ratio, width_table
from mathbox.layout.grid import calculate_grid_layout
from mathbox.layout.metrics import DEFAULT_METRICS, MathMetrics
from mathbox.parser.markup import parse_markup
from mathbox.parser.model import (
    AstNode,
    AtomType,
    CharNode,
    DelimNode,
    FracNode,
    GroupNode,
    MatrixNode,
    PlaceholderNode,
    ScriptNode,
    SqrtNode,
)
from mathbox.parser.symbols import DELIMITER_PAIRS
from mathbox.surd.generator import SurdGenerator
from mathbox.surd.tuning import DEFAULT_TUNING, SurdTuning

logger = logging.getLogger(__name__)


class MathLayoutEngine:
    """Builds box trees for parsed math markup."""

    def __init__(
        self,
        generator: SurdGenerator,
        metrics: MathMetrics = DEFAULT_METRICS,
        tuning: SurdTuning = DEFAULT_TUNING,
    ) -> None:
        self.generator = generator
        self.metrics = metrics
        self.tuning = tuning

    def layout(
        self,
        markup: str,
        ctx: StyleContext,
        metrics: MathMetrics | None = None,
        tuning: SurdTuning | None = None,
    ) -> Box:
        """Parse and build a markup string."""
        return self.build(parse_markup(markup), ctx, metrics, tuning)

    def build(
        self,
        nodes: list[AstNode],
        ctx: StyleContext,
        metrics: MathMetrics | None = None,
        tuning: SurdTuning | None = None,
    ) -> Box:
        """Build a top-level node list as one horizontal group.

        Placeholder indices start from zero for each call.
        """
        return self.build_row(nodes, ctx.fresh_pass(), metrics, tuning)

    def build_row(
        self,
        nodes: list[AstNode],
        ctx: StyleContext,
        metrics: MathMetrics | None = None,
        tuning: SurdTuning | None = None,
    ) -> Box:
        """Like ``build`` but continues the context's traversal counter."""
        builder = _BoxBuilder(
            self.generator, metrics or self.metrics, tuning or self.tuning
        )
        return builder.group(nodes, ctx)


class _BoxBuilder:
    """One build pass with fixed metrics and tuning."""

    def __init__(
        self, generator: SurdGenerator, metrics: MathMetrics, tuning: SurdTuning
    ) -> None:
        self.generator = generator
        self.metrics = metrics
        self.tuning = tuning

    def make_box(self, node: AstNode, ctx: StyleContext) -> Box:
        handler = _HANDLERS.get(type(node))
        if handler is None:
            raise TypeError(f"No box builder for node type {type(node).__name__}")
        return handler(self, node, ctx)

    # -- horizontal lists ---------------------------------------------------

    def group(self, children: list[AstNode], ctx: StyleContext) -> Box:
        if not children:
            return EmptyBox()

        items: list[tuple[Box, float]] = []
        x = 0.0
        ascent = 0.0
        descent = 0.0
        prev: AtomType | None = None
        for child in children:
            box = self.make_box(child, ctx)
            if ctx.math and prev is not None:
                x += self.metrics.glue(prev, box.atom_type) * ctx.font_size
            items.append((box, x))
            x += box.width
            ascent = max(ascent, box.ascent)
            descent = max(descent, box.descent)
            prev = box.atom_type
        return HorizontalBox(x, ascent, descent, items)

    def _group_node(self, node: GroupNode, ctx: StyleContext) -> Box:
        return self.group(node.children, ctx)

    # -- leaves -------------------------------------------------------------

    def _char(self, node: CharNode, ctx: StyleContext) -> Box:
        if node.is_row_break:
            # Stray row break: no width, no glue on either side
            box = EmptyBox()
            box.atom_type = AtomType.SEP
            return box

        text = node.value or "?"
        f = ctx.font_size
        italic = (
            ctx.math
            and not node.upright
            and node.atom_type is not AtomType.OP
            and len(text) == 1
            and text.isascii()
            and text.isalpha()
        )
        # Bold math uses bold italic metrics throughout
        table = width_table(ctx.bold, ctx.math if ctx.bold else italic)
        return CharBox(
            text,
            text_width_ratio(text, table) * f,
            f * CHAR_ASCENT_RATIO,
            f * CHAR_DESCENT_RATIO,
            node.atom_type,
            font_size=f,
            italic=italic,
            bold=ctx.bold,
        )

    def _placeholder(self, node: PlaceholderNode, ctx: StyleContext) -> Box:
        index = ctx.counter.next()
        style = ctx.placeholder_settings(index)
        f = ctx.font_size
        x_height = f * X_HEIGHT_RATIO

        raw_w = x_height * PLACEHOLDER_WIDTH_RATIO * (
            style.width_scale or node.width_factor or 1.0
        )
        raw_h = x_height * PLACEHOLDER_HEIGHT_RATIO * (style.height_scale or 1.0)
        pad_l = _first(style.padding_left, PLACEHOLDER_PADDING_LEFT)
        pad_r = _first(style.padding_right, PLACEHOLDER_PADDING_RIGHT)

        # Centered on the math axis
        axis = f * self.metrics.axis_height
        return PlaceholderBox(
            width=raw_w + pad_l + pad_r,
            visual_width=raw_w,
            ascent=axis + raw_h / 2,
            descent=raw_h / 2 - axis,
            stroke_width=_first(style.stroke_width, PLACEHOLDER_STROKE_WIDTH),
            shift_x=_first(style.shift_x, 0.0) + pad_l,
            shift_y=_first(style.shift_y, 0.0),
            mode=node.mode,
            index=index,
        )

    # -- structures ---------------------------------------------------------

    def _script(self, node: ScriptNode, ctx: StyleContext) -> Box:
        m = self.metrics
        f = ctx.font_size
        base = self.make_box(node.base, ctx)
        script_ctx = ctx.scripted(m.script_scale)
        sup = self.make_box(node.sup, script_ctx) if node.sup is not None else None
        sub = self.make_box(node.sub, script_ctx) if node.sub is not None else None

        script_x = base.width + f * m.script_horizontal_gap
        items: list[tuple[Box, float, float]] = [(base, 0.0, 0.0)]
        width = script_x
        ascent = base.ascent
        descent = base.descent

        sup_y = -max(base.ascent * 0.5, f * m.sup_shift)
        if sup is not None:
            items.append((sup, script_x, sup_y))
            width = max(width, script_x + sup.width)
            ascent = max(ascent, -sup_y + sup.ascent)

        if sub is not None:
            sub_y = f * m.sub_shift
            if sup is not None:
                sup_bottom = sup_y + sup.descent
                min_gap = f * m.sup_sub_gap_min
                if (sub_y - sub.ascent) - sup_bottom < min_gap:
                    sub_y = sup_bottom + min_gap + sub.ascent
            items.append((sub, script_x, sub_y))
            width = max(width, script_x + sub.width)
            descent = max(descent, sub_y + sub.descent)

        return VerticalBox(width, ascent, descent, items)

    def _fraction(self, node: FracNode, ctx: StyleContext) -> Box:
        m = self.metrics
        f = ctx.font_size
        part_ctx = ctx.derive(font_size=f * FRAC_CONTENT_SCALE)
        num = self.make_box(node.num, part_ctx)
        den = self.make_box(node.den, part_ctx)

        rule = f * m.frac_rule_thickness
        axis = f * m.axis_height
        pad = f * m.frac_padding
        gap = f * m.frac_gap

        width = max(num.width, den.width) + 2 * pad
        num_y = -axis - rule / 2 - gap - num.descent
        den_y = -axis + rule / 2 + gap + den.ascent
        return VerticalBox(
            width,
            max(f, -num_y + num.ascent),
            max(f, den_y + den.descent),
            [
                (num, (width - num.width) / 2, num_y),
                (den, (width - den.width) / 2, den_y),
                (RuleBox(width, rule), 0.0, -axis),
            ],
        )

    def _radical(self, node: SqrtNode, ctx: StyleContext) -> Box:
        m = self.metrics
        f = ctx.font_size
        content = self.make_box(node.child, ctx)
        gap = f * m.sqrt_gap
        extra = f * m.sqrt_extra_height
        scale = f / BASE_FONT_SIZE

        surd = self.generator.generate_path(
            content.width / scale,
            (content.height + gap + extra) / scale,
            tuning=self.tuning,
        )
        padding_left = max(0.0, TARGET_SLANT_WIDTH - surd.metrics.slant_width) * scale
        return RadicalBox(content, gap, extra, scale, surd, padding_left)

    def _delimited(self, node: DelimNode, ctx: StyleContext) -> Box:
        content = self.group(node.children, ctx)
        left = resolve_delimiter(node.open, "(")
        right = resolve_delimiter(DELIMITER_PAIRS.get(node.open, ")"), ")")
        return self._wrap(content, left, right, ctx)

    def _matrix(self, node: MatrixNode, ctx: StyleContext) -> Box:
        f = ctx.font_size
        rows = [[self.group(cell, ctx) for cell in row] for row in node.rows]
        layout = calculate_grid_layout(rows, f, padded=node.is_table)
        cells = [(rows[c.row][c.col], c.x, c.y) for c in layout.cells]
        if node.is_table:
            return TableGridBox(layout, cells)
        # Both matrix commands use square brackets
        return self._wrap(GridContentBox(layout, cells), "[", "]", ctx)

    def _wrap(self, content: Box, left: str, right: str, ctx: StyleContext) -> Box:
        f = ctx.font_size
        return DelimiterBox(
            content,
            left,
            right,
            self.metrics.delim_factor,
            f * self.metrics.delim_max_shortfall,
            f,
            DELIMITER_PADDING,
        )


def _first(value: float | None, default: float) -> float:
    return default if value is None else value


_HANDLERS: dict[type, Callable[[_BoxBuilder, AstNode, StyleContext], Box]] = {
    CharNode: _BoxBuilder._char,
    GroupNode: _BoxBuilder._group_node,
    FracNode: _BoxBuilder._fraction,
    SqrtNode: _BoxBuilder._radical,
    ScriptNode: _BoxBuilder._script,
    DelimNode: _BoxBuilder._delimited,
    PlaceholderNode: _BoxBuilder._placeholder,
    MatrixNode: _BoxBuilder._matrix,
}
"""Box builder per parse node type; must cover every node type."""


def handled_node_types() -> frozenset[type]:
    return frozenset(_HANDLERS)
