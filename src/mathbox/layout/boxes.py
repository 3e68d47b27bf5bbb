"""Box model: sized layout units that render to drawing primitives.

Every box has a width, an ascent above its baseline and a descent below
it. ``render(x, y, ctx, out)`` draws the box with its baseline-left corner
at ``(x, y)``, appending primitives to ``out``.

Composite boxes expose their children through ``children()`` as
``(box, dx, dy)`` offsets in render order. Rendering and every traversal
(see ``walk``) go through that one method, which is what keeps the
placeholder indices handed out while rendering in step with the ones
assigned while building.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator

from mathbox.layout.constants import (
    DEBUG_STROKE_WIDTH,
    FONT_FAMILY,
    PLACEHOLDER_HIT_SLOP,
    SELECTION_HALO,
    TABLE_BORDER_WIDTH,
    TABLE_GRID_WIDTH,
)
from mathbox.layout.context import StyleContext
from mathbox.layout.delimiters import (
    DelimiterAssembly,
    assemble_delimiter,
    glyph_baseline_shift,
)
from mathbox.layout.grid import TableLayoutResult, grid_lines
from mathbox.parser.model import AtomType, PlaceholderMode
from mathbox.render.constants import (
    DEBUG_COLOR,
    DEBUG_OPACITY,
    SELECTION_COLOR,
    SELECTION_FILL,
    SELECTION_STROKE_WIDTH,
    TRANSPARENT,
)
from mathbox.render.primitives import (
    FilledPath,
    LineSegment,
    Primitive,
    RectShape,
    TextRun,
)
from mathbox.surd.generator import SurdResult

logger = logging.getLogger(__name__)


class Box(ABC):
    def __init__(
        self,
        width: float,
        ascent: float,
        descent: float,
        atom_type: AtomType = AtomType.ORD,
    ) -> None:
        self.width = width
        self.ascent = ascent
        self.descent = descent
        self.atom_type = atom_type

    @property
    def height(self) -> float:
        return self.ascent + self.descent

    def children(self) -> Iterator[tuple[Box, float, float]]:
        return iter(())

    def label(self) -> str:
        """Short description used by tree dumps."""
        return ""

    @abstractmethod
    def render(
        self, x: float, y: float, ctx: StyleContext, out: list[Primitive]
    ) -> None: ...

    def _debug_outline(
        self, x: float, y: float, ctx: StyleContext, out: list[Primitive]
    ) -> None:
        if not ctx.debug:
            return
        out.append(
            RectShape(
                x,
                y - self.ascent,
                self.width,
                self.height,
                stroke=DEBUG_COLOR,
                stroke_width=DEBUG_STROKE_WIDTH,
                role="debug",
                opacity=DEBUG_OPACITY,
            )
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(w={self.width:.2f}, a={self.ascent:.2f}, "
            f"d={self.descent:.2f}, {self.atom_type.value})"
        )


def render_children(
    box: Box, x: float, y: float, ctx: StyleContext, out: list[Primitive]
) -> None:
    for child, dx, dy in box.children():
        child.render(x + dx, y + dy, ctx, out)


def walk(box: Box) -> Iterator[Box]:
    """Pre-order traversal in render order."""
    yield box
    for child, _, _ in box.children():
        yield from walk(child)


def placeholder_order(box: Box) -> list[int]:
    """Build-time indices of the placeholders, in the order rendering visits them."""
    return [b.index for b in walk(box) if isinstance(b, PlaceholderBox)]


def render_box(
    box: Box, x: float, y: float, ctx: StyleContext
) -> list[Primitive]:
    """Render a finished box tree in a fresh traversal pass."""
    out: list[Primitive] = []
    box.render(x, y, ctx.fresh_pass(), out)
    return out


def describe_box(box: Box, indent: int = 0) -> list[str]:
    """Indented one-line-per-box dump of a tree."""
    label = box.label()
    lines = ["  " * indent + repr(box) + (f" {label}" if label else "")]
    for child, dx, dy in box.children():
        sub = describe_box(child, indent + 1)
        sub[0] += f" @({dx:.2f}, {dy:.2f})"
        lines.extend(sub)
    return lines


class EmptyBox(Box):
    def __init__(self) -> None:
        super().__init__(0.0, 0.0, 0.0)

    def render(self, x, y, ctx, out) -> None:
        pass


class CharBox(Box):
    """A glyph run set in one font size and style."""

    def __init__(
        self,
        text: str,
        width: float,
        ascent: float,
        descent: float,
        atom_type: AtomType,
        font_size: float,
        italic: bool = False,
        bold: bool = False,
    ) -> None:
        super().__init__(width, ascent, descent, atom_type)
        self.text = text
        self.font_size = font_size
        self.italic = italic
        self.bold = bold
        self.y_offset = 0.0

    def label(self) -> str:
        return repr(self.text)

    def render(self, x, y, ctx, out) -> None:
        self._debug_outline(x, y, ctx, out)
        out.append(
            TextRun(
                self.text,
                x,
                y - self.y_offset,
                font_size=self.font_size,
                font_family=FONT_FAMILY,
                color=ctx.color,
                italic=self.italic,
                bold=self.bold,
            )
        )


class HorizontalBox(Box):
    def __init__(
        self,
        width: float,
        ascent: float,
        descent: float,
        items: list[tuple[Box, float]],
    ) -> None:
        super().__init__(width, ascent, descent)
        self.items = items

    def children(self):
        for box, offset in self.items:
            yield box, offset, 0.0

    def render(self, x, y, ctx, out) -> None:
        self._debug_outline(x, y, ctx, out)
        render_children(self, x, y, ctx, out)


class VerticalBox(Box):
    """Children placed at explicit (x, y) offsets from the baseline origin."""

    def __init__(
        self,
        width: float,
        ascent: float,
        descent: float,
        items: list[tuple[Box, float, float]],
    ) -> None:
        super().__init__(width, ascent, descent)
        self.items = items

    def children(self):
        return iter(self.items)

    def render(self, x, y, ctx, out) -> None:
        self._debug_outline(x, y, ctx, out)
        render_children(self, x, y, ctx, out)


class RuleBox(Box):
    """A horizontal bar centered on its own baseline."""

    def __init__(self, width: float, thickness: float) -> None:
        super().__init__(width, thickness / 2, thickness / 2)
        self.thickness = thickness

    def render(self, x, y, ctx, out) -> None:
        out.append(LineSegment(x, y, x + self.width, y, ctx.color, self.thickness))
        out.append(
            RectShape(
                x,
                y - self.thickness / 2,
                self.width,
                self.thickness,
                fill=TRANSPARENT,
                role="crop",
            )
        )


class RadicalBox(Box):
    """Generated radical outline, its vinculum, and the content under it.

    ``surd`` is a generator result in design units; ``scale`` maps those to
    px. ``padding_left`` widens the gap between slant and content so it
    looks the same at every size.
    """

    def __init__(
        self,
        content: Box,
        gap: float,
        extra_height: float,
        scale: float,
        surd: SurdResult,
        padding_left: float,
    ) -> None:
        width = surd.metrics.advance_width * scale + content.width + padding_left
        ascent = content.ascent + gap + surd.vinculum.height * scale
        descent = content.descent + extra_height
        super().__init__(width, ascent, descent)
        self.content = content
        self.gap = gap
        self.extra_height = extra_height
        self.scale = scale
        self.surd = surd
        self.padding_left = padding_left

    def _content_dx(self) -> float:
        return (self.surd.vinculum.x - self.surd.metrics.min_x) * self.scale + (
            self.padding_left
        )

    def children(self):
        yield self.content, self._content_dx(), 0.0

    def render(self, x, y, ctx, out) -> None:
        self._debug_outline(x, y, ctx, out)
        s = self.scale
        v = self.surd.vinculum
        offset_y = (y - self.content.ascent - self.gap) - v.y * s
        offset_x = x - self.surd.metrics.min_x * s

        out.append(
            FilledPath(self.surd.path_data, ctx.color, offset_x, offset_y, s, s)
        )
        out.append(
            RectShape(
                v.x * s + offset_x,
                v.y * s + offset_y,
                v.width * s + self.padding_left,
                v.height * s,
                fill=ctx.color,
            )
        )
        render_children(self, x, y, ctx, out)


class DelimiterBox(Box):
    """Content between an auto-sized bracket pair."""

    def __init__(
        self,
        content: Box,
        left_char: str,
        right_char: str,
        factor: float,
        max_shortfall: float,
        font_size: float,
        padding: float,
    ) -> None:
        left = assemble_delimiter(
            left_char, content.height, factor, max_shortfall, font_size
        )
        right = assemble_delimiter(
            right_char, content.height, factor, max_shortfall, font_size
        )
        extra = left.height - content.height
        super().__init__(
            content.width + left.width + right.width + 2 * padding,
            content.ascent + extra / 2,
            content.descent + extra / 2,
            AtomType.INNER,
        )
        self.content = content
        self.left = left
        self.right = right
        self.font_size = font_size
        self.padding = padding

    def label(self) -> str:
        return f"{self.left.char}{self.right.char}"

    def children(self):
        yield self.content, self.left.width + self.padding, 0.0

    def render(self, x, y, ctx, out) -> None:
        self._debug_outline(x, y, ctx, out)
        self._draw_delimiter(self.left, x, y, ctx, out)
        render_children(self, x, y, ctx, out)
        self._draw_delimiter(self.right, x + self.width - self.right.width, y, ctx, out)

    def _draw_delimiter(
        self,
        assembly: DelimiterAssembly,
        draw_x: float,
        y: float,
        ctx: StyleContext,
        out: list[Primitive],
    ) -> None:
        if assembly.glyph is not None:
            out.append(
                TextRun(
                    assembly.char,
                    draw_x,
                    y + glyph_baseline_shift(self.ascent, self.descent),
                    font_size=assembly.glyph.font_size,
                    font_family=FONT_FAMILY,
                    color=ctx.color,
                    scale_y=assembly.glyph.scale_y,
                )
            )
            return
        if not assembly.pieces:
            return

        top = y - self.ascent
        for piece in assembly.pieces:
            out.append(
                FilledPath(
                    piece.d,
                    ctx.color,
                    draw_x,
                    top + piece.y,
                    piece.scale_x,
                    piece.scale_y,
                )
            )
        out.append(
            RectShape(
                draw_x,
                top,
                assembly.width,
                assembly.height,
                fill=TRANSPARENT,
                role="crop",
            )
        )


class GridContentBox(Box):
    """Cells of a grid placed around the grid's center."""

    def __init__(
        self, layout: TableLayoutResult, cells: list[tuple[Box, float, float]]
    ) -> None:
        super().__init__(layout.total_width, layout.total_ascent, layout.total_descent)
        self.layout = layout
        self.cells = cells

    def label(self) -> str:
        return f"{len(self.layout.row_metrics)}x{len(self.layout.col_widths)}"

    def children(self):
        center_x = self.width / 2
        center_y = (self.descent - self.ascent) / 2
        for box, cx, cy in self.cells:
            yield box, center_x + cx, center_y + cy

    def render(self, x, y, ctx, out) -> None:
        self._debug_outline(x, y, ctx, out)
        render_children(self, x, y, ctx, out)


class TableGridBox(GridContentBox):
    """A bordered table: outline, interior grid lines, then the cells."""

    def render(self, x, y, ctx, out) -> None:
        self._debug_outline(x, y, ctx, out)
        out.append(
            RectShape(
                x,
                y - self.ascent,
                self.width,
                self.height,
                stroke=ctx.color,
                stroke_width=TABLE_BORDER_WIDTH,
            )
        )
        for x1, y1, x2, y2 in grid_lines(self.layout, x, y):
            out.append(LineSegment(x1, y1, x2, y2, ctx.color, TABLE_GRID_WIDTH))
        render_children(self, x, y, ctx, out)
        out.append(
            RectShape(
                x, y - self.ascent, self.width, self.height, fill=TRANSPARENT, role="crop"
            )
        )


class PlaceholderBox(Box):
    """A fill-in box or underline.

    ``width`` includes the layout padding; the drawn shape is
    ``visual_width`` wide, starting ``shift_x`` px in from the left edge.
    ``index`` is the traversal index assigned while building.
    """

    def __init__(
        self,
        width: float,
        visual_width: float,
        ascent: float,
        descent: float,
        stroke_width: float,
        shift_x: float,
        shift_y: float,
        mode: PlaceholderMode,
        index: int,
    ) -> None:
        super().__init__(width, ascent, descent, AtomType.BOX)
        self.visual_width = visual_width
        self.stroke_width = stroke_width
        self.shift_x = shift_x
        self.shift_y = shift_y
        self.mode = mode
        self.index = index

    def label(self) -> str:
        return f"#{self.index} {self.mode.value}"

    def render(self, x, y, ctx, out) -> None:
        index = ctx.counter.next()
        if index != self.index:
            logger.warning(
                "Placeholder rendered at index %d was built as %d", index, self.index
            )
        override = ctx.placeholder_settings(index).stroke_width
        stroke = self.stroke_width if override is None else override
        selected = ctx.is_selected(index)

        draw_x = x + self.shift_x
        draw_y = y + self.shift_y
        top = draw_y - self.ascent
        w = self.visual_width
        h = self.height

        if selected:
            out.append(
                RectShape(
                    draw_x - SELECTION_HALO,
                    top - SELECTION_HALO,
                    w + 2 * SELECTION_HALO,
                    h + 2 * SELECTION_HALO,
                    fill=SELECTION_FILL,
                    stroke=SELECTION_COLOR,
                    stroke_width=SELECTION_STROKE_WIDTH,
                    role="halo",
                    index=index,
                )
            )

        color = SELECTION_COLOR if selected else ctx.color
        if self.mode is PlaceholderMode.UNDERLINE:
            line_y = draw_y + self.descent - stroke / 2
            out.append(LineSegment(draw_x, line_y, draw_x + w, line_y, color, stroke))
        else:
            out.append(RectShape(draw_x, top, w, h, stroke=color, stroke_width=stroke))

        out.append(
            RectShape(
                draw_x - stroke / 2,
                top - stroke / 2,
                w + stroke,
                h + stroke,
                fill=TRANSPARENT,
                role="crop",
            )
        )
        out.append(
            RectShape(
                draw_x - PLACEHOLDER_HIT_SLOP,
                top - PLACEHOLDER_HIT_SLOP,
                w + 2 * PLACEHOLDER_HIT_SLOP,
                h + 2 * PLACEHOLDER_HIT_SLOP,
                fill=TRANSPARENT,
                role="hit",
                index=index,
            )
        )
        self._debug_outline(x, y, ctx, out)
