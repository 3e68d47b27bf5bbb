"""Grid layout for tables and matrices.

Cells arrive pre-built; this module only decides where they go. Offsets
are relative to the grid's center, with ``y`` giving each cell's baseline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from mathbox.layout.constants import (
    GRID_COL_GAP_RATIO,
    GRID_MIN_ROW_ASCENT_RATIO,
    GRID_MIN_ROW_DESCENT_RATIO,
    GRID_PADDING_RATIO,
    GRID_ROW_GAP_RATIO,
)


class Measured(Protocol):
    width: float
    ascent: float
    descent: float


@dataclass
class CellPlacement:
    row: int
    col: int
    x: float
    y: float


@dataclass
class TableLayoutResult:
    col_widths: list[float] = field(default_factory=list)
    row_metrics: list[tuple[float, float]] = field(default_factory=list)
    col_gap: float = 0.0
    row_gap: float = 0.0
    pad_x: float = 0.0
    pad_y: float = 0.0
    total_width: float = 0.0
    total_height: float = 0.0
    cells: list[CellPlacement] = field(default_factory=list)

    @property
    def total_ascent(self) -> float:
        return self.total_height / 2

    @property
    def total_descent(self) -> float:
        return self.total_height / 2


def calculate_grid_layout(
    rows: Sequence[Sequence[Measured]],
    font_size: float,
    padded: bool = True,
) -> TableLayoutResult:
    """Place a (possibly ragged) grid of measured boxes around the origin.

    Columns take the widest cell, rows the tallest ascent and descent with
    a minimum of 0.7/0.3 em. Cells are centered horizontally in their
    column and sit on their row's baseline. ``padded`` adds half an em of
    padding on every side for the bordered table look.
    """
    if not rows:
        return TableLayoutResult()

    num_cols = max(len(row) for row in rows)
    col_widths = [0.0] * num_cols
    for row in rows:
        for c, box in enumerate(row):
            col_widths[c] = max(col_widths[c], box.width)

    min_asc = font_size * GRID_MIN_ROW_ASCENT_RATIO
    min_desc = font_size * GRID_MIN_ROW_DESCENT_RATIO
    row_metrics = []
    for row in rows:
        asc = max([min_asc] + [box.ascent for box in row])
        desc = max([min_desc] + [box.descent for box in row])
        row_metrics.append((asc, desc))

    col_gap = font_size * GRID_COL_GAP_RATIO
    row_gap = font_size * GRID_ROW_GAP_RATIO
    pad = font_size * GRID_PADDING_RATIO if padded else 0.0

    total_width = sum(col_widths) + max(0, num_cols - 1) * col_gap + 2 * pad
    total_height = (
        sum(a + d for a, d in row_metrics)
        + max(0, len(row_metrics) - 1) * row_gap
        + 2 * pad
    )

    cells: list[CellPlacement] = []
    current_y = -total_height / 2 + pad
    for r, row in enumerate(rows):
        asc, desc = row_metrics[r]
        baseline = current_y + asc
        current_x = -total_width / 2 + pad
        for c, box in enumerate(row):
            w = col_widths[c]
            cells.append(CellPlacement(r, c, current_x + (w - box.width) / 2, baseline))
            current_x += w + col_gap
        current_y += asc + desc + row_gap

    return TableLayoutResult(
        col_widths=col_widths,
        row_metrics=row_metrics,
        col_gap=col_gap,
        row_gap=row_gap,
        pad_x=pad,
        pad_y=pad,
        total_width=total_width,
        total_height=total_height,
        cells=cells,
    )


def grid_lines(
    layout: TableLayoutResult, x: float, y: float
) -> list[tuple[float, float, float, float]]:
    """Interior grid lines of a grid drawn with its left baseline at (x, y).

    Lines run through the middle of each column and row gap and span the
    full outline. Returned as ``(x1, y1, x2, y2)``, columns first.
    """
    top = y - layout.total_ascent
    bottom = y + layout.total_descent
    lines = []

    current_x = x + layout.pad_x
    for w in layout.col_widths[:-1]:
        current_x += w + layout.col_gap
        line_x = current_x - layout.col_gap / 2
        lines.append((line_x, top, line_x, bottom))

    current_y = top + layout.pad_y
    for asc, desc in layout.row_metrics[:-1]:
        current_y += asc + desc + layout.row_gap
        line_y = current_y - layout.row_gap / 2
        lines.append((x, line_y, x + layout.total_width, line_y))

    return lines
