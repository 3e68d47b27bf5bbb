"""Drawing primitives emitted by box rendering.

Coordinates are in the caller's frame: x grows right, y grows down, and
text is anchored at its baseline. The concrete surface (SVG, canvas) is
chosen by whoever consumes the list.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float
    font_size: float
    font_family: str
    color: str
    italic: bool = False
    bold: bool = False
    anchor: str = "start"
    # Vertical stretch about the glyph's center (scaled delimiters)
    scale_y: float = 1.0


@dataclass(frozen=True)
class LineSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float


@dataclass(frozen=True)
class FilledPath:
    """Path data placed with ``translate(tx, ty) scale(sx, sy)``."""

    d: str
    fill: str
    tx: float = 0.0
    ty: float = 0.0
    sx: float = 1.0
    sy: float = 1.0

    @property
    def transform(self) -> str:
        if self.sx == self.sy:
            return f"translate({self.tx}, {self.ty}) scale({self.sx})"
        return f"translate({self.tx}, {self.ty}) scale({self.sx}, {self.sy})"


@dataclass(frozen=True)
class RectShape:
    """Rectangle; ``role`` tells a surface how to treat it.

    Roles: ``shape`` (visible), ``crop`` (invisible content bounds),
    ``hit`` (invisible click target, carries ``index``), ``halo``
    (selection highlight), ``debug`` (bounding-box outline),
    ``background``.
    """

    x: float
    y: float
    width: float
    height: float
    fill: str = "none"
    stroke: str = "none"
    stroke_width: float = 0.0
    role: str = "shape"
    index: int | None = None
    opacity: float = 1.0


Primitive = Union[TextRun, LineSegment, FilledPath, RectShape]
