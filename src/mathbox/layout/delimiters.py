"""Auto-sized bracket glyphs.

Short brackets are drawn as one stretched text glyph. From
``DELIMITER_ASSEMBLY_THRESHOLD`` up they are assembled from 1000-unit
outline pieces: a top cap, a bottom cap and, when the caps do not meet, a
vertically stretched extension between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from mathbox.layout.constants import (
    DELIMITER_ASSEMBLY_THRESHOLD,
    DELIMITER_BASELINE_NUDGE,
    DELIMITER_CAP_SCALE,
    DELIMITER_FALLBACK_WIDTH_RATIO,
    DELIMITER_GLYPH_HEIGHT_RATIO,
    DELIMITER_MAX_STRETCH,
    PATH_UNIT_HEIGHT,
    SEAM_OVERLAP,
)


class DelimiterGlyph(NamedTuple):
    width: float
    top: str
    ext: str
    bot: str


DELIMITER_PATHS: dict[str, DelimiterGlyph] = {
    "(": DelimiterGlyph(
        width=560,
        top="M 560 0 L 530 0 C 370 0 250 350 250 1000 L 370 1000 "
        "C 370 420 450 110 560 110 Z",
        ext="M 250 0 H 370 V 1000 H 250 Z",
        bot="M 560 1000 L 530 1000 C 370 1000 250 650 250 0 L 370 0 "
        "C 370 580 450 890 560 890 Z",
    ),
    ")": DelimiterGlyph(
        width=560,
        top="M 0 0 L 30 0 C 190 0 310 350 310 1000 L 190 1000 "
        "C 190 420 110 110 0 110 Z",
        ext="M 190 0 H 310 V 1000 H 190 Z",
        bot="M 0 1000 L 30 1000 C 190 1000 310 650 310 0 L 190 0 "
        "C 190 580 110 890 0 890 Z",
    ),
    "[": DelimiterGlyph(
        width=650,
        top="M 250 0 H 650 V 120 H 370 V 1000 H 250 Z",
        ext="M 250 0 H 370 V 1000 H 250 Z",
        bot="M 250 0 H 370 V 880 H 650 V 1000 H 250 Z",
    ),
    "]": DelimiterGlyph(
        width=650,
        top="M 0 0 H 400 V 1000 H 280 V 120 H 0 Z",
        ext="M 280 0 H 400 V 1000 H 280 Z",
        bot="M 0 1000 H 400 V 0 H 280 V 880 H 0 Z",
    ),
}


@dataclass(frozen=True)
class ScaledGlyph:
    """A single text glyph, font-scaled and vertically stretched."""

    char: str
    font_size: float
    scale_y: float


@dataclass(frozen=True)
class GlyphPiece:
    """One outline piece; ``y`` is measured down from the bracket's top."""

    part: str
    d: str
    y: float
    scale_x: float
    scale_y: float


@dataclass(frozen=True)
class DelimiterAssembly:
    """Drawing instructions covering ``height`` px of bracket.

    Exactly one of ``glyph`` (single scaled character) and ``pieces``
    (cap/extension/cap outlines) is populated.
    """

    char: str
    height: float
    width: float
    glyph: ScaledGlyph | None = None
    pieces: tuple[GlyphPiece, ...] = ()

    @property
    def is_assembled(self) -> bool:
        return self.glyph is None


def piece_scale(font_size: float) -> float:
    """Scale from outline units to px: a cap is ``DELIMITER_CAP_SCALE`` em."""
    return font_size * DELIMITER_CAP_SCALE / PATH_UNIT_HEIGHT


def resolve_delimiter(char: str, fallback: str = "(") -> str:
    return char if char in DELIMITER_PATHS else fallback


def delimiter_width(char: str, font_size: float) -> float:
    glyph = DELIMITER_PATHS.get(char)
    if glyph is None:
        return font_size * DELIMITER_FALLBACK_WIDTH_RATIO
    return glyph.width * piece_scale(font_size)


def covered_height(
    content_height: float, factor: float, max_shortfall: float
) -> float:
    """Height a bracket spans around content of the given height.

    The bracket may fall short of the content by at most ``max_shortfall``
    and never extends beyond ``content_height`` unless ``factor`` > 1.
    """
    target = max(content_height * factor, content_height - max_shortfall)
    return max(target, content_height)


def assemble_delimiter(
    char: str,
    content_height: float,
    factor: float,
    max_shortfall: float,
    font_size: float,
) -> DelimiterAssembly:
    """Plan the drawing of one bracket around content of a given height."""
    height = covered_height(content_height, factor, max_shortfall)
    width = delimiter_width(char, font_size)

    if height < DELIMITER_ASSEMBLY_THRESHOLD:
        scale = height / (font_size * DELIMITER_GLYPH_HEIGHT_RATIO)
        return DelimiterAssembly(
            char=char,
            height=height,
            width=width,
            glyph=ScaledGlyph(
                char=char,
                font_size=font_size * scale,
                scale_y=min(DELIMITER_MAX_STRETCH, scale),
            ),
        )

    glyph = DELIMITER_PATHS.get(char)
    if glyph is None:
        return DelimiterAssembly(char=char, height=height, width=width)

    s = piece_scale(font_size)
    cap = PATH_UNIT_HEIGHT * s
    pieces = [
        GlyphPiece("top", glyph.top, 0.0, s, s),
        GlyphPiece("bot", glyph.bot, height - cap, s, s),
    ]
    gap = height - 2 * cap + SEAM_OVERLAP * 2
    if gap > 0:
        pieces.append(
            GlyphPiece("ext", glyph.ext, cap - SEAM_OVERLAP, s, gap / PATH_UNIT_HEIGHT)
        )
    return DelimiterAssembly(
        char=char, height=height, width=width, pieces=tuple(pieces)
    )


def glyph_baseline_shift(ascent: float, descent: float) -> float:
    """Vertical nudge applied to a single scaled bracket glyph."""
    return (descent - ascent) * DELIMITER_BASELINE_NUDGE
