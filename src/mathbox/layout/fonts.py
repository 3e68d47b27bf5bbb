"""Per-character advance widths for the reference face (Times).

Widths are fractions of the font size, taken from the standard Times
AFM metrics (1000 units per em). Glyphs missing from a table fall back to
``DEFAULT_CHAR_WIDTH_RATIO``.
"""

from __future__ import annotations

import string

from mathbox.layout.constants import DEFAULT_CHAR_WIDTH_RATIO


def _table(
    lower: list[int], upper: list[int], extra: dict[str, int]
) -> dict[str, float]:
    widths = dict(zip(string.ascii_lowercase, lower))
    widths.update(zip(string.ascii_uppercase, upper))
    widths.update(extra)
    return {ch: units / 1000.0 for ch, units in widths.items()}


# Glyphs shared by every style (digits, operators, symbols).
_COMMON: dict[str, int] = {
    **{d: 500 for d in string.digits},
    " ": 250,
    " ": 250,
    "(": 333,
    ")": 333,
    "[": 333,
    "]": 333,
    "|": 200,
    "/": 278,
    ".": 250,
    ",": 250,
    ":": 278,
    ";": 278,
    "!": 333,
    '"': 408,
    "&": 778,
    "+": 564,
    "−": 564,
    "-": 333,
    "=": 564,
    "<": 564,
    ">": 564,
    "±": 564,
    "×": 564,
    "·": 250,
    "≤": 549,
    "≥": 549,
    "≠": 549,
    "≈": 549,
    "→": 987,
    "∈": 713,
    "∞": 713,
    "√": 549,
    "π": 549,
    "θ": 521,
    "α": 631,
    "β": 549,
    "Δ": 612,
}

CHAR_WIDTHS_NORMAL = _table(
    [444, 500, 444, 500, 444, 333, 500, 500, 278, 278, 500, 278, 778,
     500, 500, 500, 500, 333, 389, 278, 500, 500, 722, 500, 500, 444],
    [722, 667, 667, 722, 611, 556, 722, 722, 333, 389, 722, 611, 889,
     722, 722, 556, 722, 667, 556, 611, 722, 722, 944, 722, 722, 611],
    _COMMON,
)

CHAR_WIDTHS_ITALIC = _table(
    [500, 500, 444, 500, 444, 278, 500, 500, 278, 278, 444, 278, 722,
     500, 500, 500, 500, 389, 389, 278, 500, 444, 667, 444, 444, 389],
    [611, 611, 667, 722, 611, 611, 722, 722, 333, 444, 667, 556, 833,
     667, 722, 611, 722, 611, 500, 556, 722, 611, 833, 611, 556, 556],
    _COMMON,
)

CHAR_WIDTHS_BOLD = _table(
    [500, 556, 444, 556, 444, 333, 500, 556, 278, 333, 556, 278, 833,
     556, 500, 556, 556, 444, 389, 333, 556, 500, 722, 500, 500, 444],
    [722, 667, 722, 722, 667, 611, 778, 778, 389, 500, 778, 667, 944,
     722, 778, 611, 778, 722, 556, 667, 722, 722, 1000, 722, 722, 667],
    {**_COMMON, "+": 570, "−": 570, "=": 570, "<": 570, ">": 570},
)

CHAR_WIDTHS_BOLD_ITALIC = _table(
    [500, 500, 444, 500, 444, 333, 500, 556, 278, 278, 500, 278, 778,
     556, 500, 500, 500, 389, 389, 278, 556, 444, 667, 500, 444, 389],
    [667, 667, 667, 722, 667, 667, 722, 778, 389, 500, 667, 611, 889,
     722, 722, 611, 722, 667, 556, 611, 722, 667, 889, 667, 611, 611],
    {**_COMMON, "+": 570, "−": 570, "=": 570, "<": 570, ">": 570},
)


def width_table(bold: bool, italic: bool) -> dict[str, float]:
    if bold:
        return CHAR_WIDTHS_BOLD_ITALIC if italic else CHAR_WIDTHS_BOLD
    return CHAR_WIDTHS_ITALIC if italic else CHAR_WIDTHS_NORMAL


def char_width_ratio(char: str, table: dict[str, float]) -> float:
    return table.get(char, DEFAULT_CHAR_WIDTH_RATIO)


def text_width_ratio(text: str, table: dict[str, float]) -> float:
    """Summed width ratio of a run of glyphs."""
    return sum(char_width_ratio(ch, table) for ch in text)
