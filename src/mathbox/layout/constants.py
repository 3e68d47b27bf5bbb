"""Layout constants used across layout modules.

Font-relative ratios that users are expected to tune live on
``MathMetrics`` (metrics.py); this module holds the fixed values.
"""

# ---------------------------------------------------------------------------
# Reference typeface
# ---------------------------------------------------------------------------
CHAR_ASCENT_RATIO: float = 0.72
"""Ascent of every glyph as a fraction of font size (single reference face)."""

CHAR_DESCENT_RATIO: float = 0.28
"""Descent of every glyph as a fraction of font size."""

DEFAULT_CHAR_WIDTH_RATIO: float = 0.6
"""Width ratio for glyphs missing from the width tables."""

FONT_FAMILY: str = "Times New Roman"
"""Family name handed to the host text surface for glyph runs."""

BASE_FONT_SIZE: float = 11.0
"""Font size (px) at which the radical template is authored."""

# ---------------------------------------------------------------------------
# Fractions
# ---------------------------------------------------------------------------
FRAC_CONTENT_SCALE: float = 0.9
"""Numerator/denominator font size relative to the surrounding size."""

# ---------------------------------------------------------------------------
# Radicals
# ---------------------------------------------------------------------------
TARGET_SLANT_WIDTH: float = 3.0
"""Visual slant-to-content gap the radical padding normalizes to (base units)."""

# ---------------------------------------------------------------------------
# Delimiters
# ---------------------------------------------------------------------------
DELIMITER_ASSEMBLY_THRESHOLD: float = 24.0
"""Height (px) from which brackets are assembled from pieces, not scaled."""

DELIMITER_CAP_SCALE: float = 0.5
"""Height of a bracket cap piece relative to font size."""

PATH_UNIT_HEIGHT: float = 1000.0
"""Design units per glyph piece in the delimiter outlines."""

SEAM_OVERLAP: float = 1.0
"""Overlap (px) at each seam of an assembled bracket."""

DELIMITER_PADDING: float = 2.0
"""Horizontal gap (px) between a bracket and its content."""

DELIMITER_GLYPH_HEIGHT_RATIO: float = 0.8
"""Nominal height of a bracket character relative to its font size."""

DELIMITER_MAX_STRETCH: float = 1.5
"""Cap on the vertical stretch of a single scaled bracket character."""

DELIMITER_BASELINE_NUDGE: float = 0.1
"""Fraction of (descent - ascent) a scaled bracket character is shifted by."""

DELIMITER_FALLBACK_WIDTH_RATIO: float = 0.4
"""Bracket width relative to font size when no outline is known."""

# ---------------------------------------------------------------------------
# Placeholders (fill-in boxes)
# ---------------------------------------------------------------------------
X_HEIGHT_RATIO: float = 0.45
"""Height of lowercase x relative to font size in the reference face."""

PLACEHOLDER_WIDTH_RATIO: float = 13.3333
"""Box width in x-heights (66px at 11px)."""

PLACEHOLDER_HEIGHT_RATIO: float = 4.4444
"""Box height in x-heights (22px at 11px)."""

PLACEHOLDER_STROKE_WIDTH: float = 1.0
"""Outline thickness (px)."""

PLACEHOLDER_PADDING_LEFT: float = 4.0
"""Layout padding (px) left of the box."""

PLACEHOLDER_PADDING_RIGHT: float = 4.0
"""Layout padding (px) right of the box."""

PLACEHOLDER_HIT_SLOP: float = 4.0
"""Growth (px) of the invisible hit region on every side."""

SELECTION_HALO: float = 4.0
"""Growth (px) of the selection halo on every side."""

# ---------------------------------------------------------------------------
# Grids (tables and matrices)
# ---------------------------------------------------------------------------
GRID_COL_GAP_RATIO: float = 1.0
"""Horizontal gap between columns relative to font size."""

GRID_ROW_GAP_RATIO: float = 0.5
"""Vertical gap between rows relative to font size."""

GRID_MIN_ROW_ASCENT_RATIO: float = 0.7
"""Minimum row ascent relative to font size."""

GRID_MIN_ROW_DESCENT_RATIO: float = 0.3
"""Minimum row descent relative to font size."""

GRID_PADDING_RATIO: float = 0.5
"""Padding inside a bordered grid's outline, per side."""

TABLE_BORDER_WIDTH: float = 1.5
"""Stroke (px) of a table's outer border."""

TABLE_GRID_WIDTH: float = 1.0
"""Stroke (px) of a table's interior grid lines."""

# ---------------------------------------------------------------------------
# Debug overlay
# ---------------------------------------------------------------------------
DEBUG_STROKE_WIDTH: float = 0.25
"""Stroke (px) of bounding-box outlines drawn in debug mode."""
