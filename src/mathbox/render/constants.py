"""Render constants used across render and box drawing code.

Theme-dependent values remain in style.py.
"""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_PADDING: float = 10.0
"""Padding around a rendered expression in standalone SVG output."""

SURD_CANVAS_PADDING: float = 4.0
"""Padding (design units) around a standalone radical outline."""

# ---------------------------------------------------------------------------
# Selection and hit regions
# ---------------------------------------------------------------------------
SELECTION_COLOR: str = "#2563eb"
"""Stroke of a selected placeholder and its halo."""

SELECTION_FILL: str = "rgba(37, 99, 235, 0.1)"
"""Fill of the selection halo."""

SELECTION_STROKE_WIDTH: float = 1.0

TRANSPARENT: str = "transparent"
"""Fill of crop and hit rectangles."""

# ---------------------------------------------------------------------------
# Debug overlay
# ---------------------------------------------------------------------------
DEBUG_COLOR: str = "red"

DEBUG_OPACITY: float = 0.8

# ---------------------------------------------------------------------------
# Text background (mixed-mode labels)
# ---------------------------------------------------------------------------
BACKGROUND_PADDING: float = 2.0
"""Inset (px) of the translucent box behind a text label."""

BACKGROUND_FILL: str = "white"

BACKGROUND_OPACITY: float = 0.8

# ---------------------------------------------------------------------------
# Radical diagnostics overlay
# ---------------------------------------------------------------------------
NODE_RADIUS: float = 0.15
"""Radius (design units) of anchor dots in the control-node overlay."""

HANDLE_RADIUS: float = 0.08
"""Radius (design units) of handle dots in the control-node overlay."""

NODE_LABEL_SIZE: float = 0.35
"""Font size (design units) of node index labels."""
