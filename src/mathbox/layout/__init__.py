"""Box-and-glue layout for parsed math markup."""

from mathbox.layout.boxes import Box, describe_box, placeholder_order, render_box
from mathbox.layout.context import PlaceholderStyle, StyleContext, TraversalCounter
from mathbox.layout.engine import MathLayoutEngine
from mathbox.layout.metrics import DEFAULT_METRICS, MathMetrics

__all__ = [
    "Box",
    "DEFAULT_METRICS",
    "MathLayoutEngine",
    "MathMetrics",
    "PlaceholderStyle",
    "StyleContext",
    "TraversalCounter",
    "describe_box",
    "placeholder_order",
    "render_box",
]
