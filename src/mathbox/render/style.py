"""Theme and style constants for expression rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for rendered expressions and radical diagnostics."""

    name: str
    background_color: str
    text_color: str
    font_size: float
    # Radical diagnostics overlay
    surd_fill: str = ""  # empty = inherit text_color
    vinculum_fill: str = "rgba(37, 99, 235, 0.35)"
    node_color: str = "#dc2626"
    handle_color: str = "#16a34a"
    handle_line_color: str = "rgba(22, 163, 74, 0.6)"
    baseline_color: str = "rgba(0, 0, 0, 0.25)"
