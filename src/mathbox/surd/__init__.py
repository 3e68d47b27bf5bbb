"""Procedural radical glyph generation."""

from mathbox.surd.diagnostics import (
    BezierControlNode,
    describe_control_nodes,
    get_control_nodes,
)
from mathbox.surd.generator import SurdGenerator, SurdMetrics, SurdResult, Vinculum
from mathbox.surd.tuning import DEFAULT_TUNING, InterpolationParam, SurdTuning

__all__ = [
    "BezierControlNode",
    "DEFAULT_TUNING",
    "InterpolationParam",
    "SurdGenerator",
    "SurdMetrics",
    "SurdResult",
    "SurdTuning",
    "Vinculum",
    "describe_control_nodes",
    "get_control_nodes",
]
