"""Structured view of a radical outline's control points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from mathbox.surd.generator import NUM_NODES


@dataclass(frozen=True)
class BezierControlNode:
    index: int
    in_handle: tuple[float, float]
    anchor: tuple[float, float]
    out_handle: tuple[float, float]
    has_in_handle: bool
    has_out_handle: bool


def get_control_nodes(
    points: Sequence[float], num_nodes: int = NUM_NODES
) -> list[BezierControlNode]:
    """Split a flat point buffer into per-node handle/anchor records.

    A handle counts as present when it does not coincide with its anchor.
    """
    nodes = []
    for i in range(num_nodes):
        base = i * 6
        in_h = (points[base], points[base + 1])
        anchor = (points[base + 2], points[base + 3])
        out_h = (points[base + 4], points[base + 5])
        nodes.append(
            BezierControlNode(
                index=i,
                in_handle=in_h,
                anchor=anchor,
                out_handle=out_h,
                has_in_handle=in_h != anchor,
                has_out_handle=out_h != anchor,
            )
        )
    return nodes


def describe_control_nodes(nodes: Sequence[BezierControlNode]) -> list[str]:
    """One line per node, e.g. ``#11 anchor=(0.00, -41.00) in=- out=(...)``."""

    def fmt(p: tuple[float, float]) -> str:
        return f"({p[0]:.2f}, {p[1]:.2f})"

    lines = []
    for node in nodes:
        in_text = fmt(node.in_handle) if node.has_in_handle else "-"
        out_text = fmt(node.out_handle) if node.has_out_handle else "-"
        lines.append(
            f"#{node.index:<2} anchor={fmt(node.anchor)} in={in_text} out={out_text}"
        )
    return lines
