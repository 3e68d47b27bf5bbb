"""Procedural radical (square-root) outline.

The glyph is a closed cubic-bezier outline of 16 control nodes, authored at
11px. Each node carries an in-handle, an anchor and an out-handle. For a
requested content size the generator stretches and rotates the two arms to
hit height-dependent angles, re-solves the elbow and the hook against the
rotated arms, snaps the bottom to the baseline and places the vinculum
(the horizontal bar) on the caller's origin.

A generator instance holds only the read-only template, so one instance
can be shared freely.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass, field

from mathbox.surd.tuning import DEFAULT_TUNING, InterpolationParam, SurdTuning

logger = logging.getLogger(__name__)

IN, ANCHOR, OUT = 0, 1, 2

NUM_NODES = 16
PIVOT_NODE = 9
ELBOW_NODE = 10
PEAK_NODE = 11

LEFT_ARM_NODES = range(1, 10)
RIGHT_ARM_NODES = range(11, 16)
HOOK_NODES = range(2, 9)

# (in, anchor, out) per node, in 11px design units with y pointing down.
TEMPLATE_NODES: tuple[tuple[tuple[float, float], ...], ...] = (
    ((0.17, 0.00), (0.00, 0.00), (-0.10, 0.00)),
    ((-0.15, 0.00), (-0.23, -0.18), (-0.23, -0.18)),
    ((-2.38, -4.90), (-2.38, -4.90), (-2.51, -4.82)),
    ((-2.66, -4.70), (-2.73, -4.64), (-2.85, -4.55)),
    ((-3.03, -4.40), (-3.10, -4.40), (-3.17, -4.40)),
    ((-3.21, -4.52), (-3.21, -4.52), (-3.21, -4.55)),
    ((-3.21, -4.58), (-3.07, -4.70), (-3.07, -4.70)),
    ((-2.03, -5.48), (-2.03, -5.48), (-1.91, -5.57)),
    ((-1.86, -5.57), (-1.85, -5.57), (-1.82, -5.57)),
    ((-1.76, -5.57), (-1.69, -5.39), (-1.69, -5.39)),
    ((0.24, -1.15), (0.24, -1.15), (0.24, -1.15)),
    ((4.83, -10.69), (4.83, -10.69), (4.92, -10.86)),
    ((4.99, -10.91), (5.09, -10.91), (5.22, -10.91)),
    ((5.22, -10.91), (5.30, -10.70), (5.30, -10.68)),
    ((5.30, -10.63), (5.23, -10.48), (5.23, -10.48)),
    ((0.27, -0.22), (0.27, -0.22), (0.19, -0.07)),
)

_EPS_DET = 1e-6
_EPS_LEN = 1e-4
_MIN_SIN = 0.1


def point_index(node: int, kind: int) -> int:
    return node * 3 + kind


def _node_points(nodes) -> list[int]:
    return [point_index(n, k) for n in nodes for k in (IN, ANCHOR, OUT)]


@dataclass(frozen=True)
class Vinculum:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class SurdMetrics:
    bearing_x: float
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    advance_width: float
    ascent: float
    descent: float
    hook_min_x: float
    slant_width: float
    """Horizontal run of the upstroke (peak anchor x minus elbow anchor x)."""


@dataclass(frozen=True)
class CubicSegment:
    start: tuple[float, float]
    control1: tuple[float, float]
    control2: tuple[float, float]
    end: tuple[float, float]


@dataclass(frozen=True)
class SurdResult:
    path_data: str
    segments: tuple[CubicSegment, ...]
    vinculum: Vinculum
    metrics: SurdMetrics
    raw_points: tuple[float, ...] = field(repr=False)
    """Flat ``[in_x, in_y, anchor_x, anchor_y, out_x, out_y]`` per node."""


class SurdGenerator:
    """Solves the radical template for a target content size."""

    def __init__(self) -> None:
        self._base_points: tuple[tuple[float, float], ...] = tuple(
            pt for node in TEMPLATE_NODES for pt in node
        )
        self._left_arm = _node_points(LEFT_ARM_NODES)
        self._right_arm = _node_points(RIGHT_ARM_NODES)
        self._hook = _node_points(HOOK_NODES)

        p8 = self._base_points[point_index(8, ANCHOR)]
        p10 = self._base_points[point_index(ELBOW_NODE, ANCHOR)]
        p11 = self._base_points[point_index(PEAK_NODE, ANCHOR)]

        self.right_len_base = math.hypot(p11[0] - p10[0], p11[1] - p10[1])
        self.angle_right_base = math.atan2(p11[1] - p10[1], p11[0] - p10[0])
        self.left_len_base = math.hypot(p8[0] - p10[0], p8[1] - p10[1])
        self.angle_left_base = math.atan2(p8[1] - p10[1], p8[0] - p10[0])
        self.base_height = abs(p11[1] - p10[1])

    def generate_path(
        self,
        target_width: float,
        target_height: float,
        padding_left: float = 0.0,
        padding_right: float = 0.0,
        padding_top: float = 0.0,
        padding_bottom: float = 0.0,
        tuning: SurdTuning | None = None,
    ) -> SurdResult:
        """Outline for content of ``target_width`` x ``target_height``.

        Units are 11px design units. The vinculum's top-left lands at
        ``(-padding_left, padding_bottom - rise - thickness)``, where rise is
        the padded target height, floored at the template's own height.
        """
        tuning = _finite_tuning(tuning or DEFAULT_TUNING)
        vinculum_width = target_width + padding_left + padding_right
        rise = max(target_height + padding_top + padding_bottom, self.base_height)

        def param(p: InterpolationParam) -> float:
            return p.value_at(rise, self.base_height)

        upstroke_deg = param(tuning.upstroke_angle)
        downstroke_deg = param(tuning.downstroke_angle)
        height_ratio = param(tuning.downstroke_height_ratio)
        hook_rot_deg = param(tuning.hook_rotation)
        hook_scale = param(tuning.hook_length_scale)

        # Right arm: long enough to reach the full rise at the target angle
        target_r = math.radians(upstroke_deg)
        rot_r = target_r - self.angle_right_base
        stretch_r = rise / max(abs(math.sin(target_r)), _MIN_SIN) - self.right_len_base

        # Left arm: its rise stops growing once the lock height is reached
        ratio_param = tuning.downstroke_height_ratio
        if rise >= ratio_param.lock_height:
            left_rise = ratio_param.lock_height * ratio_param.end
        else:
            left_rise = rise * height_ratio
        target_l = math.radians(downstroke_deg)
        stretch_l = (
            left_rise / max(abs(math.sin(target_l)), _MIN_SIN) - self.left_len_base
        )
        rot_l = target_l - self.angle_left_base

        compensation = math.radians(hook_rot_deg) - rot_l

        pts = [list(p) for p in self._base_points]

        def get(node: int, kind: int = ANCHOR) -> tuple[float, float]:
            x, y = pts[point_index(node, kind)]
            return x, y

        def translate(indices, dx: float, dy: float) -> None:
            for i in indices:
                pts[i][0] += dx
                pts[i][1] += dy

        def rotate(indices, cx: float, cy: float, angle: float) -> None:
            c, s = math.cos(angle), math.sin(angle)
            for i in indices:
                px, py = pts[i][0] - cx, pts[i][1] - cy
                pts[i][0] = cx + px * c - py * s
                pts[i][1] = cy + px * s + py * c

        # Hook length: stretch along the pivot -> node 5 axis only
        p9x, p9y = get(PIVOT_NODE)
        if abs(hook_scale - 1.0) > 0.001:
            p5x, p5y = get(5)
            ax, ay = _normalized(p5x - p9x, p5y - p9y)
            if (ax, ay) != (0.0, 0.0):
                for i in self._hook:
                    vx, vy = pts[i][0] - p9x, pts[i][1] - p9y
                    dot = vx * ax + vy * ay
                    extra = dot * (hook_scale - 1.0)
                    pts[i][0] += extra * ax
                    pts[i][1] += extra * ay

        p10x, p10y = get(ELBOW_NODE)
        vlx, vly = _normalized(p9x - p10x, p9y - p10y)
        p11x, p11y = get(PEAK_NODE)
        vrx, vry = _normalized(p11x - p10x, p11y - p10y)

        translate(_node_points(range(2, 10)), vlx * stretch_l, vly * stretch_l)
        translate(self._right_arm, vrx * stretch_r, vry * stretch_r)

        pivot_x, pivot_y = get(1)
        rotate(self._left_arm, pivot_x, pivot_y, rot_l)
        rotate(self._right_arm, pivot_x, pivot_y, rot_r)

        cur_vlx, cur_vly = _rotated(vlx, vly, rot_l)
        cur_vrx, cur_vry = _rotated(vrx, vry, rot_r)

        # Elbow: intersection of the two rotated arm lines
        p9x, p9y = get(PIVOT_NODE)
        p11x, p11y = get(PEAK_NODE)
        elbow = _intersect(
            (p9x, p9y), (cur_vlx, cur_vly), (p11x, p11y), (cur_vrx, cur_vry)
        )
        if elbow is not None:
            ex, ey = get(ELBOW_NODE)
            translate(_node_points([ELBOW_NODE]), elbow[0] - ex, elbow[1] - ey)

        # Hook: rotate to its absolute angle, then re-seat node 2 on the left arm
        p1x, p1y = get(1)
        p2x, p2y = get(2)
        hook_dir = _rotated(p2x - p9x, p2y - p9y, compensation)
        target_p2 = _intersect((p1x, p1y), (cur_vlx, cur_vly), (p9x, p9y), hook_dir)
        if target_p2 is None:
            target_p2 = (p2x, p2y)
        rotate(self._hook, p9x, p9y, compensation)
        p2x, p2y = get(2)
        translate(_node_points([2]), target_p2[0] - p2x, target_p2[1] - p2y)

        # Baseline: extend both strokes down to y = 0
        if abs(cur_vry) > _EPS_DET:
            x15, y15 = get(15)
            t = -y15 / cur_vry
            pts[point_index(15, OUT)] = [x15 + t * cur_vrx, 0.0]
        if abs(cur_vly) > _EPS_DET:
            x1, y1 = get(1)
            t = -y1 / cur_vly
            pts[point_index(1, IN)] = [x1 + t * cur_vlx, 0.0]

        # Vinculum: hangs from the visual peak of the top curve
        peak = _cubic_min_y(
            get(PEAK_NODE), get(PEAK_NODE, OUT), get(12, IN), get(12)
        )
        a11, a14 = get(PEAK_NODE), get(14)
        thickness = math.hypot(a11[0] - a14[0], a11[1] - a14[1])

        shift_y = (padding_bottom - rise) - (peak[1] + thickness)
        shift_x = -padding_left - peak[0]
        translate(range(len(pts)), shift_x, shift_y)

        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)
        hook_min_x = min(pts[i][0] for i in self._hook)
        slant_width = get(PEAK_NODE)[0] - get(ELBOW_NODE)[0]

        segments = _segments(pts)
        return SurdResult(
            path_data=_path_data(segments),
            segments=segments,
            vinculum=Vinculum(
                x=peak[0] + shift_x,
                y=peak[1] + shift_y,
                width=vinculum_width,
                height=thickness,
            ),
            metrics=SurdMetrics(
                bearing_x=min_x,
                min_x=min_x,
                max_x=max_x,
                min_y=min_y,
                max_y=max_y,
                advance_width=max_x - min_x,
                ascent=-min_y,
                descent=max_y,
                hook_min_x=hook_min_x,
                slant_width=slant_width,
            ),
            raw_points=tuple(c for p in pts for c in p),
        )


def _finite_tuning(tuning: SurdTuning) -> SurdTuning:
    """Replace parameters with a non-finite start or end by the defaults."""
    changes = {}
    for f in dataclasses.fields(tuning):
        p = getattr(tuning, f.name)
        if not (math.isfinite(p.start) and math.isfinite(p.end)):
            logger.warning("Tuning parameter %s is not finite, using the default", f.name)
            changes[f.name] = getattr(DEFAULT_TUNING, f.name)
    return dataclasses.replace(tuning, **changes) if changes else tuning


def _normalized(x: float, y: float) -> tuple[float, float]:
    length = math.hypot(x, y)
    if length < _EPS_LEN:
        return 0.0, 0.0
    return x / length, y / length


def _rotated(x: float, y: float, angle: float) -> tuple[float, float]:
    c, s = math.cos(angle), math.sin(angle)
    return x * c - y * s, x * s + y * c


def _intersect(
    origin_a: tuple[float, float],
    dir_a: tuple[float, float],
    origin_b: tuple[float, float],
    dir_b: tuple[float, float],
) -> tuple[float, float] | None:
    """Point on line A where it meets line B, or None if near-parallel."""
    det = dir_a[0] * -dir_b[1] - dir_a[1] * -dir_b[0]
    if abs(det) <= _EPS_DET:
        return None
    dx = origin_b[0] - origin_a[0]
    dy = origin_b[1] - origin_a[1]
    t = (dx * -dir_b[1] - dy * -dir_b[0]) / det
    return origin_a[0] + t * dir_a[0], origin_a[1] + t * dir_a[1]


def _cubic_min_y(p0, p1, p2, p3) -> tuple[float, float]:
    """Topmost point (smallest y) of a cubic bezier segment."""
    y0, y1, y2, y3 = p0[1], p1[1], p2[1], p3[1]
    a = 3 * (-y0 + 3 * y1 - 3 * y2 + y3)
    b = 6 * (y0 - 2 * y1 + y2)
    c = 3 * (y1 - y0)

    ts = [0.0, 1.0]
    if abs(a) < 1e-9:
        if abs(b) > 1e-9:
            ts.append(-c / b)
    else:
        disc = b * b - 4 * a * c
        if disc >= 0:
            root = math.sqrt(disc)
            ts.extend([(-b + root) / (2 * a), (-b - root) / (2 * a)])

    best = (p0[0], p0[1])
    for t in ts:
        if not 0.0 <= t <= 1.0:
            continue
        mt = 1 - t
        x = mt**3 * p0[0] + 3 * mt**2 * t * p1[0] + 3 * mt * t**2 * p2[0] + t**3 * p3[0]
        y = mt**3 * p0[1] + 3 * mt**2 * t * p1[1] + 3 * mt * t**2 * p2[1] + t**3 * p3[1]
        if y < best[1]:
            best = (x, y)
    return best


def _segments(pts: list[list[float]]) -> tuple[CubicSegment, ...]:
    """One segment per node, closing from the last node back to the first."""

    def at(node: int, kind: int) -> tuple[float, float]:
        x, y = pts[point_index(node % NUM_NODES, kind)]
        return x, y

    return tuple(
        CubicSegment(
            start=at(i - 1, ANCHOR),
            control1=at(i - 1, OUT),
            control2=at(i, IN),
            end=at(i, ANCHOR),
        )
        for i in range(1, NUM_NODES + 1)
    )


def _path_data(segments: tuple[CubicSegment, ...]) -> str:
    def fmt(p: tuple[float, float]) -> str:
        return f"{p[0]:.2f} {p[1]:.2f}"

    parts = [f"M {fmt(segments[0].start)}"]
    for seg in segments:
        parts.append(f"C {fmt(seg.control1)}, {fmt(seg.control2)}, {fmt(seg.end)}")
    return " ".join(parts) + " Z"
