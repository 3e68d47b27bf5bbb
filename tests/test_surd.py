"""Tests for the procedural radical outline."""

import dataclasses
import math

import pytest

from mathbox.errors import ConfigError
from mathbox.surd import (
    DEFAULT_TUNING,
    InterpolationParam,
    SurdGenerator,
    SurdTuning,
)


@pytest.fixture(scope="module")
def gen():
    return SurdGenerator()


def test_template_base_height(gen):
    assert gen.base_height == pytest.approx(9.54)


def test_outline_is_closed_cubic_path(gen):
    r = gen.generate_path(10, 20)
    assert len(r.segments) == 16
    assert r.segments[-1].end == r.segments[0].start
    assert r.path_data.startswith("M ")
    assert r.path_data.endswith(" Z")
    assert r.path_data.count(" C ") == 16
    assert len(r.raw_points) == 16 * 6


def test_deterministic(gen):
    assert gen.generate_path(12.5, 30) == gen.generate_path(12.5, 30)


def test_shared_generator_is_not_mutated(gen):
    first = gen.generate_path(5, 80)
    gen.generate_path(50, 15)
    assert gen.generate_path(5, 80) == first


def test_height_is_floored_at_template(gen):
    assert gen.generate_path(5, 1) == gen.generate_path(5, gen.base_height)


def test_vinculum_sits_on_requested_rise(gen):
    r = gen.generate_path(10, 20)
    v = r.vinculum
    assert v.x == pytest.approx(0.0)
    assert v.width == 10
    assert v.y + v.height == pytest.approx(-20.0)
    assert v.height > 0


def test_padding_moves_and_widens_vinculum(gen):
    r = gen.generate_path(10, 20, padding_left=2, padding_right=3, padding_bottom=1)
    v = r.vinculum
    assert v.x == pytest.approx(-2.0)
    assert v.width == pytest.approx(15.0)
    # Bottom padding is part of the rise
    assert v.y + v.height == pytest.approx(1 - 21.0)


def test_metrics_are_consistent(gen):
    m = gen.generate_path(10, 20).metrics
    assert m.advance_width == pytest.approx(m.max_x - m.min_x)
    assert m.ascent == pytest.approx(-m.min_y)
    assert m.descent == pytest.approx(m.max_y)
    assert m.bearing_x == m.min_x
    assert m.hook_min_x >= m.min_x
    assert m.slant_width > 0


def test_taller_content_taller_glyph(gen):
    short = gen.generate_path(10, 12).metrics
    tall = gen.generate_path(10, 60).metrics
    assert tall.ascent > short.ascent


def test_continuous_across_lock_height(gen):
    below = gen.generate_path(10, 40.999).raw_points
    above = gen.generate_path(10, 41.001).raw_points
    assert max(abs(a - b) for a, b in zip(below, above)) < 0.05


def test_degenerate_tuning_stays_finite(gen):
    flat = InterpolationParam(start=0.0, end=0.0, lock_height=1.0)
    tuning = SurdTuning(
        upstroke_angle=flat,
        downstroke_angle=flat,
        downstroke_height_ratio=flat,
        hook_rotation=flat,
        hook_length_scale=flat,
    )
    r = gen.generate_path(10, 30, tuning=tuning)
    assert all(math.isfinite(c) for c in r.raw_points)
    assert "nan" not in r.path_data


def test_nan_lock_height_stays_finite(gen):
    p = InterpolationParam(start=0.0, end=0.0, lock_height=float("nan"))
    tuning = SurdTuning(
        upstroke_angle=p,
        downstroke_angle=p,
        downstroke_height_ratio=p,
        hook_rotation=p,
        hook_length_scale=p,
    )
    r = gen.generate_path(10, 30, tuning=tuning)
    assert all(math.isfinite(c) for c in r.raw_points)


def test_non_finite_endpoint_falls_back_to_default(gen, caplog):
    broken = InterpolationParam(start=float("nan"), end=0.0, lock_height=40.0)
    tuning = dataclasses.replace(DEFAULT_TUNING, hook_rotation=broken)
    with caplog.at_level("WARNING", logger="mathbox"):
        r = gen.generate_path(10, 30, tuning=tuning)
    assert r.raw_points == gen.generate_path(10, 30).raw_points
    assert "hook_rotation" in caplog.text


class TestInterpolation:
    def test_linear(self):
        p = InterpolationParam(start=0.0, end=10.0, lock_height=20.0)
        assert p.value_at(10.0, 10.0) == 0.0
        assert p.value_at(15.0, 10.0) == pytest.approx(5.0)
        assert p.value_at(20.0, 10.0) == pytest.approx(10.0)
        assert p.value_at(99.0, 10.0) == pytest.approx(10.0)
        assert p.value_at(5.0, 10.0) == 0.0

    def test_quadratic_eases_out(self):
        p = InterpolationParam(0.0, 1.0, 20.0, easing="quadratic")
        assert p.value_at(15.0, 10.0) == pytest.approx(0.75)
        p = InterpolationParam(0.0, 1.0, 20.0, easing="quadratic", easing_power=3.0)
        assert p.value_at(15.0, 10.0) == pytest.approx(0.875)

    @pytest.mark.parametrize("power", [0.0, -1.0, float("nan"), float("inf")])
    def test_bad_easing_power_uses_default(self, power):
        p = InterpolationParam(0.0, 1.0, 20.0, easing="quadratic", easing_power=power)
        assert p.value_at(15.0, 10.0) == pytest.approx(0.75)

    def test_nan_lock_height_clamps(self):
        p = InterpolationParam(start=0.0, end=1.0, lock_height=float("nan"))
        assert p.value_at(10.05, 10.0) == pytest.approx(0.5)
        assert p.value_at(30.0, 10.0) == pytest.approx(1.0)

    def test_lock_below_base_height(self):
        p = InterpolationParam(start=0.0, end=1.0, lock_height=5.0)
        assert p.value_at(10.05, 10.0) == pytest.approx(0.5)

    def test_default_upstroke_at_extremes(self):
        p = DEFAULT_TUNING.upstroke_angle
        assert p.value_at(9.54, 9.54) == pytest.approx(-63.0)
        assert p.value_at(100.0, 9.54) == pytest.approx(-90.0)


class TestTuningConfig:
    def test_partial_override_keeps_defaults(self):
        tuning = SurdTuning.from_dict(
            {"hook_rotation": {"start": 1, "end": 2, "lock_height": 30}}
        )
        assert tuning.hook_rotation == InterpolationParam(1.0, 2.0, 30.0)
        assert tuning.upstroke_angle == DEFAULT_TUNING.upstroke_angle

    def test_round_trip(self):
        assert SurdTuning.from_dict(DEFAULT_TUNING.to_dict()) == DEFAULT_TUNING

    @pytest.mark.parametrize("data,message", [
        ({"wobble": {}}, "Unknown tuning parameter"),
        ({"hook_rotation": 3}, "must be an object"),
        ({"hook_rotation": {"start": 1, "end": 2}}, "missing lock_height"),
        ({"hook_rotation": {"start": "a", "end": 2, "lock_height": 3}}, "must be a number"),
        ({"hook_rotation": {"start": 1, "end": 2, "lock_height": 3, "easing": "cubic"}},
         "easing"),
        ({"hook_rotation": {"start": 1, "end": 2, "lock_height": 3, "speed": 1}},
         "Unknown field"),
        ({"hook_rotation": {"start": 1, "end": 2, "lock_height": 3,
                            "easing": "quadratic", "easing_power": 0}}, "must be positive"),
        ({"hook_rotation": {"start": 1, "end": 2, "lock_height": 3,
                            "easing": "quadratic", "easing_power": -1}}, "must be positive"),
        ({"hook_rotation": {"start": 1, "end": 2, "lock_height": float("nan")}},
         "must be finite"),
        ({"hook_rotation": {"start": float("inf"), "end": 2, "lock_height": 3}},
         "must be finite"),
    ])
    def test_invalid(self, data, message):
        with pytest.raises(ConfigError, match=message):
            SurdTuning.from_dict(data)
