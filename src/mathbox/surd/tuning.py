"""Height-dependent proportions of the radical glyph.

Each parameter eases from ``start`` at the template's base height to
``end`` at ``lock_height``, then holds. Tunings are plain data and can be
loaded from JSON-style dicts.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Mapping

from mathbox.errors import ConfigError

EASINGS = ("linear", "quadratic")

MIN_LOCK_DELTA = 0.1
DEFAULT_EASING_POWER = 2.0


@dataclass(frozen=True)
class InterpolationParam:
    """One tuned quantity as a function of the requested rise.

    ``quadratic`` easing is an ease-out, ``1 - (1 - t) ** easing_power``.
    """

    start: float
    end: float
    lock_height: float
    easing: str = "linear"
    easing_power: float = DEFAULT_EASING_POWER

    def value_at(self, rise: float, base_height: float) -> float:
        lock_delta = self.lock_height - base_height
        if math.isnan(lock_delta) or lock_delta < MIN_LOCK_DELTA:
            lock_delta = MIN_LOCK_DELTA
        t = min(max((rise - base_height) / lock_delta, 0.0), 1.0)
        if self.easing == "quadratic":
            power = self.easing_power
            if not power > 0 or math.isinf(power):
                power = DEFAULT_EASING_POWER
            t = 1.0 - (1.0 - t) ** power
        return self.start + (self.end - self.start) * t

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> InterpolationParam:
        if not isinstance(data, Mapping):
            raise ConfigError(f"Tuning parameter '{name}' must be an object")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(
                f"Unknown field(s) for tuning parameter '{name}': "
                + ", ".join(sorted(unknown))
            )
        values: dict[str, Any] = {}
        for key in ("start", "end", "lock_height", "easing_power"):
            if key not in data:
                continue
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"'{name}.{key}' must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigError(f"'{name}.{key}' must be finite, got {value!r}")
            values[key] = float(value)
        missing = {"start", "end", "lock_height"} - set(values)
        if missing:
            raise ConfigError(
                f"Tuning parameter '{name}' is missing " + ", ".join(sorted(missing))
            )
        easing = data.get("easing", "linear")
        if easing not in EASINGS:
            raise ConfigError(
                f"'{name}.easing' must be one of {', '.join(EASINGS)}, got {easing!r}"
            )
        if values.get("easing_power", DEFAULT_EASING_POWER) <= 0:
            raise ConfigError(f"'{name}.easing_power' must be positive")
        values["easing"] = easing
        return cls(**values)


@dataclass(frozen=True)
class SurdTuning:
    upstroke_angle: InterpolationParam
    downstroke_angle: InterpolationParam
    downstroke_height_ratio: InterpolationParam
    hook_rotation: InterpolationParam
    hook_length_scale: InterpolationParam

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], base: SurdTuning | None = None
    ) -> SurdTuning:
        """Build a tuning, taking omitted parameters from ``base``.

        Raises ConfigError on unknown or ill-typed parameters.
        """
        base = base or DEFAULT_TUNING
        names = {f.name for f in dataclasses.fields(cls)}
        changes = {}
        for key, value in data.items():
            if key not in names:
                raise ConfigError(f"Unknown tuning parameter '{key}'")
            changes[key] = InterpolationParam.from_dict(key, value)
        return dataclasses.replace(base, **changes)


DEFAULT_TUNING = SurdTuning(
    upstroke_angle=InterpolationParam(
        start=-63.0, end=-90.0, lock_height=41.0, easing="quadratic", easing_power=3.0
    ),
    downstroke_angle=InterpolationParam(start=-116.0, end=-110.0, lock_height=41.0),
    downstroke_height_ratio=InterpolationParam(start=0.47, end=0.43, lock_height=41.0),
    hook_rotation=InterpolationParam(start=0.0, end=-27.0, lock_height=41.0),
    hook_length_scale=InterpolationParam(start=1.08, end=1.87, lock_height=41.0),
)
