"""Tunable layout metrics.

Every field is a ratio of the current font size unless noted. A
``MathMetrics`` is plain data: build one from a dict (e.g. loaded JSON),
or derive a variant with ``with_overrides``, and pass it per call.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from math import isfinite
from typing import Any, Mapping

from mathbox.errors import ConfigError
from mathbox.parser.model import AtomType

# Font size multipliers; zero or less would collapse the scripts to nothing.
_POSITIVE_FIELDS = frozenset({"script_scale", "script_script_scale"})


@dataclass(frozen=True)
class MathMetrics:
    """Flat set of typesetting ratios."""

    # Global layout
    axis_height: float = 0.25
    rule_thickness: float = 0.05
    operator_shift: float = -0.075
    auto_center_operators: bool = True

    # Horizontal glue between atoms
    glue_ord_bin: float = 0.115
    glue_bin_ord: float = 0.115
    glue_ord_rel: float = 0.25
    glue_rel_ord: float = 0.18
    glue_ord_punct: float = 0.13

    # Scripts
    sup_shift: float = 0.40
    sub_shift: float = 0.25
    sup_min_height: float = 0.35
    sub_drop: float = 0.05
    script_scale: float = 0.70
    script_script_scale: float = 0.6
    sup_sub_gap_min: float = 0.2
    script_horizontal_gap: float = 0.05

    # Fractions
    frac_num_shift: float = 0.39
    frac_den_shift: float = 1.02
    frac_gap: float = 0.10
    frac_rule_thickness: float = 0.05
    frac_padding: float = 0.1

    # Radicals
    sqrt_gap: float = 0.15
    sqrt_rule_thickness: float = 0.05
    sqrt_extra_height: float = 0.10
    sqrt_vertical_shift: float = 0.2

    # Delimiters
    delim_factor: float = 0.90
    delim_max_shortfall: float = 0.1

    italic_correction_default: float = 0.0

    def glue(self, prev: AtomType, cur: AtomType) -> float:
        """Glue ratio inserted between two adjacent atoms (0 if unlisted)."""
        return _glue_table(self).get((prev, cur), 0.0)

    def with_overrides(self, **changes: Any) -> MathMetrics:
        return self.from_dict(changes, base=self)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], base: MathMetrics | None = None
    ) -> MathMetrics:
        """Build metrics from a mapping of field overrides.

        Raises ConfigError for unknown fields, non-numeric or non-finite values,
        and script scales that are not positive.
        """
        fields = {f.name: f for f in dataclasses.fields(cls)}
        changes: dict[str, Any] = {}
        for key, value in data.items():
            f = fields.get(key)
            if f is None:
                raise ConfigError(f"Unknown metrics field '{key}'")
            if f.name == "auto_center_operators":
                if not isinstance(value, bool):
                    raise ConfigError(f"Metrics field '{key}' must be a boolean")
                changes[key] = value
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(
                    f"Metrics field '{key}' must be a number, got {value!r}"
                )
            if not isfinite(value):
                raise ConfigError(f"Metrics field '{key}' must be finite, got {value!r}")
            if key in _POSITIVE_FIELDS and value <= 0:
                raise ConfigError(f"Metrics field '{key}' must be positive, got {value!r}")
            changes[key] = float(value)
        return dataclasses.replace(base or cls(), **changes)


def _glue_table(m: MathMetrics) -> dict[tuple[AtomType, AtomType], float]:
    return {
        (AtomType.ORD, AtomType.BIN): m.glue_ord_bin,
        (AtomType.BIN, AtomType.ORD): m.glue_bin_ord,
        (AtomType.ORD, AtomType.REL): m.glue_ord_rel,
        (AtomType.REL, AtomType.ORD): m.glue_rel_ord,
        (AtomType.ORD, AtomType.PUNCT): m.glue_ord_punct,
        (AtomType.PUNCT, AtomType.ORD): m.glue_ord_punct,
    }


DEFAULT_METRICS = MathMetrics()
