"""Style context threaded through box building and rendering."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from math import isfinite
from typing import Any, Mapping

from mathbox.errors import ConfigError


@dataclass(frozen=True)
class PlaceholderStyle:
    """Partial placeholder settings; ``None`` fields inherit.

    A context carries one global style plus per-instance overrides keyed by
    traversal index. The effective settings are the global style with the
    override's non-``None`` fields laid on top.
    """

    width_scale: float | None = None
    height_scale: float | None = None
    padding_left: float | None = None
    padding_right: float | None = None
    shift_x: float | None = None
    shift_y: float | None = None
    stroke_width: float | None = None

    def merged(self, other: PlaceholderStyle | None) -> PlaceholderStyle:
        if other is None:
            return self
        changes = {
            f.name: getattr(other, f.name)
            for f in dataclasses.fields(other)
            if getattr(other, f.name) is not None
        }
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlaceholderStyle:
        names = {f.name for f in dataclasses.fields(cls)}
        values: dict[str, float] = {}
        for key, value in data.items():
            if key not in names:
                raise ConfigError(f"Unknown placeholder style field '{key}'")
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(
                    f"Placeholder style field '{key}' must be a number, got {value!r}"
                )
            values[key] = float(value)
        return cls(**values)


class TraversalCounter:
    """Hands out placeholder indices in traversal order for one pass."""

    def __init__(self) -> None:
        self.value = 0

    def next(self) -> int:
        index = self.value
        self.value += 1
        return index


@dataclass(frozen=True)
class StyleContext:
    """Immutable per-level style; derive changed copies with ``derive``.

    ``counter`` is the one mutable part: it is shared by every context
    derived within the same build or render pass.
    """

    font_size: float = 20.0
    math: bool = True
    bold: bool = False
    depth: int = 0
    color: str = "#000000"
    debug: bool = False
    placeholder_style: PlaceholderStyle = field(default_factory=PlaceholderStyle)
    overrides: Mapping[int, PlaceholderStyle] = field(default_factory=dict)
    selected: frozenset[int] = frozenset()
    counter: TraversalCounter = field(
        default_factory=TraversalCounter, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        if not (self.font_size > 0 and isfinite(self.font_size)):
            raise ConfigError(
                f"Font size must be a positive number, got {self.font_size!r}"
            )

    def derive(self, **changes: Any) -> StyleContext:
        return dataclasses.replace(self, **changes)

    def scripted(self, scale: float) -> StyleContext:
        """Context for a script level: scaled font, depth one deeper."""
        return self.derive(font_size=self.font_size * scale, depth=self.depth + 1)

    def fresh_pass(self) -> StyleContext:
        """Same style with a new traversal counter starting at zero."""
        return self.derive(counter=TraversalCounter())

    def placeholder_settings(self, index: int) -> PlaceholderStyle:
        return self.placeholder_style.merged(self.overrides.get(index))

    def is_selected(self, index: int) -> bool:
        return index in self.selected
