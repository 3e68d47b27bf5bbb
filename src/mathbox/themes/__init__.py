"""Theme definitions for rendered expressions."""

from mathbox.themes.dark import DARK_THEME
from mathbox.themes.light import LIGHT_THEME

THEMES = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
