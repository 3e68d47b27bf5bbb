"""Light theme."""

from mathbox.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    text_color="#000000",
    font_size=20.0,
)
