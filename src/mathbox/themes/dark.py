"""Dark grey theme for presentation slides."""

from mathbox.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    text_color="#e0e0e0",
    font_size=20.0,
    vinculum_fill="rgba(147, 197, 253, 0.35)",
    node_color="#f87171",
    handle_color="#4ade80",
    handle_line_color="rgba(74, 222, 128, 0.6)",
    baseline_color="rgba(255, 255, 255, 0.25)",
)
