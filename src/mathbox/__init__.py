"""mathbox: box-and-glue math typesetting with a procedural radical glyph."""

__version__ = "0.1.0"
