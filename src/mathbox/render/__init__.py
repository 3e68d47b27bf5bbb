"""Drawing primitives and their SVG serialization."""
