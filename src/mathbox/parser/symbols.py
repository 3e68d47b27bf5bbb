"""Fixed symbol table: command names and literals mapped to glyph + atom."""

from __future__ import annotations

from dataclasses import dataclass

from mathbox.parser.model import AtomType


@dataclass(frozen=True)
class Symbol:
    char: str
    atom_type: AtomType


SYMBOLS: dict[str, Symbol] = {
    # Relations
    "=": Symbol("=", AtomType.REL),
    "<": Symbol("<", AtomType.REL),
    ">": Symbol(">", AtomType.REL),
    "leq": Symbol("≤", AtomType.REL),
    "geq": Symbol("≥", AtomType.REL),
    "neq": Symbol("≠", AtomType.REL),
    "approx": Symbol("≈", AtomType.REL),
    "rightarrow": Symbol("→", AtomType.REL),
    "in": Symbol("∈", AtomType.REL),
    # Binary operators
    "+": Symbol("+", AtomType.BIN),
    "-": Symbol("−", AtomType.BIN),
    "pm": Symbol("±", AtomType.BIN),
    "times": Symbol("×", AtomType.BIN),
    "cdot": Symbol("·", AtomType.BIN),
    # Ordinary
    "pi": Symbol("π", AtomType.ORD),
    "theta": Symbol("θ", AtomType.ORD),
    "alpha": Symbol("α", AtomType.ORD),
    "beta": Symbol("β", AtomType.ORD),
    "Delta": Symbol("Δ", AtomType.ORD),
    "infty": Symbol("∞", AtomType.ORD),
    "sqrt": Symbol("√", AtomType.ORD),
    # Non-breaking space
    "~": Symbol(" ", AtomType.ORD),
    # Punctuation is PUNCT, not ORD, so it picks up the punctuation glue
    ",": Symbol(",", AtomType.PUNCT),
    ";": Symbol(";", AtomType.PUNCT),
}

# Opening bracket -> matching close, for the balanced scan.
DELIMITER_PAIRS: dict[str, str] = {
    "(": ")",
    "[": "]",
}

CLOSING_DELIMITERS = frozenset(DELIMITER_PAIRS.values())


def lookup(name: str) -> Symbol | None:
    """Return the table entry for a command name or literal, if any."""
    return SYMBOLS.get(name)
