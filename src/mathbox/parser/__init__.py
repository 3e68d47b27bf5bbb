"""Markup tokenizer and parser."""

from mathbox.parser.markup import TokenCursor, parse, parse_markup
from mathbox.parser.tokenizer import tokenize

__all__ = ["TokenCursor", "parse", "parse_markup", "tokenize"]
