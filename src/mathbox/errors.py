"""Typed errors for mathbox.

Layout itself never raises on bad markup; these cover configuration input.
"""

from __future__ import annotations


class MathboxError(Exception):
    """Base error for the project."""


class ConfigError(MathboxError, ValueError):
    """Invalid metrics or tuning configuration (unknown or ill-typed field)."""
