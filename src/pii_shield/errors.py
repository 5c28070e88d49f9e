"""Errors raised when a custom pattern cannot be turned into a matching rule.

These only surface when a rule is saved.  Scanning never raises them, since
every ``CustomRule`` is validated on construction.
"""

from __future__ import annotations


class PatternError(ValueError):
    """Base class for custom-pattern failures."""


class InvalidPatternError(PatternError):
    """The pattern does not compile, or the pattern type is unknown."""

    def __init__(self, message: str, pattern: str = "") -> None:
        super().__init__(message)
        self.pattern = pattern


class EmptyPatternError(PatternError):
    """The pattern has no usable terms once trimmed."""
