"""Custom pattern compiler — turns user input into a validated regex.

Three input modes:

    simple     "Phoenix"               -> \\bPhoenix\\b
    multiple   "Phoenix, Lab 7"        -> \\bPhoenix\\b|\\bLab\\ 7\\b
    advanced   r"PRJ-\\d{4}"            -> PRJ-\\d{4}   (used as-is)

Validation happens here, at save time, so the scan path never sees a
pattern that fails to compile.
"""

from __future__ import annotations
import re
from typing import Literal

from .errors import EmptyPatternError, InvalidPatternError

PatternType = Literal["simple", "multiple", "advanced"]

PATTERN_TYPES: tuple[str, ...] = ("simple", "multiple", "advanced")

# Custom rules always match case-insensitively
CUSTOM_FLAGS = re.IGNORECASE


def _whole_word(term: str) -> str:
    return rf"\b{re.escape(term)}\b"


def compile_pattern(user_pattern: str, pattern_type: PatternType = "simple") -> str:
    """Derive the regex source for a custom rule.

    Pure function of its two arguments.  Raises ``EmptyPatternError`` when
    nothing is left to match and ``InvalidPatternError`` when the result
    does not compile.
    """
    raw = (user_pattern or "").strip()
    if not raw:
        raise EmptyPatternError("Pattern is empty")

    if pattern_type == "simple":
        source = _whole_word(raw)
    elif pattern_type == "multiple":
        terms = [t.strip() for t in raw.split(",")]
        terms = [t for t in terms if t]
        if not terms:
            raise EmptyPatternError("No valid terms found")
        source = "|".join(_whole_word(t) for t in terms)
    elif pattern_type == "advanced":
        source = raw
    else:
        valid = ", ".join(PATTERN_TYPES)
        raise InvalidPatternError(f"Unknown pattern type {pattern_type!r} (must be: {valid})", raw)

    validate_pattern(source)
    return source


def validate_pattern(source: str) -> re.Pattern[str]:
    """Compile ``source`` the way the scanner will and run it once."""
    try:
        compiled = re.compile(source, CUSTOM_FLAGS)
        compiled.search("")
    except (re.error, OverflowError, RecursionError) as e:
        raise InvalidPatternError(f"Invalid pattern: {e}", source) from e
    return compiled
