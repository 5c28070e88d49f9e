"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Literal

from .compiler import compile_pattern

Severity = Literal["high", "medium", "low"]
Source = Literal["custom", "regex", "ai"]

SEVERITIES: tuple[str, ...] = ("high", "medium", "low")

# Lower wins when two detections overlap
SOURCE_PRIORITY: dict[str, int] = {"custom": 0, "regex": 1, "ai": 2}


@dataclass(frozen=True, slots=True)
class Detection:
    """One span of sensitive text plus its classification."""
    kind: str              # e.g. "email", "credit_card", "custom", or an AI type
    severity: str          # "high" | "medium" | "low"
    label: str             # display name
    matched_text: str
    start: int
    end: int               # exclusive
    source: str            # "custom" | "regex" | "ai"
    icon: str = "fa-exclamation-circle"
    confidence: float | None = None      # AI only
    custom_rule_id: int | None = None    # custom only

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: Detection) -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True, slots=True)
class CustomRule:
    """A user-defined detection rule.

    ``compiled_pattern`` is derived from ``user_pattern`` and
    ``pattern_type`` on construction and cannot be passed in, so building
    a rule is the save-time validation step.
    """
    id: int
    name: str
    user_pattern: str
    pattern_type: str = "simple"
    severity: str = "medium"
    enabled: bool = True
    compiled_pattern: str = field(init=False, default="")

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Rule name is required")
        if self.severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {self.severity!r}")
        object.__setattr__(
            self, "compiled_pattern", compile_pattern(self.user_pattern, self.pattern_type)
        )


@dataclass(frozen=True, slots=True)
class AIRecord:
    """One finding reported by an external classifier."""
    type: str
    value: str
    reason: str = "AI detected"
    confidence: float | None = None     # unscored records pass the floor


@dataclass(slots=True)
class ClassifierResult:
    """What a classifier call returns; failure is a value, not an exception."""
    records: list[AIRecord | dict] = field(default_factory=list)
    ok: bool = True
    error: str | None = None


@dataclass(slots=True)
class DetectionSummary:
    """Aggregate counts over a detection list."""
    total: int = 0
    by_severity: dict[str, int] = field(
        default_factory=lambda: {s: 0 for s in SEVERITIES}
    )
    by_kind: dict[str, int] = field(default_factory=dict)
