"""Review session, sitting between the detector and the user pressing "share".

Holds one text, its current detection list and the user's selection.  The
UI toggles indices; ``redacted()`` applies only what is selected.

Usage:

    session = ReviewSession.start(text, shield.scan(text, rules))
    session.toggle(2)
    safe = session.redacted()

When the classifier finishes, hand its outcome over; it replaces the
interim list wholesale and the selection goes back to its defaults:

    session.apply_outcome(final_outcome)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .render import default_selection, highlight, redact_selected, summarize
from .shield import ScanOutcome
from .types import Detection, DetectionSummary


@dataclass
class ReviewSession:
    """Selection state for one review of one text."""

    text: str
    detections: list[Detection] = field(default_factory=list)
    selected: set[int] = field(default_factory=set)
    ai_error: str | None = None

    @classmethod
    def start(cls, text: str, outcome: ScanOutcome) -> ReviewSession:
        if not outcome.is_current(text):
            raise ValueError("Scan outcome was produced for different text")
        session = cls(text=text)
        session.apply_outcome(outcome)
        return session

    def apply_outcome(self, outcome: ScanOutcome) -> bool:
        """Replace the detection list.  Outcomes for other text are ignored."""
        if not outcome.is_current(self.text):
            return False
        self.detections = list(outcome.detections)
        self.ai_error = outcome.ai_error
        self.reset_selection()
        return True

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle(self, idx: int) -> bool:
        """Flip one detection; returns whether it is now selected."""
        if not 0 <= idx < len(self.detections):
            raise IndexError(idx)
        if idx in self.selected:
            self.selected.discard(idx)
            return False
        self.selected.add(idx)
        return True

    def select_all(self) -> None:
        self.selected = set(range(len(self.detections)))

    def select_none(self) -> None:
        self.selected = set()

    def reset_selection(self) -> None:
        self.selected = default_selection(self.detections)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def highlighted(self) -> str:
        return highlight(self.text, self.detections)

    def redacted(self) -> str:
        return redact_selected(self.text, self.detections, self.selected)

    def summary(self) -> DetectionSummary:
        return summarize(self.detections)
