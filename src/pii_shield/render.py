"""Highlight markup, redaction, selection and summaries.

Everything here takes the final (resolved) detection list and returns new
values; inputs are never mutated.
"""

from __future__ import annotations
from html import escape
from typing import Iterable, Sequence

from .patterns import replacement_for
from .types import Detection, DetectionSummary


def highlight(text: str, detections: Sequence[Detection]) -> str:
    """HTML-escaped ``text`` with each detection wrapped in a span.

    The ``data-detection-id`` attribute is the detection's index in
    ``detections``, which is how the UI refers back to it.
    """
    parts: list[str] = []
    cursor = 0
    for idx, d in sorted(enumerate(detections), key=lambda p: p[1].start):
        if d.start < cursor:
            continue
        parts.append(escape(text[cursor:d.start]))
        parts.append(
            f'<span class="detection-{escape(d.severity)}" '
            f'data-detection-id="{idx}" title="{escape(d.label)}">'
            f"{escape(text[d.start:d.end])}</span>"
        )
        cursor = d.end
    parts.append(escape(text[cursor:]))
    return "".join(parts)


def redact(text: str, detections: Iterable[Detection]) -> str:
    """Replace each detection with its token, working right to left.

    Offsets drive the replacement, so repeated literals are handled
    independently.  A detection overlapping one already replaced is skipped.
    """
    result = text
    floor = len(text)
    for d in sorted(detections, key=lambda d: (d.start, d.end), reverse=True):
        if d.end > floor:
            continue
        result = result[:d.start] + replacement_for(d) + result[d.end:]
        floor = d.start
    return result


def redact_selected(
    text: str, detections: Sequence[Detection], selected: Iterable[int]
) -> str:
    """Redact only the detections whose indices are in ``selected``."""
    wanted = set(selected)
    return redact(text, [d for i, d in enumerate(detections) if i in wanted])


def default_selection(detections: Sequence[Detection]) -> set[int]:
    """High-severity detections start out selected."""
    return {i for i, d in enumerate(detections) if d.severity == "high"}


def summarize(detections: Iterable[Detection]) -> DetectionSummary:
    summary = DetectionSummary()
    for d in detections:
        summary.total += 1
        summary.by_severity[d.severity] = summary.by_severity.get(d.severity, 0) + 1
        summary.by_kind[d.kind] = summary.by_kind.get(d.kind, 0) + 1
    return summary
