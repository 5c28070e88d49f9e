"""AI result normalizer — turns classifier findings into Detections.

Classifier output is loosely typed (usually parsed JSON), so every record
is coerced here and nothing untyped gets past this module.  Records are
dropped, not reported, when they:

  - carry a confidence below the floor (unscored records are kept)
  - echo a redaction placeholder such as ``[NAME_REDACTED]``
  - name a value that does not appear verbatim in the text
"""

from __future__ import annotations
import logging
import math
import re
from typing import Any, Iterable

from .patterns import ai_type_info
from .types import AIRecord, Detection

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_FLOOR = 0.6

_PLACEHOLDER = re.compile(r"^\[.*REDACTED.*\]$", re.IGNORECASE | re.DOTALL)


def is_placeholder(value: str) -> bool:
    return bool(_PLACEHOLDER.match(value.strip()))


def coerce_record(raw: AIRecord | dict[str, Any]) -> AIRecord | None:
    """Validate one raw record; ``None`` if it is unusable."""
    if isinstance(raw, AIRecord):
        data: dict[str, Any] = {
            "type": raw.type, "value": raw.value,
            "reason": raw.reason, "confidence": raw.confidence,
        }
    elif isinstance(raw, dict):
        data = raw
    else:
        return None

    ai_type, value = data.get("type"), data.get("value")
    if not isinstance(ai_type, str) or not isinstance(value, str):
        return None
    ai_type, value = ai_type.strip().lower(), value.strip()
    if not ai_type or not value:
        return None

    confidence = data.get("confidence")
    if confidence is not None:
        try:
            confidence = float(confidence)
        except (TypeError, ValueError):
            return None
        if math.isnan(confidence):
            return None
        confidence = min(max(confidence, 0.0), 1.0)

    reason = data.get("reason")
    if not isinstance(reason, str) or not reason.strip():
        reason = "AI detected"
    return AIRecord(type=ai_type, value=value, reason=reason.strip(), confidence=confidence)


def normalize_ai(
    records: Iterable[AIRecord | dict[str, Any]],
    text: str,
    *,
    confidence_floor: float = DEFAULT_CONFIDENCE_FLOOR,
) -> list[Detection]:
    """Map classifier records onto positioned detections in ``text``.

    Only the first occurrence of each value is located.  Same records and
    same text always give the same list.
    """
    out: list[Detection] = []
    for raw in records:
        record = coerce_record(raw)
        if record is None:
            logger.debug("dropping malformed AI record: %r", raw)
            continue
        if record.confidence is not None and record.confidence < confidence_floor:
            logger.debug("dropping %s (confidence %.2f)", record.type, record.confidence)
            continue
        if is_placeholder(record.value):
            logger.debug("dropping placeholder %r", record.value)
            continue
        start = text.find(record.value)
        if start == -1:
            logger.debug("dropping %s: value not found in text", record.type)
            continue

        info = ai_type_info(record.type)
        out.append(Detection(
            kind=record.type,
            severity=info.severity,
            label=f"{record.reason} (AI)",
            matched_text=record.value,
            start=start,
            end=start + len(record.value),
            source="ai",
            icon=info.icon,
            confidence=record.confidence,
        ))
    return out
