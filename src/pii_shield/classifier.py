"""Contextual classifier interface.

A classifier is any object with ``classify(text) -> ClassifierResult``.
It may be slow and it may fail; failure is reported through
``ClassifierResult.ok`` and ``error`` rather than raised.  Sessions, models
and retries belong to the classifier, never to the pipeline.

``parse_classifier_response`` turns the raw text of an LLM that was asked
to answer with a JSON array of ``{"type", "value", "reason", "confidence"}``
objects into a ``ClassifierResult``.
"""

from __future__ import annotations
import json
import logging
import re
from typing import Protocol, runtime_checkable

from .types import ClassifierResult

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?\s*")
_JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)


@runtime_checkable
class Classifier(Protocol):
    def classify(self, text: str) -> ClassifierResult: ...


def parse_classifier_response(raw: str) -> ClassifierResult:
    """Parse an LLM answer into records.

    Empty output counts as a failure (the model is misbehaving); output
    without any JSON array is a successful "nothing found".
    """
    cleaned = _FENCE.sub("", raw or "").strip()
    if len(cleaned) < 2:
        return ClassifierResult(ok=False, error="AI returned empty response")

    m = _JSON_ARRAY.search(cleaned)
    if not m:
        logger.debug("no JSON array in classifier response")
        return ClassifierResult()

    try:
        data = json.loads(m.group())
    except json.JSONDecodeError as e:
        logger.warning("could not parse classifier response: %s", e)
        return ClassifierResult(ok=False, error="Failed to parse AI response")

    return ClassifierResult(records=[r for r in data if isinstance(r, dict)])
