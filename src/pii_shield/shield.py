"""Shield — the hybrid detection pipeline.  Regex first, then the classifier.

Usage:
    from pii_shield import Shield, RuleStore

    rules = RuleStore()
    rules.add("Project Phoenix", "Phoenix")

    shield = Shield()                      # reusable, holds no scan state
    outcome = shield.scan_hybrid(text, rules.enabled_rules(), classifier)
    print(outcome.detections)

Async callers get the regex result first and the merged result later:

    outcome = await shield.ascan(text, rules, classifier, on_interim=render)

The regex pass never waits on the classifier, and a failed classifier
only means the regex result is final.
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .classifier import Classifier
from .normalizer import DEFAULT_CONFIDENCE_FLOOR, normalize_ai
from .resolver import resolve
from .scanner import scan
from .types import ClassifierResult, CustomRule, Detection

logger = logging.getLogger(__name__)


@dataclass
class ShieldConfig:
    """Configuration for the Shield."""
    use_ai: bool = True                 # run the classifier when one is given
    confidence_floor: float = DEFAULT_CONFIDENCE_FLOOR
    max_ai_chars: int = 8000            # text beyond this is not sent to the classifier
    min_ai_chars: int = 10              # shorter (stripped) text skips the classifier


@dataclass(slots=True)
class ScanOutcome:
    """Result of one pipeline run over one text."""
    text: str
    detections: list[Detection] = field(default_factory=list)     # final, resolved
    ai_detections: list[Detection] = field(default_factory=list)  # normalized, before resolve
    used_ai: bool = False
    ai_error: str | None = None

    def is_current(self, text: str) -> bool:
        """False once the caller's text has moved on; discard the outcome then."""
        return self.text == text


class Shield:
    """Hybrid sensitive-data detector.

    Pass 1: built-in and custom regex rules
    Pass 2: contextual classifier (optional, may be slow, may fail)
    """

    def __init__(self, config: ShieldConfig | None = None) -> None:
        self.config = config or ShieldConfig()

    def scan(self, text: str, rules: Iterable[CustomRule] = ()) -> ScanOutcome:
        """Regex-only scan, resolved."""
        detections = resolve(scan(text, rules))
        logger.debug("regex pass: %d detections", len(detections))
        return ScanOutcome(text=text, detections=detections)

    def scan_hybrid(
        self,
        text: str,
        rules: Iterable[CustomRule] = (),
        classifier: Classifier | None = None,
    ) -> ScanOutcome:
        """Regex pass plus classifier pass, blocking."""
        rules = list(rules)
        regex_hits = scan(text, rules)
        if not self._wants_ai(text, classifier):
            return ScanOutcome(text=text, detections=resolve(regex_hits))
        result = self._classify(classifier, text)
        return self._merge(text, regex_hits, result)

    async def ascan(
        self,
        text: str,
        rules: Iterable[CustomRule] = (),
        classifier: Classifier | None = None,
        *,
        on_interim: Callable[[ScanOutcome], None] | None = None,
    ) -> ScanOutcome:
        """Async hybrid scan.

        ``on_interim`` receives the regex-only outcome before the classifier
        is called.  The returned outcome replaces it wholesale.
        """
        rules = list(rules)
        regex_hits = scan(text, rules)
        interim = ScanOutcome(text=text, detections=resolve(regex_hits))
        if on_interim is not None:
            on_interim(interim)
        if not self._wants_ai(text, classifier):
            return interim
        result = await asyncio.to_thread(self._classify, classifier, text)
        return self._merge(text, regex_hits, result)

    # ------------------------------------------------------------------

    def _wants_ai(self, text: str, classifier: Classifier | None) -> bool:
        if not self.config.use_ai or classifier is None:
            return False
        if len(text.strip()) < self.config.min_ai_chars:
            logger.debug("text too short for classifier, skipping")
            return False
        return True

    def _classify(self, classifier: Classifier, text: str) -> ClassifierResult:
        sample = text[: self.config.max_ai_chars]
        if len(text) > self.config.max_ai_chars:
            logger.debug("classifier input truncated from %d to %d chars", len(text), len(sample))
        try:
            return classifier.classify(sample)
        except Exception as e:
            logger.warning("classifier raised: %s", e)
            return ClassifierResult(ok=False, error=str(e) or type(e).__name__)

    def _merge(
        self, text: str, regex_hits: list[Detection], result: ClassifierResult
    ) -> ScanOutcome:
        if not result.ok:
            logger.warning("classifier failed, keeping regex result: %s", result.error)
            return ScanOutcome(
                text=text,
                detections=resolve(regex_hits),
                ai_error=result.error or "classifier failed",
            )
        ai_hits = normalize_ai(
            result.records, text, confidence_floor=self.config.confidence_floor
        )
        detections = resolve(regex_hits, ai_hits)
        logger.debug(
            "merged %d regex + %d ai into %d detections",
            len(regex_hits), len(ai_hits), len(detections),
        )
        return ScanOutcome(
            text=text, detections=detections, ai_detections=ai_hits, used_ai=True
        )
