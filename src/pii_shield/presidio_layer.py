"""Presidio NER classifier — a contextual classifier backed by spaCy.

Catches names, locations and other entities that regex can't reliably
detect, and reports them as classifier records so they flow through the
same normalizer as any other AI findings.

The analyzer engine is a session owned by the classifier instance:

    with PresidioClassifier(language="en") as clf:
        result = clf.classify(text)

``classify`` opens the session on demand and drops it after a failure so
the next call starts fresh.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any

from .types import AIRecord, ClassifierResult

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

logger = logging.getLogger(__name__)

# Default entity types to detect (Presidio's full set is much larger)
DEFAULT_ENTITIES = [
    "PERSON",
    "LOCATION",
    "PHONE_NUMBER",
    "EMAIL_ADDRESS",
    "CREDIT_CARD",
    "IBAN_CODE",
    "US_SSN",
    "US_PASSPORT",
    "US_DRIVER_LICENSE",
    "MEDICAL_LICENSE",
]

# Presidio entity -> classifier type understood by the normalizer
ENTITY_TYPES: dict[str, str] = {
    "PERSON": "name",
    "LOCATION": "address",
    "PHONE_NUMBER": "phone",
    "EMAIL_ADDRESS": "email",
    "CREDIT_CARD": "financial",
    "IBAN_CODE": "financial",
    "US_BANK_NUMBER": "financial",
    "US_SSN": "government_id",
    "US_PASSPORT": "government_id",
    "US_DRIVER_LICENSE": "government_id",
    "MEDICAL_LICENSE": "healthcare",
    "NRP": "personal_info",
}


class PresidioClassifier:
    """Classifier that runs Presidio's analyzer over the text."""

    def __init__(
        self,
        *,
        language: str = "en",
        entities: list[str] | None = None,
        score_threshold: float = 0.35,
    ) -> None:
        self.language = language
        self.entities = entities or DEFAULT_ENTITIES
        self.score_threshold = score_threshold
        self._engine: AnalyzerEngine | None = None

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> AnalyzerEngine:
        """Load spaCy and build the analyzer engine; returns the session."""
        engine = self._engine
        if engine is not None:
            return engine
        from presidio_analyzer import AnalyzerEngine
        from presidio_analyzer.nlp_engine import NlpEngineProvider

        provider = NlpEngineProvider(nlp_configuration={
            "nlp_engine_name": "spacy",
            "models": [{"lang_code": self.language, "model_name": f"{self.language}_core_web_sm"}],
        })
        engine = AnalyzerEngine(
            nlp_engine=provider.create_engine(),
            supported_languages=[self.language],
        )
        self._engine = engine
        logger.debug("presidio session opened (%s)", self.language)
        return engine

    def close(self) -> None:
        self._engine = None

    def __enter__(self) -> PresidioClassifier:
        self.open()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, text: str) -> ClassifierResult:
        try:
            engine = self.open()
            results = engine.analyze(
                text=text,
                language=self.language,
                entities=self.entities,
                score_threshold=self.score_threshold,
            )
        except Exception as e:
            logger.warning("presidio classification failed: %s", e)
            self.close()
            return ClassifierResult(ok=False, error=str(e) or type(e).__name__)

        records = [
            AIRecord(
                type=ENTITY_TYPES.get(r.entity_type, r.entity_type.lower()),
                value=text[r.start:r.end],
                reason=f"{r.entity_type.replace('_', ' ').title()} detected by NER",
                confidence=r.score,
            )
            for r in sorted(results, key=lambda r: r.start)
        ]
        return ClassifierResult(records=records)
