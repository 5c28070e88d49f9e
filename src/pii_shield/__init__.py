"""PII Shield — detect and redact sensitive data before it is shared."""

from .errors import PatternError, InvalidPatternError, EmptyPatternError
from .types import Detection, CustomRule, AIRecord, ClassifierResult, DetectionSummary
from .compiler import compile_pattern
from .scanner import scan
from .normalizer import normalize_ai
from .resolver import resolve
from .render import highlight, redact, redact_selected, default_selection, summarize
from .patterns import replacement_for
from .classifier import Classifier, parse_classifier_response
from .presidio_layer import PresidioClassifier
from .shield import Shield, ShieldConfig, ScanOutcome
from .store import RuleStore
from .store_sqlite import SqliteRuleStore
from .review import ReviewSession
from .config import create_shield, create_store, create_classifier, load_config, load_from_yaml

__all__ = [
    "PatternError", "InvalidPatternError", "EmptyPatternError",
    "Detection", "CustomRule", "AIRecord", "ClassifierResult", "DetectionSummary",
    "compile_pattern",
    "scan", "normalize_ai", "resolve",
    "highlight", "redact", "redact_selected", "default_selection", "summarize",
    "replacement_for",
    "Classifier", "parse_classifier_response", "PresidioClassifier",
    "Shield", "ShieldConfig", "ScanOutcome",
    "RuleStore", "SqliteRuleStore",
    "ReviewSession",
    "create_shield", "create_store", "create_classifier", "load_config", "load_from_yaml",
]
__version__ = "0.1.0"
