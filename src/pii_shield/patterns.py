"""Pattern registry — built-in regex detectors and redaction tokens.

The registry is plain data: each rule names its kind, severity, label and
icon.  Replacement tokens live in lookup tables keyed by kind and are
resolved by ``replacement_for``, so detections never carry behaviour.

Rules sharing a kind may overlap (the two API key rules do); the resolver
keeps the longer match, registration order does not matter.
"""

from __future__ import annotations
import re
from dataclasses import dataclass

from .types import Detection


@dataclass(frozen=True, slots=True)
class PatternRule:
    """A built-in detector."""
    kind: str
    severity: str
    label: str
    icon: str
    regex: re.Pattern[str]


# ASCII mode keeps \d and \b to plain digits / word characters
_A = re.ASCII

PATTERNS: tuple[PatternRule, ...] = (
    # Four groups of four digits, optional space/dash separators
    PatternRule("credit_card", "high", "Credit Card", "fa-credit-card", re.compile(
        r"\b\d{4}[-\s]?\d{4}[-\s]?\d{4}[-\s]?\d{4}\b", _A
    )),

    PatternRule("ssn", "high", "SSN", "fa-id-card", re.compile(
        r"\b\d{3}-\d{2}-\d{4}\b", _A
    )),

    PatternRule("email", "medium", "Email Address", "fa-envelope", re.compile(
        r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b", _A
    )),

    # Labelled secrets: "api_key=...", "access-token: ...", ...
    PatternRule("api_key", "high", "API Key/Token", "fa-key", re.compile(
        r"\b(?:api[_-]?key|apikey|access[_-]?token|secret[_-]?key|private[_-]?key)"
        r"[:\s=]+[\"']?([A-Za-z0-9_\-]{20,})[\"']?",
        _A | re.IGNORECASE,
    )),

    # Anything that looks like a long random token.  Over-matches hashes
    # and ids; kept deliberately.
    PatternRule("api_key", "high", "API Key/Token", "fa-key", re.compile(
        r"\b[A-Za-z0-9]{32,}\b", _A
    )),

    PatternRule("ip_address", "medium", "IP Address", "fa-network-wired", re.compile(
        r"\b(?:\d{1,3}\.){3}\d{1,3}\b", _A
    )),

    PatternRule("url", "low", "URL", "fa-link", re.compile(
        r"https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
        r"[-a-zA-Z0-9()@:%_+.~#?&/=]*",
        _A,
    )),

    PatternRule("date", "low", "Date", "fa-calendar", re.compile(
        r"\b\d{1,2}[-/]\d{1,2}[-/]\d{2,4}\b", _A
    )),
)

# kind -> token for built-in rules
REDACTION_TOKENS: dict[str, str] = {
    "credit_card": "[CARD_REDACTED]",
    "ssn": "[SSN_REDACTED]",
    "email": "[EMAIL_REDACTED]",
    "api_key": "[API_KEY_REDACTED]",
    "ip_address": "[IP_REDACTED]",
    "url": "[URL_REDACTED]",
    "date": "[DATE_REDACTED]",
}


@dataclass(frozen=True, slots=True)
class AITypeInfo:
    icon: str
    severity: str
    token: str


# Classifier type -> presentation.  Classifiers tend to call API keys
# "username", hence the mapping to the API key token.
AI_TYPES: dict[str, AITypeInfo] = {
    "name": AITypeInfo("fa-user", "medium", "[NAME_REDACTED]"),
    "phone": AITypeInfo("fa-phone", "medium", "[PHONE_REDACTED]"),
    "email": AITypeInfo("fa-envelope", "medium", "[EMAIL_REDACTED]"),
    "address": AITypeInfo("fa-map-marker-alt", "medium", "[ADDRESS_REDACTED]"),
    "username": AITypeInfo("fa-key", "high", "[API_KEY_REDACTED]"),
    "api_key": AITypeInfo("fa-key", "high", "[API_KEY_REDACTED]"),
    "secret": AITypeInfo("fa-key", "high", "[SECRET_REDACTED]"),
    "government_id": AITypeInfo("fa-id-card", "high", "[GOV_ID_REDACTED]"),
    "internal_id": AITypeInfo("fa-hashtag", "medium", "[ID_REDACTED]"),
    "financial": AITypeInfo("fa-dollar-sign", "high", "[FINANCIAL_REDACTED]"),
    "healthcare": AITypeInfo("fa-heartbeat", "high", "[HEALTHCARE_REDACTED]"),
    "medical_condition": AITypeInfo("fa-heartbeat", "high", "[HEALTHCARE_REDACTED]"),
    "medication": AITypeInfo("fa-heartbeat", "high", "[HEALTHCARE_REDACTED]"),
    "personal_info": AITypeInfo("fa-user-shield", "medium", "[INFO_REDACTED]"),
}

GENERIC_ICON = "fa-exclamation-circle"
CUSTOM_ICON = "fa-user-shield"

_WS = re.compile(r"\s+")


def token_for_name(name: str) -> str:
    """``"Project Phoenix"`` -> ``"[PROJECT_PHOENIX_REDACTED]"``."""
    return f"[{_WS.sub('_', name.strip()).upper()}_REDACTED]"


def ai_type_info(ai_type: str) -> AITypeInfo:
    """Look up an AI type, falling back to a generic medium-severity entry."""
    info = AI_TYPES.get(ai_type)
    if info is None:
        info = AITypeInfo(GENERIC_ICON, "medium", token_for_name(ai_type))
    return info


def replacement_for(detection: Detection) -> str:
    """The redaction token for a detection, dispatched on source and kind."""
    if detection.source == "custom":
        return token_for_name(detection.label)
    if detection.source == "ai":
        return ai_type_info(detection.kind).token
    return REDACTION_TOKENS.get(detection.kind, "[REDACTED]")


def scan_builtin(text: str) -> list[Detection]:
    """Run every registry rule to exhaustion.  Overlaps are kept."""
    matches: list[Detection] = []
    for rule in PATTERNS:
        for m in rule.regex.finditer(text):
            if m.end() == m.start():
                continue
            matches.append(Detection(
                kind=rule.kind,
                severity=rule.severity,
                label=rule.label,
                matched_text=m.group(),
                start=m.start(),
                end=m.end(),
                source="regex",
                icon=rule.icon,
            ))
    return matches
