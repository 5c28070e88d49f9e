"""YAML/dict config loader for pii-shield.

Supports loading from a YAML file or a plain dict (for embedding in a
larger host config).

Example YAML:

    pii_shield:
      enabled: true
      use_ai: true
      confidence_floor: 0.6
      max_ai_chars: 8000
      min_ai_chars: 10
      classifier: presidio       # "none" or "presidio"
      presidio:
        language: en
        score_threshold: 0.35
        entities:
          - PERSON
          - LOCATION
      rules:
        backend: sqlite          # "memory" or "sqlite"
        path: ~/.pii-shield/rules.db
      custom_rules:
        - name: Project Phoenix
          pattern: Phoenix
          type: simple
          severity: high
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Iterable

from .classifier import Classifier
from .normalizer import DEFAULT_CONFIDENCE_FLOOR
from .presidio_layer import PresidioClassifier
from .shield import ScanOutcome, Shield, ShieldConfig
from .store import RuleStore
from .store_sqlite import SqliteRuleStore
from .types import CustomRule


class _NoopShield:
    """Pass-through shield when detection is disabled."""

    def __init__(self) -> None:
        self.config = ShieldConfig(use_ai=False)

    def scan(self, text: str, rules: Iterable[CustomRule] = ()) -> ScanOutcome:
        return ScanOutcome(text=text)

    def scan_hybrid(self, text: str, rules: Iterable[CustomRule] = (),
                    classifier: Classifier | None = None) -> ScanOutcome:
        return ScanOutcome(text=text)

    async def ascan(self, text: str, rules: Iterable[CustomRule] = (),
                    classifier: Classifier | None = None, *, on_interim=None) -> ScanOutcome:
        return ScanOutcome(text=text)


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "pii_shield" key or flat
    if "pii_shield" in data:
        data = data["pii_shield"] or {}

    presidio = data.get("presidio") or {}
    rules = data.get("rules") or {}
    return {
        "enabled": data.get("enabled", True),
        "use_ai": data.get("use_ai", True),
        "confidence_floor": float(data.get("confidence_floor", DEFAULT_CONFIDENCE_FLOOR)),
        "max_ai_chars": int(data.get("max_ai_chars", 8000)),
        "min_ai_chars": int(data.get("min_ai_chars", 10)),
        "classifier": data.get("classifier", "none"),
        "presidio_language": presidio.get("language", "en"),
        "presidio_threshold": float(presidio.get("score_threshold", 0.35)),
        "presidio_entities": presidio.get("entities"),
        "rules_backend": rules.get("backend", "memory"),
        "rules_path": rules.get("path", "rules.db"),
        "custom_rules": list(data.get("custom_rules") or []),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(path) as f:
        return load_config(yaml.safe_load(f))


def _normalized(config: dict[str, Any]) -> dict[str, Any]:
    return load_config(config) if "rules_backend" not in config else config


def create_shield(config: dict[str, Any]) -> Shield | _NoopShield:
    """Create a configured Shield from a config dict."""
    cfg = _normalized(config)
    if not cfg["enabled"]:
        return _NoopShield()
    return Shield(ShieldConfig(
        use_ai=cfg["use_ai"],
        confidence_floor=cfg["confidence_floor"],
        max_ai_chars=cfg["max_ai_chars"],
        min_ai_chars=cfg["min_ai_chars"],
    ))


def create_classifier(config: dict[str, Any]) -> Classifier | None:
    """The configured classifier, or None.  Nothing is loaded until first use."""
    cfg = _normalized(config)
    if cfg["classifier"] == "presidio":
        return PresidioClassifier(
            language=cfg["presidio_language"],
            entities=cfg["presidio_entities"],
            score_threshold=cfg["presidio_threshold"],
        )
    if cfg["classifier"] in (None, "none"):
        return None
    raise ValueError(f"Unknown classifier: {cfg['classifier']!r}")


def create_store(config: dict[str, Any]) -> RuleStore:
    """Create the configured rule store, seeded with inline ``custom_rules``.

    Inline rules are added only when a rule with the same name is not
    already stored.  Invalid inline rules raise ``PatternError``.
    """
    cfg = _normalized(config)
    if cfg["rules_backend"] == "sqlite":
        store: RuleStore = SqliteRuleStore(db_path=cfg["rules_path"])
    else:
        store = RuleStore()

    existing = {r.name for r in store.rules()}
    for item in cfg["custom_rules"]:
        if item.get("name", "").strip() in existing:
            continue
        store.add(
            item.get("name", ""),
            item.get("pattern", ""),
            pattern_type=item.get("type", "simple"),
            severity=item.get("severity", "medium"),
            enabled=item.get("enabled", True),
        )
    return store
