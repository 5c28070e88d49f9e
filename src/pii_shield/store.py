"""RuleStore — the user's custom detection rules, in memory.

Design goals:
  - Rules are always valid: every add/update rebuilds the ``CustomRule``,
    which recompiles and validates the pattern
  - Ids are time-based, strictly increasing, and never reused
  - Scans read a snapshot (``enabled_rules()``); the store is the only owner
    of mutable rule state
"""

from __future__ import annotations
import dataclasses
import time
from typing import Any

from .types import CustomRule


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class RuleStore:
    """Ordered collection of custom rules keyed by id."""

    def __init__(self) -> None:
        self._rules: dict[int, CustomRule] = {}
        self._last_id = 0

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def add(
        self,
        name: str,
        user_pattern: str,
        pattern_type: str = "simple",
        severity: str = "medium",
        enabled: bool = True,
    ) -> CustomRule:
        """Validate and store a new rule.  Raises ``PatternError`` when invalid."""
        rule = CustomRule(
            id=self._next_id(),
            name=name.strip(),
            user_pattern=user_pattern.strip(),
            pattern_type=pattern_type,
            severity=severity,
            enabled=enabled,
        )
        self._rules[rule.id] = rule
        self._last_id = rule.id
        self._save(rule)
        return rule

    def update(self, rule_id: int, **changes: Any) -> CustomRule:
        """Edit a rule; the compiled pattern is re-derived from the result."""
        old = self._rules[rule_id]
        if "id" in changes:
            raise ValueError("Rule ids cannot be changed")
        for key in ("name", "user_pattern"):
            if isinstance(changes.get(key), str):
                changes[key] = changes[key].strip()
        rule = dataclasses.replace(old, **changes)
        self._rules[rule_id] = rule
        self._save(rule)
        return rule

    def set_enabled(self, rule_id: int, enabled: bool) -> CustomRule:
        return self.update(rule_id, enabled=enabled)

    def remove(self, rule_id: int) -> None:
        del self._rules[rule_id]
        self._delete(rule_id)

    def get(self, rule_id: int) -> CustomRule | None:
        return self._rules.get(rule_id)

    def rules(self) -> list[CustomRule]:
        """All rules in creation order."""
        return list(self._rules.values())

    def enabled_rules(self) -> list[CustomRule]:
        return [r for r in self._rules.values() if r.enabled]

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._rules)

    def clear(self) -> None:
        for rule_id in list(self._rules):
            self.remove(rule_id)

    # ------------------------------------------------------------------
    # Persistence hooks (no-ops in memory)
    # ------------------------------------------------------------------

    def _next_id(self) -> int:
        return max(_now_ms(), self._last_id + 1)

    def _save(self, rule: CustomRule) -> None:
        pass

    def _delete(self, rule_id: int) -> None:
        pass
