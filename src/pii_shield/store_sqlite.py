"""Persistent rule store backed by SQLite — survives process restarts.

Drop-in replacement for RuleStore when the rules need to outlive the
process.

Usage:
    store = SqliteRuleStore(db_path="~/.pii-shield/rules.db")
    # Same API as RuleStore: add, update, remove, enabled_rules, etc.

Only the user's input is stored.  Compiled patterns are re-derived on load;
a row whose pattern no longer compiles is skipped with a warning.
"""

from __future__ import annotations
import logging
import sqlite3
from pathlib import Path

from .errors import PatternError
from .store import RuleStore
from .types import CustomRule

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS custom_rules (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    pattern_type TEXT NOT NULL,
    user_pattern TEXT NOT NULL,
    severity TEXT NOT NULL,
    enabled INTEGER NOT NULL DEFAULT 1
);
CREATE TABLE IF NOT EXISTS meta (
    key TEXT PRIMARY KEY,
    value INTEGER NOT NULL
);
"""


class SqliteRuleStore(RuleStore):
    """Persistent custom rule store."""

    def __init__(self, *, db_path: str | Path = "rules.db") -> None:
        super().__init__()
        db_path = Path(db_path).expanduser()
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self._db = sqlite3.connect(str(db_path), check_same_thread=False)
        self._db.executescript(_SCHEMA)
        self._load()

    def _load(self) -> None:
        """Load existing rules from DB into memory."""
        rows = self._db.execute(
            "SELECT id, name, pattern_type, user_pattern, severity, enabled "
            "FROM custom_rules ORDER BY id"
        ).fetchall()
        for rule_id, name, ptype, pattern, severity, enabled in rows:
            try:
                rule = CustomRule(
                    id=rule_id, name=name, user_pattern=pattern,
                    pattern_type=ptype, severity=severity, enabled=bool(enabled),
                )
            except (PatternError, ValueError) as e:
                logger.warning("skipping stored rule %s (%r): %s", rule_id, name, e)
                continue
            self._rules[rule.id] = rule

        row = self._db.execute("SELECT value FROM meta WHERE key = 'last_id'").fetchone()
        stored_last = row[0] if row else 0
        self._last_id = max([stored_last, *(r[0] for r in rows)])

    def _next_id(self) -> int:
        rule_id = super()._next_id()
        self._db.execute(
            "INSERT OR REPLACE INTO meta (key, value) VALUES ('last_id', ?)", (rule_id,)
        )
        return rule_id

    def _save(self, rule: CustomRule) -> None:
        self._db.execute(
            "INSERT OR REPLACE INTO custom_rules "
            "(id, name, pattern_type, user_pattern, severity, enabled) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (rule.id, rule.name, rule.pattern_type, rule.user_pattern,
             rule.severity, int(rule.enabled)),
        )
        self._db.commit()

    def _delete(self, rule_id: int) -> None:
        self._db.execute("DELETE FROM custom_rules WHERE id = ?", (rule_id,))
        self._db.commit()

    def close(self) -> None:
        self._db.close()
