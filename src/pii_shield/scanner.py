"""Scan engine: runs custom rules, then the built-in registry, over text.

Matching and overlap resolution are separate phases: ``scan`` returns every
match from every rule, in rule order.  Pass the result through
``resolve`` before rendering.
"""

from __future__ import annotations
import re
from typing import Iterable

from .compiler import CUSTOM_FLAGS
from .patterns import CUSTOM_ICON, scan_builtin
from .types import CustomRule, Detection


def scan_custom(text: str, rules: Iterable[CustomRule]) -> list[Detection]:
    """Run enabled custom rules case-insensitively, in configured order."""
    matches: list[Detection] = []
    for rule in rules:
        if not rule.enabled:
            continue
        pattern = re.compile(rule.compiled_pattern, CUSTOM_FLAGS)
        for m in pattern.finditer(text):
            # Zero-width matches from advanced patterns carry no text
            if m.end() == m.start():
                continue
            matches.append(Detection(
                kind="custom",
                severity=rule.severity,
                label=rule.name,
                matched_text=m.group(),
                start=m.start(),
                end=m.end(),
                source="custom",
                icon=CUSTOM_ICON,
                custom_rule_id=rule.id,
            ))
    return matches


def scan(text: str, custom_rules: Iterable[CustomRule] = ()) -> list[Detection]:
    """All custom and built-in matches in insertion order, overlaps included."""
    return scan_custom(text, custom_rules) + scan_builtin(text)
