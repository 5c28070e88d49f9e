"""Overlap resolver. Merges detections from all sources into one list.

Greedy interval selection where the weight is the sort order:

    1. source priority   custom < regex < ai
    2. span length       longer first (only decides within one source)
    3. start offset      earlier first

A candidate is kept when it overlaps nothing kept before it.  The result is
re-sorted by position so renderers can walk it left to right.
"""

from __future__ import annotations
from typing import Iterable

from .types import SOURCE_PRIORITY, Detection


def _rank(d: Detection) -> tuple[int, int, int]:
    return (SOURCE_PRIORITY.get(d.source, len(SOURCE_PRIORITY)), -d.length, d.start)


def _flatten(groups: tuple[Iterable[Detection] | Detection, ...]) -> list[Detection]:
    out: list[Detection] = []
    for group in groups:
        if isinstance(group, Detection):
            out.append(group)
            continue
        for item in group:
            if isinstance(item, Detection):
                out.append(item)
            else:
                out.extend(item)
    return out


def resolve(*groups: Iterable[Detection] | Iterable[Iterable[Detection]]) -> list[Detection]:
    """Merge one or more detection lists into a non-overlapping list.

    ``resolve(flat)``, ``resolve(regex_hits, ai_hits)`` and
    ``resolve([regex_hits, ai_hits])`` are equivalent when ``flat`` is the
    concatenation of the two.
    """
    candidates = _flatten(groups)
    if not candidates:
        return []
    taken: list[Detection] = []
    for d in sorted(candidates, key=_rank):
        if not any(d.overlaps(t) for t in taken):
            taken.append(d)
    return sorted(taken, key=lambda d: d.start)
