# seqhash/core/duplicates.py
"""
Duplicate detection over per-record digests.

Policy
- Two records are duplicates iff their digests are equal; names are ignored.
- The first occurrence (in scan order) is canonical; every later record sharing
  its digest is reported, in scan order.
- The caller's list is never reordered or mutated.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Set

from seqhash.core.records import HashResult


def find_duplicates(results: Sequence[HashResult]) -> List[HashResult]:
    seen: Set[str] = set()
    dups: List[HashResult] = []
    for r in results:
        if r.digest in seen:
            dups.append(r)
        else:
            seen.add(r.digest)
    return dups


def duplicate_groups(results: Sequence[HashResult]) -> Dict[str, List[str]]:
    """
    digest -> names of every record sharing it (only digests seen more than once).
    Keys and names are in first-seen order.
    """
    groups: Dict[str, List[str]] = {}
    for r in results:
        groups.setdefault(r.digest, []).append(r.name)
    return {d: names for d, names in groups.items() if len(names) > 1}


__all__ = ["find_duplicates", "duplicate_groups"]
