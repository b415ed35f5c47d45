# seqhash/core/aggregate.py
"""
Aggregate fingerprint of a dataset.

The final digest is a pure function of the sorted multiset of per-record
digests: sort ascending by digest string, then fold. Record names, input order
and which file contributed a record do not affect it.
"""

from __future__ import annotations

from typing import Iterable, List

from seqhash.core.hashers import FoldItem, Hasher
from seqhash.core.records import HashResult


def sorted_fold_items(results: Iterable[HashResult]) -> List[FoldItem]:
    ordered = sorted(results, key=lambda r: r.digest)
    return [r.value if r.value is not None else r.digest for r in ordered]


def finalize(results: Iterable[HashResult], hasher: Hasher) -> str:
    return hasher.fold(sorted_fold_items(results))


__all__ = ["sorted_fold_items", "finalize"]
