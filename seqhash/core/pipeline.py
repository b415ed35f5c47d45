# seqhash/core/pipeline.py
"""
Record pipeline: encode -> (canonicalize) -> hash, one record at a time.

Guarantees
- Output order == input order (no dedup, no reordering here).
- Records are consumed lazily; only the result list is accumulated.
- Pure: no printing, no I/O. Presentation is layered on top by the CLI.
"""

from __future__ import annotations

from typing import Iterable, List

from seqhash.core.encoding import encode_record_sequence
from seqhash.core.hashers import Hasher
from seqhash.core.records import HashResult, RawRecord, record_name


def hash_record(record: RawRecord, *, canonical: bool, hasher: Hasher) -> HashResult:
    encoded = encode_record_sequence(record.sequence, canonical=canonical)
    return HashResult(
        name=record_name(record.name),
        digest=hasher.hash(encoded),
        value=hasher.hash_value(encoded),
    )


def process_records(records: Iterable[RawRecord], *, canonical: bool, hasher: Hasher) -> List[HashResult]:
    """
    Hash every record in input order.
    """
    return [hash_record(r, canonical=canonical, hasher=hasher) for r in records]


__all__ = ["hash_record", "process_records"]
