# seqhash/core/hash_run.py
"""
Hash run: one fingerprint over one or more inputs.

Intent
- Wire readers -> record pipeline -> duplicate detection -> aggregate, for every
  configured input, in the given order.
- Return plain data (HashRunResult); printing and artifact writing stay with the
  CLI / batch pipeline.

Notes
- Results of all inputs are concatenated before duplicate detection and the final
  fold, so duplicates across files are reported and the final digest covers the
  whole dataset independent of which file held which record.
- The xxhash fold reads digests as 64-bit integers. md5/sha2 record digests are
  hex strings, so folding them with xxhash skips every record; this combination is
  logged as a warning up front.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from seqhash.core.aggregate import finalize
from seqhash.core.duplicates import duplicate_groups, find_duplicates
from seqhash.core.hashers import HashAlgorithm, get_hasher
from seqhash.core.pipeline import process_records
from seqhash.core.records import HashResult
from seqhash.io.readers import DEFAULT_SNIFF_LINES, read_records
from seqhash.utils.hashing import sha1_file
from seqhash.utils.logging import get_logger
from seqhash.utils.paths import STDIN_PATH


@dataclass(frozen=True)
class InputSummary:
    path: str
    n_records: int
    sha1: Optional[str]  # None for stdin

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "n_records": self.n_records, "sha1": self.sha1}


@dataclass
class HashRunResult:
    results: List[HashResult]
    duplicates: List[HashResult]
    final_hash: str
    record_algorithm: HashAlgorithm
    final_algorithm: HashAlgorithm
    canonical: bool
    inputs: List[InputSummary] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicates)

    def to_report(self) -> Dict[str, Any]:
        return {
            "final_hash": self.final_hash,
            "settings": {
                "record_algorithm": self.record_algorithm.value,
                "final_algorithm": self.final_algorithm.value,
                "canonical": self.canonical,
            },
            "inputs": [i.to_dict() for i in self.inputs],
            "n_records": len(self.results),
            "n_duplicates": len(self.duplicates),
            "duplicate_groups": duplicate_groups(self.results),
        }


def run_hash(
    paths: Sequence[str],
    *,
    record_algorithm: HashAlgorithm | str = HashAlgorithm.MD5,
    final_algorithm: HashAlgorithm | str = HashAlgorithm.MD5,
    canonical: bool = False,
    file_type: str = "auto",
    sniff_lines: int = DEFAULT_SNIFF_LINES,
    run_id: Optional[str] = None,
) -> HashRunResult:
    logger = get_logger(__name__, run_id=run_id)

    if not paths:
        raise ValueError("No input files given")

    record_hasher = get_hasher(record_algorithm)
    final_hasher = get_hasher(final_algorithm)

    if final_hasher.algorithm is HashAlgorithm.XXHASH and record_hasher.algorithm is not HashAlgorithm.XXHASH:
        logger.warning(
            "Final hash %s cannot read %s record digests; they will be skipped",
            final_hasher.algorithm.value,
            record_hasher.algorithm.value,
        )

    results: List[HashResult] = []
    inputs: List[InputSummary] = []
    for path in paths:
        records = read_records(path, file_type=file_type, sniff_lines=sniff_lines)
        file_results = process_records(records, canonical=canonical, hasher=record_hasher)
        results.extend(file_results)
        inputs.append(
            InputSummary(
                path=path,
                n_records=len(file_results),
                sha1=None if path == STDIN_PATH else sha1_file(Path(path)),
            )
        )
        logger.info("Hashed %d records from %s", len(file_results), path)

    duplicates = find_duplicates(results)
    if duplicates:
        logger.warning("Duplicates found! (%d records share a digest with an earlier record)", len(duplicates))

    final_hash = finalize(results, final_hasher)

    return HashRunResult(
        results=results,
        duplicates=duplicates,
        final_hash=final_hash,
        record_algorithm=record_hasher.algorithm,
        final_algorithm=final_hasher.algorithm,
        canonical=canonical,
        inputs=inputs,
    )


__all__ = ["InputSummary", "HashRunResult", "run_hash"]
