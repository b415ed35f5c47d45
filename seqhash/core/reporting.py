# seqhash/core/reporting.py
"""
Reporting helpers: turn hash results into printable rows and artifact payloads.

- format_hash_table(): "Record Name<TAB>Hash" header + one line per result
- format_final_hash(): the always-printed final line
- records_payload(): JSONL rows (input order)
- duplicates_frame(): duplicate table for PSV export
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pandas as pd

from seqhash.core.records import HashResult

TABLE_HEADER = "Record Name\tHash"


def format_hash_table(results: Sequence[HashResult]) -> List[str]:
    return [TABLE_HEADER] + [f"{r.name}\t{r.digest}" for r in results]


def format_final_hash(final_hash: str) -> str:
    return f"Final hash\t{final_hash}"


def records_payload(results: Sequence[HashResult]) -> List[Dict[str, Any]]:
    return [dict(r.to_dict(), index=i) for i, r in enumerate(results)]


def duplicates_frame(duplicates: Sequence[HashResult]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"record_name": d.name, "digest": d.digest} for d in duplicates],
        columns=["record_name", "digest"],
    )


__all__ = [
    "TABLE_HEADER",
    "format_hash_table",
    "format_final_hash",
    "records_payload",
    "duplicates_frame",
]
