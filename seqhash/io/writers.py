# seqhash/io/writers.py
"""
Artifact writers for a hashing run

Files written by pipeline 1 (and `seqhash --artifacts`)
- output.report_json    write_json()   final digest, algorithms, canonical flag,
                                       per-input record counts + SHA1, duplicate groups
- output.records_jsonl  write_jsonl()  one {"index", "name", "digest"} per record, input order
- output.duplicates_psv write_psv()    record_name|digest for every later occurrence

Two runs over the same inputs and settings produce byte-identical files:
UTF-8, sorted JSON keys, "\\n" line endings, PSV columns in DataFrame order.
Parent directories are created on demand. Each write logs path and size at INFO.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from seqhash.utils.logging import get_logger

PSV_SEP = "|"


def ensure_parent_dir(path: str | Path) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def _dumps(obj: Any, **kwargs: Any) -> str:
    # record names are latin-1 decoded; keep them readable rather than \u-escaped
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, **kwargs)


def write_json(path: str | Path, obj: Mapping[str, Any], *, indent: int = 2) -> None:
    """
    Write the run report.
    """
    logger = get_logger(__name__)
    p = ensure_parent_dir(path)

    data = (_dumps(obj, indent=indent) + "\n").encode("utf-8")
    p.write_bytes(data)

    logger.info("Wrote report: %s (bytes=%d)", p, len(data))


def write_jsonl(path: str | Path, records: Iterable[Mapping[str, Any]]) -> None:
    """
    Write per-record digests, one JSON object per line, in the order given.
    """
    logger = get_logger(__name__)
    p = ensure_parent_dir(path)

    n = 0
    with p.open("w", encoding="utf-8", newline="\n") as f:
        for rec in records:
            f.write(_dumps(rec) + "\n")
            n += 1

    logger.info("Wrote records: %s (rows=%d)", p, n)


def write_psv(path: str | Path, df: pd.DataFrame) -> None:
    """
    Write the duplicates table as pipe-separated values.

    Names containing '|' or quotes are quoted/escaped so the table stays parseable.
    An empty frame still writes its header row.
    """
    logger = get_logger(__name__)
    p = ensure_parent_dir(path)

    df.to_csv(
        p,
        index=False,
        encoding="utf-8",
        sep=PSV_SEP,
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
        escapechar="\\",
        doublequote=False,
    )

    logger.info("Wrote duplicates: %s (rows=%d, cols=%d)", p, int(df.shape[0]), int(df.shape[1]))


__all__ = [
    "PSV_SEP",
    "ensure_parent_dir",
    "write_json",
    "write_jsonl",
    "write_psv",
]
