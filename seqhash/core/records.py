# seqhash/core/records.py
"""
Record types shared by readers, the hashing pipeline and reporting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RawRecord:
    name: bytes
    sequence: bytes  # trimmed of surrounding ASCII whitespace


@dataclass(frozen=True)
class HashResult:
    name: str
    digest: str
    # raw 64-bit value when the record hasher is numeric (xxhash); folded directly
    value: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "digest": self.digest}


def record_name(raw: bytes) -> str:
    """
    Display form of a record name. latin-1 keeps a one-to-one byte mapping.
    """
    return bytes(raw).decode("latin-1")


__all__ = ["RawRecord", "HashResult", "record_name"]
