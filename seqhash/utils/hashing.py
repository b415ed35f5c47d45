# seqhash/utils/hashing.py
"""
File checksum helpers (deterministic)

Intent
- Record a checksum of every input file in the run report, so a fingerprint can be
  traced back to the exact bytes it was computed from.

Notes
- Uses SHA1 for stable, short-ish digests (40 hex chars).
- Intended for *traceability*, not security; unrelated to the record hashers in
  seqhash.core.hashers.
- Reads in chunks so large (compressed) sequence files are not loaded whole.
"""

from __future__ import annotations

from hashlib import sha1
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

_CHUNK_SIZE = 1 << 20


def sha1_file(path: PathLike) -> str:
    """
    SHA1 hex digest of a file's raw bytes.
    """
    h = sha1()
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


__all__ = ["sha1_file"]
