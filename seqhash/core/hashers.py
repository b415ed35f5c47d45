# seqhash/core/hashers.py
"""
Hash algorithms (pluggable per-record hash + aggregate fold)

Intent
- Offer interchangeable digest families behind one narrow interface:
    hash(data: bytes) -> str          per-record digest of the encoded buffer
    fold(digests) -> str              aggregate digest over ordered digests
- Keep the per-record and the fold selectors independent (e.g. hash records with
  xxhash, fold with SHA-256).

Algorithms
- md5 / sha2 (SHA-256), via hashlib:
  - hash: hex digest of the buffer
  - fold: stream each digest's string bytes into one fresh hasher, in order,
    then hex-finalize. Order-sensitive: callers sort first (see aggregate.py).
- xxhash (fast, non-cryptographic, 64-bit xxh64):
  - hash: xxh64 of the buffer (seed 0) rendered as decimal
  - fold: fixed 4-word key, each digest fed as an 8-byte little-endian word,
    final 64-bit value rendered as decimal
  - raw integers may be passed to fold directly (no parse round trip);
    strings that do not parse as an unsigned 64-bit decimal are skipped and
    summarized in one WARNING per fold; a bad digest never aborts a run.
    With md5/sha2 record digests every item is skipped, so the fold is the
    empty-fold constant regardless of input.

Aliases
- "highway" and "fast" resolve to xxhash; "sha256" resolves to sha2.
"""

from __future__ import annotations

import hashlib
import struct
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Union

import xxhash

from seqhash.core.errors import DigestParseError
from seqhash.utils.logging import get_logger

FoldItem = Union[str, int]

_U64_MAX = (1 << 64) - 1

# Hardcoded fold key; packed and reduced to the xxh64 seed.
FOLD_KEY = (1, 2, 3, 4)


class HashAlgorithm(str, Enum):
    MD5 = "md5"
    SHA2 = "sha2"
    XXHASH = "xxhash"

    @classmethod
    def parse(cls, value: Union[str, "HashAlgorithm"]) -> "HashAlgorithm":
        if isinstance(value, HashAlgorithm):
            return value
        s = str(value).strip().lower()
        s = _ALIASES.get(s, s)
        try:
            return cls(s)
        except ValueError as e:
            expected = "|".join(a.value for a in cls)
            raise ValueError(f"Unknown hash algorithm: {value!r}. Expected one of: {expected}") from e


_ALIASES = {
    "sha256": "sha2",
    "sha-256": "sha2",
    "highway": "xxhash",
    "fast": "xxhash",
    "xxh64": "xxhash",
}


class Hasher(ABC):
    """
    Base interface. Subclasses implement hash() and fold().
    """

    algorithm: HashAlgorithm

    @abstractmethod
    def hash(self, data: bytes) -> str:
        ...

    def hash_value(self, data: bytes) -> Optional[int]:
        """
        Raw integer form of hash(), for algorithms whose digest is a number.
        """
        return None

    @abstractmethod
    def fold(self, digests: Iterable[FoldItem]) -> str:
        ...


class HashlibHasher(Hasher):
    def __init__(self, algorithm: HashAlgorithm, factory: Callable[[], Any]) -> None:
        self.algorithm = algorithm
        self._factory = factory

    def hash(self, data: bytes) -> str:
        h = self._factory()
        h.update(data)
        return h.hexdigest()

    def fold(self, digests: Iterable[FoldItem]) -> str:
        h = self._factory()
        for d in digests:
            h.update(str(d).encode("utf-8"))
        return h.hexdigest()


class XxHasher(Hasher):
    algorithm = HashAlgorithm.XXHASH

    def __init__(self, key: tuple = FOLD_KEY) -> None:
        self.key = tuple(key)
        self._fold_seed = xxhash.xxh64_intdigest(struct.pack("<4Q", *self.key))

    def hash(self, data: bytes) -> str:
        return str(self.hash_value(data))

    def hash_value(self, data: bytes) -> int:
        return xxhash.xxh64_intdigest(data)

    def fold(self, digests: Iterable[FoldItem]) -> str:
        logger = get_logger(__name__)
        h = xxhash.xxh64(seed=self._fold_seed)
        skipped = 0
        first_error: Optional[DigestParseError] = None
        for d in digests:
            try:
                value = d if isinstance(d, int) else parse_u64(d)
            except DigestParseError as e:
                skipped += 1
                first_error = first_error or e
                logger.debug("%s (skipped)", e)
                continue
            h.update(struct.pack("<Q", value))
        if skipped:
            logger.warning("%s (skipped %d unparseable digest(s) in fold)", first_error, skipped)
        return str(h.intdigest())


def parse_u64(digest: str) -> int:
    """
    Parse a decimal digest string back into an unsigned 64-bit integer.
    """
    s = str(digest)
    if not s.isdigit() or not s.isascii():
        raise DigestParseError(s)
    value = int(s)
    if value > _U64_MAX:
        raise DigestParseError(s)
    return value


def get_hasher(algorithm: Union[str, HashAlgorithm]) -> Hasher:
    algo = HashAlgorithm.parse(algorithm)
    if algo is HashAlgorithm.MD5:
        return HashlibHasher(algo, hashlib.md5)
    if algo is HashAlgorithm.SHA2:
        return HashlibHasher(algo, hashlib.sha256)
    return XxHasher()


def calculate_hash(algorithm: Union[str, HashAlgorithm], sequence: bytes) -> str:
    return get_hasher(algorithm).hash(sequence)


def calculate_final_hash(algorithm: Union[str, HashAlgorithm], hashes: Iterable[FoldItem]) -> str:
    return get_hasher(algorithm).fold(hashes)


__all__ = [
    "FOLD_KEY",
    "HashAlgorithm",
    "Hasher",
    "HashlibHasher",
    "XxHasher",
    "parse_u64",
    "get_hasher",
    "calculate_hash",
    "calculate_final_hash",
]
