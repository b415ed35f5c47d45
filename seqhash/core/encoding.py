# seqhash/core/encoding.py
"""
Nucleotide encoding + canonicalization

Intent
- Map raw sequence bytes to the compact code alphabet used for hashing:
    0 = unrecognized, 1 = A, 2 = C, 3 = G, 4 = T
- Provide the reverse-complement encoding and the canonical (strand-independent)
  form of a sequence, so a record and its reverse complement hash identically.

Key behaviors / guarantees
- **Total encoding:** every byte maps to exactly one code; unknown symbols (N,
  IUPAC ambiguity codes, digits, punctuation) become 0 and are never an error.
- **Case-insensitive:** lowercase a/c/g/t encode exactly like uppercase.
- **Length-preserving:** output length always equals input length.
- **Canonical form:** the lexicographically smaller of forward and
  reverse-complement encodings (unsigned, element-wise). Ties keep forward.
  The operation is deterministic and idempotent.

Implementation notes
- Tables are 256-byte constants applied with bytes.translate(); they are module
  private and never mutated.
- Inputs are expected to be trimmed of surrounding ASCII whitespace already
  (the readers do this).
"""

from __future__ import annotations


def _build_table(mapping: dict[int, int]) -> bytes:
    table = bytearray(256)
    for byte, code in mapping.items():
        table[byte] = code
        # same code for lowercase
        table[ord(chr(byte).lower())] = code
    return bytes(table)


_FORWARD = _build_table({ord("A"): 1, ord("C"): 2, ord("G"): 3, ord("T"): 4})
_COMPLEMENT = _build_table({ord("A"): 4, ord("C"): 3, ord("G"): 2, ord("T"): 1})

# complement in code space: 1<->4, 2<->3, 0 stays 0
_CODE_COMPLEMENT = bytes([0, 4, 3, 2, 1]) + bytes(251)

# raw nucleotide complement; anything that is not ACGT/acgt is kept as-is
_RAW_COMPLEMENT = bytes.maketrans(b"ACGTacgt", b"TGCAtgca")


def encode(sequence: bytes) -> bytes:
    """
    Encode raw sequence bytes into codes 0..4.
    """
    return bytes(sequence).translate(_FORWARD)


def reverse_complement_encode(sequence: bytes) -> bytes:
    """
    Encode the reverse complement of raw sequence bytes (complement table, then reversed).
    """
    return bytes(sequence).translate(_COMPLEMENT)[::-1]


def canonicalize(encoded: bytes, reverse_complement_encoded: bytes) -> bytes:
    """
    Pick the lexicographically smaller of the forward and reverse-complement encodings.
    Palindromic sequences (equal encodings) keep the forward form.
    """
    if reverse_complement_encoded < encoded:
        return reverse_complement_encoded
    return encoded


def canonical_form(encoded: bytes) -> bytes:
    """
    Canonical form of an already encoded sequence.

    canonical_form(canonical_form(x)) == canonical_form(x)
    """
    return canonicalize(encoded, encoded.translate(_CODE_COMPLEMENT)[::-1])


def encode_record_sequence(sequence: bytes, *, canonical: bool) -> bytes:
    """
    Encode a trimmed record sequence, optionally in canonical (strand-independent) form.
    """
    forward = encode(sequence)
    if not canonical:
        return forward
    return canonicalize(forward, reverse_complement_encode(sequence))


def reverse_complement(sequence: bytes) -> bytes:
    """
    Reverse complement of raw nucleotides (case kept; non-ACGT bytes unchanged).
    """
    return bytes(sequence).translate(_RAW_COMPLEMENT)[::-1]


__all__ = [
    "encode",
    "reverse_complement_encode",
    "canonicalize",
    "canonical_form",
    "encode_record_sequence",
    "reverse_complement",
]
