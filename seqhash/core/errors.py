# seqhash/core/errors.py
"""
Exception hierarchy for seqhash.

All errors raised by this package inherit from SeqHashError so the CLI and
batch pipelines can catch broadly, while tests can assert on the narrow type.
"""

from __future__ import annotations

from typing import Optional


class SeqHashError(Exception):
    """Base exception for all seqhash errors."""


class UnknownFileTypeError(SeqHashError):
    """The input could not be identified as FASTA or FASTQ."""

    def __init__(self, source: str, *, n_lines: int) -> None:
        self.source = source
        self.n_lines = n_lines
        super().__init__(
            f"Unable to determine the file type of {source} from the first {n_lines} lines. "
            "Please specify --fasta or --fastq."
        )


class RecordParseError(SeqHashError):
    """A record source produced malformed FASTA/FASTQ."""

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class DigestParseError(SeqHashError):
    """A digest string could not be read back as a 64-bit integer during a fold."""

    def __init__(self, digest: str) -> None:
        self.digest = digest
        super().__init__(f"Failed to parse hash: {digest}")


__all__ = ["SeqHashError", "UnknownFileTypeError", "RecordParseError", "DigestParseError"]
