# seqhash/io/readers.py
"""
Readers (FASTA/FASTQ records from files, compressed files or stdin)

Intent
- Turn an input path into a lazy stream of RawRecord(name, sequence) for the hashing
  pipeline, hiding compression, stdin and format detection from the core.

External calls
- Bio.SeqIO.FastaIO.SimpleFastaParser / Bio.SeqIO.QualityIO.FastqGeneralIterator
- gzip / bz2 / lzma for transparent decompression

Primary functions
- open_sequence_stream(path) -> context manager yielding a text handle
- detect_file_type(lines, max_lines=100) -> FileType
- sniff_file_type(handle, n_lines=100) -> (FileType, handle that replays the sniffed lines)
- iter_fasta_records(handle, source=None) / iter_fastq_records(handle, source=None)
- read_records(path, file_type="auto", sniff_lines=100) -> Iterator[RawRecord]

Key behaviors / guarantees
- **stdin:** path "-" reads from standard input.
- **Compression by content, not extension:** gzip, bzip2 and xz are recognized by their
  magic bytes; anything else is read as plain text.
- **Byte-faithful text:** streams are decoded as latin-1, so every byte maps to one
  character and back; the encoder sees the exact input bytes.
- **Trimmed sequences:** leading/trailing ASCII whitespace is stripped from each sequence
  (Biopython already joins multi-line FASTA sequences).
- **Detection heuristic:** a line starting with "@" at an index divisible by 4 means FASTQ
  (checked first); otherwise any line starting with ">" means FASTA; else UNKNOWN.

Error handling / failure modes
- Nonexistent file -> FileNotFoundError (from open()).
- Undetectable format -> UnknownFileTypeError.
- Malformed FASTQ/FASTA reported by Biopython (ValueError) -> RecordParseError.
"""

from __future__ import annotations

import bz2
import gzip
import io
import lzma
import sys
from collections import deque
from contextlib import ExitStack, contextmanager
from enum import Enum
from typing import BinaryIO, Iterable, Iterator, List, TextIO, Tuple

from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqIO.QualityIO import FastqGeneralIterator

from seqhash.core.errors import RecordParseError, UnknownFileTypeError
from seqhash.core.records import RawRecord
from seqhash.utils.logging import get_logger
from seqhash.utils.paths import STDIN_PATH

DEFAULT_SNIFF_LINES = 100

_TEXT_ENCODING = "latin-1"

# Only these are trimmed from sequence ends; any other byte is kept and encodes to 0.
_ASCII_WHITESPACE = b" \t\n\r\x0b\x0c"

_GZIP_MAGIC = b"\x1f\x8b"
_BZIP2_MAGIC = b"BZh"
_XZ_MAGIC = b"\xfd7zXZ\x00"


class FileType(str, Enum):
    FASTA = "fasta"
    FASTQ = "fastq"
    UNKNOWN = "unknown"


class ReplayStream:
    """
    Text handle that yields already-consumed lines before the rest of the stream.
    Supports the subset of the file API the Biopython parsers use.
    """

    def __init__(self, head: Iterable[str], rest: TextIO) -> None:
        self._head = deque(head)
        self._rest = rest

    def __iter__(self) -> "ReplayStream":
        return self

    def __next__(self) -> str:
        if self._head:
            return self._head.popleft()
        return next(self._rest)

    def readline(self) -> str:
        if self._head:
            return self._head.popleft()
        return self._rest.readline()

    def read(self, size: int = -1) -> str:
        if size == 0:
            return ""
        buffered = "".join(self._head)
        self._head.clear()
        if size is None or size < 0:
            return buffered + self._rest.read()
        if len(buffered) >= size:
            if buffered[size:]:
                self._head.append(buffered[size:])
            return buffered[:size]
        return buffered + self._rest.read(size - len(buffered))


def _decompressed(binary: BinaryIO) -> BinaryIO:
    head = binary.peek(len(_XZ_MAGIC))[: len(_XZ_MAGIC)]
    if head.startswith(_GZIP_MAGIC):
        return gzip.GzipFile(fileobj=binary, mode="rb")
    if head.startswith(_BZIP2_MAGIC):
        return bz2.BZ2File(binary, mode="rb")
    if head.startswith(_XZ_MAGIC):
        return lzma.LZMAFile(binary, mode="rb")
    return binary


@contextmanager
def open_sequence_stream(path: str) -> Iterator[TextIO]:
    """
    Open a (possibly compressed) sequence file, or stdin for "-", as a text handle.
    """
    with ExitStack() as stack:
        if path == STDIN_PATH:
            binary = sys.stdin.buffer
        else:
            binary = stack.enter_context(open(path, "rb"))
        if not hasattr(binary, "peek"):
            binary = io.BufferedReader(binary)
            # detach last so the wrapped stream is never closed with the wrapper
            stack.callback(binary.detach)

        decompressed = _decompressed(binary)
        if decompressed is not binary:
            stack.enter_context(decompressed)

        text = io.TextIOWrapper(decompressed, encoding=_TEXT_ENCODING)
        try:
            yield text
        finally:
            # leave closing of the underlying stream to the ExitStack (never close stdin)
            text.detach()


def detect_file_type(lines: Iterable[str], max_lines: int = DEFAULT_SNIFF_LINES) -> FileType:
    is_fasta = False
    for i, line in enumerate(lines):
        if i % 4 == 0 and line.startswith("@"):
            return FileType.FASTQ
        if line.startswith(">"):
            is_fasta = True
        if i >= max_lines:
            break
    return FileType.FASTA if is_fasta else FileType.UNKNOWN


def sniff_file_type(handle: TextIO, n_lines: int = DEFAULT_SNIFF_LINES) -> Tuple[FileType, ReplayStream]:
    """
    Read the first n_lines, detect the format, and return a handle that replays them.
    """
    head: List[str] = []
    for line in handle:
        head.append(line)
        if len(head) >= n_lines:
            break
    file_type = detect_file_type((line.rstrip("\r\n") for line in head), max_lines=n_lines)
    return file_type, ReplayStream(head, handle)


def _to_record(title: str, sequence: str) -> RawRecord:
    return RawRecord(
        name=title.encode(_TEXT_ENCODING),
        sequence=sequence.encode(_TEXT_ENCODING).strip(_ASCII_WHITESPACE),
    )


def iter_fasta_records(handle: Iterable[str], *, source: str | None = None) -> Iterator[RawRecord]:
    try:
        for title, seq in SimpleFastaParser(handle):
            yield _to_record(title, seq)
    except ValueError as e:
        raise RecordParseError(str(e), source=source) from e


def iter_fastq_records(handle: Iterable[str], *, source: str | None = None) -> Iterator[RawRecord]:
    try:
        for title, seq, _qual in FastqGeneralIterator(handle):
            yield _to_record(title, seq)
    except ValueError as e:
        raise RecordParseError(str(e), source=source) from e


def read_records(
    path: str,
    file_type: FileType | str = "auto",
    sniff_lines: int = DEFAULT_SNIFF_LINES,
) -> Iterator[RawRecord]:
    """
    Lazily yield RawRecords from one input (file path or "-").

    file_type:
    - "auto": sniff the first `sniff_lines` lines
    - "fasta" / "fastq": skip sniffing
    """
    logger = get_logger(__name__)
    requested = str(getattr(file_type, "value", file_type)).lower()

    with open_sequence_stream(path) as handle:
        logger.info("Processing file: %s", path)

        stream: Iterable[str] = handle
        if requested == "auto":
            detected, stream = sniff_file_type(handle, sniff_lines)
            if detected is FileType.UNKNOWN:
                raise UnknownFileTypeError(path, n_lines=sniff_lines)
            logger.debug("Detected %s input: %s", detected.value, path)
        else:
            detected = FileType(requested)

        if detected is FileType.FASTQ:
            yield from iter_fastq_records(stream, source=path)
        else:
            yield from iter_fasta_records(stream, source=path)


__all__ = [
    "DEFAULT_SNIFF_LINES",
    "FileType",
    "ReplayStream",
    "open_sequence_stream",
    "detect_file_type",
    "sniff_file_type",
    "iter_fasta_records",
    "iter_fastq_records",
    "read_records",
]
