# tests/test_readers.py

from __future__ import annotations

import bz2
import gzip
import io
import lzma
import sys
from pathlib import Path

import pytest

from seqhash.core.errors import RecordParseError, UnknownFileTypeError
from seqhash.io.readers import (
    FileType,
    detect_file_type,
    iter_fasta_records,
    iter_fastq_records,
    open_sequence_stream,
    read_records,
    sniff_file_type,
)

FASTA = ">seq1 first record\nACGT\nAC\n>seq2\n  ggnn  \n"
FASTQ = "@r1 desc\nACGT\n+\nIIII\n@r2\nGG\n+\nII\n"


def _write(tmp_path: Path, name: str, content: str) -> Path:
    p = tmp_path / name
    p.write_text(content, encoding="utf-8")
    return p


def _pairs(path, **kw):
    return [(r.name, r.sequence) for r in read_records(str(path), **kw)]


def test_detect_file_type():
    assert detect_file_type(["@r1", "ACGT", "+", "IIII"]) is FileType.FASTQ
    assert detect_file_type([">a", "ACGT"]) is FileType.FASTA
    assert detect_file_type([">a", "@not-a-header"]) is FileType.FASTA
    assert detect_file_type(["hello", "world"]) is FileType.UNKNOWN
    assert detect_file_type([]) is FileType.UNKNOWN


def test_detect_file_type_stops_after_max_lines():
    lines = ["x"] * 200 + [">late"]
    assert detect_file_type(lines, max_lines=100) is FileType.UNKNOWN


def test_sniff_file_type_replays_consumed_lines():
    handle = io.StringIO(FASTA)
    ft, stream = sniff_file_type(handle, n_lines=2)
    assert ft is FileType.FASTA
    assert "".join(stream) == FASTA


def test_read_fasta_joins_lines_and_trims(tmp_path: Path):
    p = _write(tmp_path, "in.fa", FASTA)
    assert _pairs(p) == [(b"seq1 first record", b"ACGTAC"), (b"seq2", b"ggnn")]


def test_read_fastq(tmp_path: Path):
    p = _write(tmp_path, "in.fq", FASTQ)
    assert _pairs(p) == [(b"r1 desc", b"ACGT"), (b"r2", b"GG")]


def test_read_more_records_than_sniffed_lines(tmp_path: Path):
    body = "".join(f">r{i}\nACGT\n" for i in range(300))
    p = _write(tmp_path, "many.fa", body)
    assert len(_pairs(p, sniff_lines=10)) == 300


@pytest.mark.parametrize("opener", [gzip.open, bz2.open, lzma.open])
def test_read_compressed_by_magic_bytes(tmp_path: Path, opener):
    p = tmp_path / "in.compressed"
    with opener(p, "wb") as f:
        f.write(FASTQ.encode("ascii"))
    assert _pairs(p) == [(b"r1 desc", b"ACGT"), (b"r2", b"GG")]


def test_read_stdin(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(FASTA.encode("ascii"))))
    assert [r.name for r in read_records("-")] == [b"seq1 first record", b"seq2"]


def test_bytes_round_trip_latin1(tmp_path: Path):
    p = tmp_path / "odd.fa"
    p.write_bytes(b">n\xe9\nAC\xffGT\n")
    assert _pairs(p) == [(b"n\xe9", b"AC\xffGT")]


def test_explicit_file_type_skips_sniffing(tmp_path: Path):
    p = _write(tmp_path, "in.txt", FASTA)
    assert len(_pairs(p, file_type="fasta")) == 2
    assert len(_pairs(p, file_type=FileType.FASTA)) == 2


def test_unknown_file_type_raises(tmp_path: Path):
    p = _write(tmp_path, "notes.txt", "hello\nworld\n")
    with pytest.raises(UnknownFileTypeError) as e:
        list(read_records(str(p)))
    assert "--fasta or --fastq" in str(e.value)


def test_empty_input_is_unknown(tmp_path: Path):
    p = _write(tmp_path, "empty.fa", "")
    with pytest.raises(UnknownFileTypeError):
        list(read_records(str(p)))


def test_malformed_fastq_raises_record_parse_error(tmp_path: Path):
    p = _write(tmp_path, "bad.fq", "@r1\nACGT\n+\nII\n")
    with pytest.raises(RecordParseError) as e:
        list(read_records(str(p)))
    assert str(p) in str(e.value)


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        list(read_records(str(tmp_path / "nope.fa")))


def test_open_sequence_stream_does_not_close_stdin(monkeypatch: pytest.MonkeyPatch):
    fake = io.TextIOWrapper(io.BytesIO(b">a\nAC\n"))
    monkeypatch.setattr(sys, "stdin", fake)
    with open_sequence_stream("-") as handle:
        assert handle.readline() == ">a\n"
    assert not fake.buffer.closed


def test_iter_fasta_records_trims_sequence_and_keeps_full_title():
    records = list(iter_fasta_records(io.StringIO(FASTA)))

    assert [r.name for r in records] == [b"seq1 first record", b"seq2"]
    assert [r.sequence for r in records] == [b"ACGTAC", b"ggnn"]


def test_iter_fastq_records_ignores_quality_lines():
    records = list(iter_fastq_records(io.StringIO(FASTQ)))

    assert [(r.name, r.sequence) for r in records] == [(b"r1 desc", b"ACGT"), (b"r2", b"GG")]


def test_iter_fastq_records_wraps_parser_errors_with_source():
    with pytest.raises(RecordParseError) as exc:
        list(iter_fastq_records(io.StringIO("@r1\nACGT\n+\nII\n"), source="bad.fq"))

    assert str(exc.value).startswith("bad.fq: ")


def test_only_ascii_whitespace_is_trimmed_from_sequences():
    handle = io.StringIO(">a\n\xa0AC\x1cGT\n>b\n\x1cACGT\n>c\n\x85GG \t\n")

    records = list(iter_fasta_records(handle))

    assert [r.sequence for r in records] == [b"\xa0AC\x1cGT", b"\x1cACGT", b"\x85GG"]
