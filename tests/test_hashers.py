# tests/test_hashers.py

from __future__ import annotations

import hashlib
import logging

import pytest

from seqhash.core.errors import DigestParseError
from seqhash.core.hashers import (
    HashAlgorithm,
    Hasher,
    XxHasher,
    calculate_final_hash,
    calculate_hash,
    get_hasher,
    parse_u64,
)


@pytest.mark.parametrize("algo", list(HashAlgorithm))
def test_hash_same_input_same_digest(algo):
    assert calculate_hash(algo, b"ATCG") == calculate_hash(algo, b"ATCG")


@pytest.mark.parametrize("algo", list(HashAlgorithm))
def test_hash_different_input_different_digest(algo):
    assert calculate_hash(algo, b"ATCG") != calculate_hash(algo, b"CGAT")


def test_hashlib_digests_are_hex():
    assert calculate_hash("md5", b"") == "d41d8cd98f00b204e9800998ecf8427e"
    assert calculate_hash("sha2", b"ATCG") == hashlib.sha256(b"ATCG").hexdigest()


def test_xxhash_digest_is_decimal_u64():
    h = XxHasher()
    d = h.hash(b"ATCG")
    assert d.isdigit()
    assert int(d) == h.hash_value(b"ATCG")
    assert 0 <= int(d) < 2**64


def test_hashlib_fold_streams_digest_strings_in_order():
    digests = ["abc", "def"]
    assert calculate_final_hash("md5", digests) == hashlib.md5(b"abcdef").hexdigest()
    assert calculate_final_hash("sha2", digests) == hashlib.sha256(b"abcdef").hexdigest()
    assert calculate_final_hash("md5", digests) != calculate_final_hash("md5", list(reversed(digests)))


def test_xxhash_fold_accepts_raw_values_and_strings_alike():
    h = XxHasher()
    assert h.fold([5, 7]) == h.fold(["5", "7"])
    assert h.fold(["5", "7"]) != h.fold(["7", "5"])
    assert h.fold([]).isdigit()


def test_xxhash_fold_key_is_fixed():
    assert XxHasher().fold(["1", "2"]) == XxHasher(key=(1, 2, 3, 4)).fold(["1", "2"])
    assert XxHasher().fold(["1", "2"]) != XxHasher(key=(4, 3, 2, 1)).fold(["1", "2"])


def test_xxhash_fold_skips_unparseable_digest_with_warning(caplog):
    h = XxHasher()
    with caplog.at_level(logging.WARNING):
        out = h.fold(["12", "not-a-number", "34"])
    assert out == h.fold(["12", "34"])
    assert "Failed to parse hash: not-a-number" in caplog.text


@pytest.mark.parametrize("bad", ["", "-1", "1.5", "18446744073709551616", "0x10"])
def test_parse_u64_rejects(bad):
    with pytest.raises(DigestParseError):
        parse_u64(bad)


def test_parse_u64_accepts_max():
    assert parse_u64("18446744073709551615") == 2**64 - 1


def test_algorithm_aliases():
    assert HashAlgorithm.parse("highway") is HashAlgorithm.XXHASH
    assert HashAlgorithm.parse("fast") is HashAlgorithm.XXHASH
    assert HashAlgorithm.parse("SHA256") is HashAlgorithm.SHA2
    assert get_hasher("MD5").algorithm is HashAlgorithm.MD5


def test_unknown_algorithm_raises():
    with pytest.raises(ValueError) as e:
        HashAlgorithm.parse("crc32")
    assert "unknown hash algorithm" in str(e.value).lower()


def test_hasher_without_fold_cannot_be_instantiated():
    class HashOnly(Hasher):
        algorithm = HashAlgorithm.MD5

        def hash(self, data: bytes) -> str:
            return data.hex()

    with pytest.raises(TypeError):
        HashOnly()


def test_xxhash_fold_of_hex_digests_warns_once_and_is_constant(caplog):
    h = XxHasher()
    x = [calculate_hash("md5", b"\x01\x02"), calculate_hash("md5", b"\x03")]
    y = [calculate_hash("md5", b"\x04\x04\x04")]

    with caplog.at_level(logging.WARNING, logger="seqhash.core.hashers"):
        out_x = h.fold(x)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "skipped 2" in warnings[0].getMessage()
    assert out_x == h.fold(y) == h.fold([])
