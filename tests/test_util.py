import json

import pytest

from aptosclient.util import (
    bytes_to_hex,
    parse_hex,
    pretty_json,
    sha3_256_hash,
    str_to_big_int,
    str_to_uint64,
)


def test_sha3_256_hash():
    expected = parse_hex("fd1780a6fc9ee0dab26ceb4b3941ab03e66ccd970d1db91612c66df4515b0a0a")
    assert sha3_256_hash([b"\x01", b"\x02", b"\x03"]) == expected


def test_sha3_256_hash_chunking_is_irrelevant():
    assert sha3_256_hash([b"\x01", b"\x02", b"\x03"]) == sha3_256_hash([b"\x01\x02\x03"])


@pytest.mark.parametrize(
    "text, expected",
    [("0x012345", b"\x01\x23\x45"), ("012345", b"\x01\x23\x45"), ("0x", b"")],
)
def test_parse_hex(text, expected):
    assert parse_hex(text) == expected


@pytest.mark.parametrize("text", ["0x1", "zz", "0xgg"])
def test_parse_hex_invalid(text):
    with pytest.raises(ValueError):
        parse_hex(text)


@pytest.mark.parametrize(
    "data, expected",
    [(b"\x01\x23\x45", "0x012345"), (b"\x01", "0x01"), (b"", "0x")],
)
def test_bytes_to_hex(data, expected):
    assert bytes_to_hex(data) == expected


def test_hex_round_trip():
    data = bytes(range(40))
    assert parse_hex(bytes_to_hex(data)) == data


@pytest.mark.parametrize("text, expected", [("0", 0), ("1", 1), ("100", 100)])
def test_str_to_uint64(text, expected):
    assert str_to_uint64(text) == expected


@pytest.mark.parametrize("text", ["-1", "", "abc", "18446744073709551616"])
def test_str_to_uint64_invalid(text):
    with pytest.raises(ValueError):
        str_to_uint64(text)


@pytest.mark.parametrize("text, expected", [("0", 0), ("1", 1), ("100", 100)])
def test_str_to_big_int(text, expected):
    assert str_to_big_int(text) == expected


@pytest.mark.parametrize("text", ["hello", "1a", "", "0.01"])
def test_str_to_big_int_error(text):
    with pytest.raises(ValueError):
        str_to_big_int(text)


def test_pretty_json_round_trip():
    value = {"a": [1, 2, {"b": "c"}]}
    out = pretty_json(value)
    assert json.loads(out) == value
    assert out.endswith("\n")


def test_pretty_json_unserialisable():
    assert pretty_json(object()) == ""