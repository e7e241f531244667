"""Hex, hashing and number-parsing helpers."""

from __future__ import annotations

import binascii
import hashlib
import json
import re
from typing import Any, Iterable

_UNSIGNED_DECIMAL = re.compile(r"[0-9]+")
_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")
_MAX_U64 = (1 << 64) - 1


def parse_hex(hex_str: str) -> bytes:
    """Decode a hex string, with or without a leading ``0x``.

    The bare string ``"0x"`` decodes to empty bytes.
    """
    if hex_str == "0x":
        return b""
    if hex_str.startswith("0x"):
        hex_str = hex_str[2:]
    try:
        return binascii.unhexlify(hex_str)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string {hex_str!r}: {exc}") from exc


def sha3_256_hash(chunks: Iterable[bytes]) -> bytes:
    """SHA3-256 over the concatenation of the given byte chunks."""
    hasher = hashlib.sha3_256()
    for chunk in chunks:
        hasher.update(chunk)
    return hasher.digest()


def bytes_to_hex(data: bytes) -> str:
    """Encode bytes as a ``0x``-prefixed lower-case hex string."""
    return "0x" + bytes(data).hex()


def str_to_uint64(s: str) -> int:
    """Parse a base-10 string into an unsigned 64-bit integer."""
    if not _UNSIGNED_DECIMAL.fullmatch(s):
        raise ValueError(f"invalid unsigned integer {s!r}")
    value = int(s)
    if value > _MAX_U64:
        raise ValueError(f"value {s!r} out of range for u64")
    return value


def str_to_big_int(val: str) -> int:
    """Parse a base-10 string into an arbitrary-size integer (u128, u256)."""
    if not _SIGNED_DECIMAL.fullmatch(val):
        raise ValueError(f"num {val} is not an integer")
    return int(val)


def pretty_json(x: Any) -> str:
    """Render a value as indented JSON with a trailing newline, or "" on failure."""
    try:
        return json.dumps(x, indent=2) + "\n"
    except (TypeError, ValueError):
        return ""