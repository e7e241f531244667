"""Binary Canonical Serialization (BCS) encoder and decoder."""

from __future__ import annotations

from typing import Any, Iterable, Protocol, TypeVar

_MAX_U32 = (1 << 32) - 1

T = TypeVar("T")


class BcsError(ValueError):
    """Raised when a value cannot be encoded or bytes cannot be decoded."""


class _Serializable(Protocol):
    def serialize(self, ser: "Serializer") -> None: ...


class Serializer:
    """Accumulates BCS-encoded bytes."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def _uint(self, value: int, bits: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise BcsError(f"u{bits} value must be an int, got {type(value).__name__}")
        if value < 0 or value >= 1 << bits:
            raise BcsError(f"value {value} does not fit in u{bits}")
        self._buffer += value.to_bytes(bits // 8, "little")

    def u8(self, value: int) -> None:
        self._uint(value, 8)

    def u16(self, value: int) -> None:
        self._uint(value, 16)

    def u32(self, value: int) -> None:
        self._uint(value, 32)

    def u64(self, value: int) -> None:
        self._uint(value, 64)

    def u128(self, value: int) -> None:
        self._uint(value, 128)

    def u256(self, value: int) -> None:
        self._uint(value, 256)

    def bool(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise BcsError(f"bool value expected, got {type(value).__name__}")
        self._buffer.append(1 if value else 0)

    def uleb128(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_U32:
            raise BcsError(f"uleb128 value {value!r} out of u32 range")
        while True:
            byte = value & 0x7F
            value >>= 7
            if value:
                self._buffer.append(byte | 0x80)
            else:
                self._buffer.append(byte)
                return

    def write_bytes(self, data: bytes) -> None:
        """Write a length-prefixed byte string."""
        data = bytes(data)
        self.uleb128(len(data))
        self._buffer += data

    def write_string(self, value: str) -> None:
        self.write_bytes(value.encode("utf-8"))

    def fixed_bytes(self, data: bytes) -> None:
        """Write bytes without a length prefix."""
        self._buffer += bytes(data)

    def struct(self, value: _Serializable) -> None:
        value.serialize(self)

    def sequence(self, items: Iterable[_Serializable]) -> None:
        items = list(items)
        self.uleb128(len(items))
        for item in items:
            item.serialize(self)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)


class Deserializer:
    """Reads BCS-encoded values from a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _take(self, length: int) -> bytes:
        if length > self.remaining():
            raise BcsError(
                f"not enough bytes: wanted {length}, have {self.remaining()}"
            )
        chunk = self._data[self._pos : self._pos + length]
        self._pos += length
        return chunk

    def _uint(self, bits: int) -> int:
        return int.from_bytes(self._take(bits // 8), "little")

    def u8(self) -> int:
        return self._uint(8)

    def u16(self) -> int:
        return self._uint(16)

    def u32(self) -> int:
        return self._uint(32)

    def u64(self) -> int:
        return self._uint(64)

    def u128(self) -> int:
        return self._uint(128)

    def u256(self) -> int:
        return self._uint(256)

    def bool(self) -> bool:
        byte = self._take(1)[0]
        if byte > 1:
            raise BcsError(f"invalid bool byte {byte}")
        return byte == 1

    def uleb128(self) -> int:
        value = 0
        shift = 0
        while True:
            byte = self._take(1)[0]
            value |= (byte & 0x7F) << shift
            if value > _MAX_U32:
                raise BcsError("uleb128 value overflows u32")
            if not byte & 0x80:
                return value
            shift += 7

    def read_bytes(self) -> bytes:
        return self._take(self.uleb128())

    def read_string(self) -> str:
        raw = self.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BcsError(f"invalid utf-8 string: {exc}") from exc

    def read_fixed_bytes(self, length: int) -> bytes:
        return self._take(length)

    def struct(self, cls: Any) -> Any:
        return cls.deserialize(self)

    def sequence(self, cls: Any) -> list:
        return [cls.deserialize(self) for _ in range(self.uleb128())]

    def remaining(self) -> int:
        return len(self._data) - self._pos


def serialize(value: _Serializable) -> bytes:
    """Encode a single value to bytes."""
    ser = Serializer()
    value.serialize(ser)
    return ser.to_bytes()


def deserialize(cls: Any, data: bytes) -> Any:
    """Decode a value of ``cls`` from bytes, rejecting trailing data."""
    des = Deserializer(data)
    value = cls.deserialize(des)
    if des.remaining():
        raise BcsError(f"deserialize failed: remaining {des.remaining()} byte(s)")
    return value