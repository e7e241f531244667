"""On-chain account addresses."""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from typing import Any, ClassVar

from .bcs import Deserializer, Serializer
from .util import bytes_to_hex, sha3_256_hash

ADDRESS_LENGTH = 32

DERIVE_OBJECT_SCHEME = 0xFC
NAMED_OBJECT_SCHEME = 0xFE
RESOURCE_ACCOUNT_SCHEME = 0xFF


class AddressTooShortError(ValueError):
    """The address string holds no hex digits."""

    def __init__(self) -> None:
        super().__init__("AccountAddress too short")


class AddressTooLongError(ValueError):
    """The address string holds more than 64 hex digits."""

    def __init__(self) -> None:
        super().__init__("AccountAddress too long")


@dataclass(frozen=True)
class AccountAddress:
    """A 32-byte on-chain address."""

    data: bytes = bytes(ADDRESS_LENGTH)

    LENGTH: ClassVar[int] = ADDRESS_LENGTH

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != ADDRESS_LENGTH:
            raise ValueError(f"AccountAddress must be {ADDRESS_LENGTH} bytes, got {len(data)}")
        object.__setattr__(self, "data", data)

    @classmethod
    def from_string_relaxed(cls, text: str) -> "AccountAddress":
        """Parse a hex address, allowing a missing ``0x`` and short forms."""
        if text.startswith("0x"):
            text = text[2:]
        if len(text) < 1:
            raise AddressTooShortError()
        if len(text) > 2 * ADDRESS_LENGTH:
            raise AddressTooLongError()
        if len(text) % 2:
            text = "0" + text
        try:
            raw = binascii.unhexlify(text)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid address hex {text!r}: {exc}") from exc
        return cls(raw.rjust(ADDRESS_LENGTH, b"\x00"))

    def __bytes__(self) -> bytes:
        return self.data

    def is_special(self) -> bool:
        """True for addresses 0x0 through 0xf."""
        return not any(self.data[:31]) and self.data[31] < 0x10

    def __str__(self) -> str:
        if self.is_special():
            return f"0x{self.data[31]:x}"
        return bytes_to_hex(self.data)

    def string_long(self) -> str:
        """The full 64-digit form, as used by indexer queries."""
        return bytes_to_hex(self.data)

    def auth_key(self) -> bytes:
        """The authentication key with the same bytes as this address."""
        return self.data

    def derived_address(self, seed: bytes, type_byte: int) -> "AccountAddress":
        """Derive an address from this address, a seed and a scheme byte."""
        return AccountAddress(sha3_256_hash([self.data, bytes(seed), bytes([type_byte])]))

    def named_object_address(self, seed: bytes) -> "AccountAddress":
        return self.derived_address(seed, NAMED_OBJECT_SCHEME)

    def object_address_from_object(self, object_address: "AccountAddress") -> "AccountAddress":
        return self.derived_address(object_address.data, DERIVE_OBJECT_SCHEME)

    def resource_account(self, seed: bytes) -> "AccountAddress":
        return self.derived_address(seed, RESOURCE_ACCOUNT_SCHEME)

    def serialize(self, ser: Serializer) -> None:
        ser.fixed_bytes(self.data)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "AccountAddress":
        return cls(des.read_fixed_bytes(ADDRESS_LENGTH))

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: Any) -> "AccountAddress":
        if not isinstance(value, str):
            raise ValueError(
                f"failed to convert input to AccountAddress: expected string, got {type(value).__name__}"
            )
        try:
            return cls.from_string_relaxed(value)
        except ValueError as exc:
            raise ValueError(f"failed to convert input to AccountAddress: {exc}") from exc


def _special(last: int) -> AccountAddress:
    return AccountAddress(bytes(ADDRESS_LENGTH - 1) + bytes([last]))


ACCOUNT_ZERO = _special(0)
ACCOUNT_ONE = _special(1)
ACCOUNT_TWO = _special(2)
ACCOUNT_THREE = _special(3)
ACCOUNT_FOUR = _special(4)