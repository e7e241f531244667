"""Identifiers of published Move modules."""

from __future__ import annotations

from dataclasses import dataclass

from .address import AccountAddress
from .bcs import Deserializer, Serializer


@dataclass(frozen=True)
class ModuleId:
    """A module identifier such as ``0x1::coin``."""

    address: AccountAddress
    name: str

    def __str__(self) -> str:
        return f"{self.address}::{self.name}"

    def serialize(self, ser: Serializer) -> None:
        self.address.serialize(ser)
        ser.write_string(self.name)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "ModuleId":
        address = AccountAddress.deserialize(des)
        return cls(address, des.read_string())