"""Move scripts submitted as compiled code, with typed arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable

from .address import AccountAddress
from .bcs import BcsError, Deserializer, Serializer
from .typetag import TypeTag


class ScriptArgumentVariant(IntEnum):
    """The type of a script argument; only ``vector<u8>`` is supported as a vector."""

    U8 = 0
    U64 = 1
    U128 = 2
    ADDRESS = 3
    U8_VECTOR = 4
    BOOL = 5
    U16 = 6
    U32 = 7
    U256 = 8


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_Entry = tuple[str, Callable[[Any], bool], str]

_CHECKS: dict[ScriptArgumentVariant, _Entry] = {
    ScriptArgumentVariant.U8: ("ScriptArgumentU8", _is_int, "int"),
    ScriptArgumentVariant.U16: ("ScriptArgumentU16", _is_int, "int"),
    ScriptArgumentVariant.U32: ("ScriptArgumentU32", _is_int, "int"),
    ScriptArgumentVariant.U64: ("ScriptArgumentU64", _is_int, "int"),
    ScriptArgumentVariant.U128: ("ScriptArgumentU128", _is_int, "int"),
    ScriptArgumentVariant.U256: ("ScriptArgumentU256", _is_int, "int"),
    ScriptArgumentVariant.ADDRESS: (
        "ScriptArgumentAddress",
        lambda v: isinstance(v, AccountAddress),
        "AccountAddress",
    ),
    ScriptArgumentVariant.U8_VECTOR: (
        "ScriptArgumentU8Vector",
        lambda v: isinstance(v, (bytes, bytearray)),
        "bytes",
    ),
    ScriptArgumentVariant.BOOL: (
        "ScriptArgumentBool",
        lambda v: isinstance(v, bool),
        "bool",
    ),
}


@dataclass
class ScriptArgument:
    """A script argument that carries its own type."""

    variant: ScriptArgumentVariant
    value: Any

    def __post_init__(self) -> None:
        self.variant = ScriptArgumentVariant(self.variant)

    def serialize(self, ser: Serializer) -> None:
        label, check, expected = _CHECKS[self.variant]
        if not check(self.value):
            raise BcsError(
                f"invalid input type ({type(self.value).__name__}) for {label}, "
                f"must be {expected}"
            )
        ser.uleb128(int(self.variant))
        value = self.value
        match self.variant:
            case ScriptArgumentVariant.U8:
                ser.u8(value)
            case ScriptArgumentVariant.U16:
                ser.u16(value)
            case ScriptArgumentVariant.U32:
                ser.u32(value)
            case ScriptArgumentVariant.U64:
                ser.u64(value)
            case ScriptArgumentVariant.U128:
                ser.u128(value)
            case ScriptArgumentVariant.U256:
                ser.u256(value)
            case ScriptArgumentVariant.ADDRESS:
                value.serialize(ser)
            case ScriptArgumentVariant.U8_VECTOR:
                ser.write_bytes(value)
            case ScriptArgumentVariant.BOOL:
                ser.bool(value)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "ScriptArgument":
        raw = des.uleb128()
        try:
            variant = ScriptArgumentVariant(raw)
        except ValueError as exc:
            raise BcsError(f"unknown ScriptArgument variant {raw}") from exc
        match variant:
            case ScriptArgumentVariant.U8:
                value: Any = des.u8()
            case ScriptArgumentVariant.U16:
                value = des.u16()
            case ScriptArgumentVariant.U32:
                value = des.u32()
            case ScriptArgumentVariant.U64:
                value = des.u64()
            case ScriptArgumentVariant.U128:
                value = des.u128()
            case ScriptArgumentVariant.U256:
                value = des.u256()
            case ScriptArgumentVariant.ADDRESS:
                value = AccountAddress.deserialize(des)
            case ScriptArgumentVariant.U8_VECTOR:
                value = des.read_bytes()
            case ScriptArgumentVariant.BOOL:
                value = des.bool()
        return cls(variant, value)


@dataclass
class Script:
    """Compiled Move script code together with its type and value arguments."""

    code: bytes
    arg_types: list[TypeTag] = field(default_factory=list)
    args: list[ScriptArgument] = field(default_factory=list)

    def serialize(self, ser: Serializer) -> None:
        ser.write_bytes(self.code)
        ser.sequence(self.arg_types)
        ser.sequence(self.args)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "Script":
        code = des.read_bytes()
        arg_types = des.sequence(TypeTag)
        args = des.sequence(ScriptArgument)
        return cls(code, arg_types, args)