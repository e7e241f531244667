"""Transaction payloads: the instructions a transaction carries out on chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional, Union

from .address import AccountAddress
from .bcs import BcsError, Deserializer, Serializer
from .moduleid import ModuleId
from .script import Script
from .typetag import TypeTag


class TransactionPayloadVariant(IntEnum):
    """Wire discriminant of each kind of transaction payload."""

    SCRIPT = 0
    MODULE_BUNDLE = 1  # deprecated
    ENTRY_FUNCTION = 2
    MULTISIG = 3


@dataclass(frozen=True)
class ModuleBundle:
    """Deprecated payload kind, kept only for its position in the enum."""

    variant: ClassVar[TransactionPayloadVariant] = TransactionPayloadVariant.MODULE_BUNDLE

    def serialize(self, ser: Serializer) -> None:
        raise BcsError("ModuleBundle unimplemented")

    @classmethod
    def deserialize(cls, des: Deserializer) -> "ModuleBundle":
        raise BcsError("ModuleBundle unimplemented")


@dataclass
class EntryFunction:
    """A call to a published entry function; arguments are BCS-encoded bytes."""

    module: ModuleId
    function: str
    arg_types: list[TypeTag] = field(default_factory=list)
    args: list[bytes] = field(default_factory=list)

    variant: ClassVar[TransactionPayloadVariant] = TransactionPayloadVariant.ENTRY_FUNCTION

    def serialize(self, ser: Serializer) -> None:
        self.module.serialize(ser)
        ser.write_string(self.function)
        ser.sequence(self.arg_types)
        ser.uleb128(len(self.args))
        for arg in self.args:
            ser.write_bytes(arg)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "EntryFunction":
        module = ModuleId.deserialize(des)
        function = des.read_string()
        arg_types = des.sequence(TypeTag)
        args = [des.read_bytes() for _ in range(des.uleb128())]
        return cls(module, function, arg_types, args)


class MultisigTransactionPayloadVariant(IntEnum):
    """Kinds of transaction that an on-chain multisig can execute."""

    ENTRY_FUNCTION = 0


@dataclass
class MultisigTransactionPayload:
    """The transaction a multisig account votes on and executes."""

    payload: EntryFunction
    variant: MultisigTransactionPayloadVariant = MultisigTransactionPayloadVariant.ENTRY_FUNCTION

    def serialize(self, ser: Serializer) -> None:
        ser.uleb128(int(self.variant))
        self.payload.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "MultisigTransactionPayload":
        raw = des.uleb128()
        if raw != MultisigTransactionPayloadVariant.ENTRY_FUNCTION:
            raise BcsError(f"bad variant {raw} for MultisigTransactionPayload")
        return cls(EntryFunction.deserialize(des), MultisigTransactionPayloadVariant(raw))


@dataclass
class Multisig:
    """A transaction executed through an on-chain multisig account."""

    multisig_address: AccountAddress
    payload: Optional[MultisigTransactionPayload] = None

    variant: ClassVar[TransactionPayloadVariant] = TransactionPayloadVariant.MULTISIG

    def serialize(self, ser: Serializer) -> None:
        self.multisig_address.serialize(ser)
        if self.payload is None:
            ser.bool(False)
        else:
            ser.bool(True)
            self.payload.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "Multisig":
        address = AccountAddress.deserialize(des)
        payload = MultisigTransactionPayload.deserialize(des) if des.bool() else None
        return cls(address, payload)


TransactionPayloadImpl = Union[Script, ModuleBundle, EntryFunction, Multisig]

_VARIANT_OF: dict[type, TransactionPayloadVariant] = {
    Script: TransactionPayloadVariant.SCRIPT,
    ModuleBundle: TransactionPayloadVariant.MODULE_BUNDLE,
    EntryFunction: TransactionPayloadVariant.ENTRY_FUNCTION,
    Multisig: TransactionPayloadVariant.MULTISIG,
}

_CLASS_OF: dict[int, type] = {
    TransactionPayloadVariant.SCRIPT: Script,
    TransactionPayloadVariant.ENTRY_FUNCTION: EntryFunction,
    TransactionPayloadVariant.MULTISIG: Multisig,
}


@dataclass
class TransactionPayload:
    """A payload of any kind, encoded with its variant in front."""

    payload: Optional[TransactionPayloadImpl] = None

    @property
    def variant(self) -> TransactionPayloadVariant:
        if self.payload is None:
            raise BcsError("nil transaction payload")
        try:
            return _VARIANT_OF[type(self.payload)]
        except KeyError:
            raise BcsError(
                f"unsupported transaction payload type {type(self.payload).__name__}"
            ) from None

    def serialize(self, ser: Serializer) -> None:
        ser.uleb128(int(self.variant))
        self.payload.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "TransactionPayload":
        raw = des.uleb128()
        if raw == TransactionPayloadVariant.MODULE_BUNDLE:
            raise BcsError("module bundle is not supported as a transaction payload")
        payload_cls = _CLASS_OF.get(raw)
        if payload_cls is None:
            raise BcsError(f"bad txn payload kind, {raw}")
        return cls(payload_cls.deserialize(des))