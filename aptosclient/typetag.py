"""Move type tags: the on-chain representation of Move types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Union

from .address import ACCOUNT_ONE, AccountAddress
from .bcs import BcsError, Deserializer, Serializer


class TypeTagVariant(IntEnum):
    """Wire discriminant of each kind of type tag."""

    BOOL = 0
    U8 = 1
    U64 = 2
    U128 = 3
    ADDRESS = 4
    SIGNER = 5
    VECTOR = 6
    STRUCT = 7
    U16 = 8
    U32 = 9
    U256 = 10


class _PrimitiveTag:
    """A type tag with no parameters; encodes to nothing beyond its variant."""

    variant: ClassVar[TypeTagVariant]
    _name: ClassVar[str]

    def __str__(self) -> str:
        return self._name

    def serialize(self, ser: Serializer) -> None:
        """Primitive tags carry no payload."""

    @classmethod
    def deserialize(cls, des: Deserializer) -> "_PrimitiveTag":
        return cls()


@dataclass(frozen=True)
class BoolTag(_PrimitiveTag):
    """The Move ``bool`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.BOOL
    _name: ClassVar[str] = "bool"


@dataclass(frozen=True)
class U8Tag(_PrimitiveTag):
    """The Move ``u8`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.U8
    _name: ClassVar[str] = "u8"


@dataclass(frozen=True)
class U16Tag(_PrimitiveTag):
    """The Move ``u16`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.U16
    _name: ClassVar[str] = "u16"


@dataclass(frozen=True)
class U32Tag(_PrimitiveTag):
    """The Move ``u32`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.U32
    _name: ClassVar[str] = "u32"


@dataclass(frozen=True)
class U64Tag(_PrimitiveTag):
    """The Move ``u64`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.U64
    _name: ClassVar[str] = "u64"


@dataclass(frozen=True)
class U128Tag(_PrimitiveTag):
    """The Move ``u128`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.U128
    _name: ClassVar[str] = "u128"


@dataclass(frozen=True)
class U256Tag(_PrimitiveTag):
    """The Move ``u256`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.U256
    _name: ClassVar[str] = "u256"


@dataclass(frozen=True)
class AddressTag(_PrimitiveTag):
    """The Move ``address`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.ADDRESS
    _name: ClassVar[str] = "address"


@dataclass(frozen=True)
class SignerTag(_PrimitiveTag):
    """The Move ``signer`` type."""

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.SIGNER
    _name: ClassVar[str] = "signer"


@dataclass
class VectorTag:
    """The Move ``vector<T>`` type."""

    type_param: "TypeTag"

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.VECTOR

    def __str__(self) -> str:
        return f"vector<{self.type_param}>"

    def serialize(self, ser: Serializer) -> None:
        self.type_param.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "VectorTag":
        return cls(TypeTag.deserialize(des))


@dataclass
class StructTag:
    """An on-chain struct ``address::module::name<T1,T2,...>``."""

    address: AccountAddress
    module: str
    name: str
    type_params: list["TypeTag"] = field(default_factory=list)

    variant: ClassVar[TypeTagVariant] = TypeTagVariant.STRUCT

    def __str__(self) -> str:
        text = f"{self.address}::{self.module}::{self.name}"
        if self.type_params:
            text += "<" + ",".join(str(tp) for tp in self.type_params) + ">"
        return text

    def serialize(self, ser: Serializer) -> None:
        self.address.serialize(ser)
        ser.write_string(self.module)
        ser.write_string(self.name)
        ser.sequence(self.type_params)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "StructTag":
        address = AccountAddress.deserialize(des)
        module = des.read_string()
        name = des.read_string()
        type_params = des.sequence(TypeTag)
        return cls(address, module, name, type_params)


TypeTagImpl = Union[
    BoolTag,
    U8Tag,
    U16Tag,
    U32Tag,
    U64Tag,
    U128Tag,
    U256Tag,
    AddressTag,
    SignerTag,
    VectorTag,
    StructTag,
]

_TAG_CLASSES: dict[int, type] = {
    tag_cls.variant: tag_cls
    for tag_cls in (
        BoolTag,
        U8Tag,
        U16Tag,
        U32Tag,
        U64Tag,
        U128Tag,
        U256Tag,
        AddressTag,
        SignerTag,
        VectorTag,
        StructTag,
    )
}


@dataclass
class TypeTag:
    """A type tag of any kind, encoded with its variant in front."""

    value: TypeTagImpl

    @property
    def variant(self) -> TypeTagVariant:
        return self.value.variant

    def __str__(self) -> str:
        return str(self.value)

    def serialize(self, ser: Serializer) -> None:
        ser.uleb128(int(self.value.variant))
        self.value.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "TypeTag":
        raw = des.uleb128()
        tag_cls = _TAG_CLASSES.get(raw)
        if tag_cls is None:
            raise BcsError(f"unknown TypeTag enum {raw}")
        return cls(des.struct(tag_cls))


def new_vector_tag(inner: TypeTagImpl) -> VectorTag:
    """``vector<inner>``."""
    return VectorTag(TypeTag(inner))


def new_string_tag() -> StructTag:
    """``0x1::string::String``."""
    return StructTag(ACCOUNT_ONE, "string", "String", [])


def new_option_tag(inner: TypeTagImpl) -> StructTag:
    """``0x1::option::Option<inner>``."""
    return StructTag(ACCOUNT_ONE, "option", "Option", [TypeTag(inner)])


def new_object_tag(inner: TypeTagImpl) -> StructTag:
    """``0x1::object::Object<inner>``."""
    return StructTag(ACCOUNT_ONE, "object", "Object", [TypeTag(inner)])


APTOS_COIN_TYPE_TAG = TypeTag(StructTag(ACCOUNT_ONE, "aptos_coin", "AptosCoin"))