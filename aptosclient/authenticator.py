"""Authenticators that authorize a transaction on behalf of its signers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Protocol

from .address import AccountAddress
from .bcs import BcsError, Deserializer, Serializer


class _AuthImpl(Protocol):
    def verify(self, message: bytes) -> bool: ...

    def serialize(self, ser: Serializer) -> None: ...


class AccountAuthenticatorVariant(IntEnum):
    """Wire discriminant of an account authenticator."""

    ED25519 = 0
    MULTI_ED25519 = 1
    SINGLE_SENDER = 2
    MULTI_KEY = 3


_ACCOUNT_AUTH_CLASSES: dict[AccountAuthenticatorVariant, Any] = {}


def register_account_authenticator(variant: int, cls: Any) -> None:
    """Register the class that decodes the signature data of ``variant``.

    The class must provide ``deserialize(des)``, and its instances
    ``serialize(ser)`` and ``verify(message)``.
    """
    _ACCOUNT_AUTH_CLASSES[AccountAuthenticatorVariant(variant)] = cls


def _account_auth_class(variant: AccountAuthenticatorVariant) -> Any:
    cls = _ACCOUNT_AUTH_CLASSES.get(variant)
    if cls is None:
        raise BcsError(f"no authenticator registered for variant {variant.name}")
    return cls


@dataclass
class AccountAuthenticator:
    """A single account's signature and key, tagged with its scheme."""

    variant: AccountAuthenticatorVariant
    auth: Any

    def __post_init__(self) -> None:
        self.variant = AccountAuthenticatorVariant(self.variant)

    def verify(self, message: bytes) -> bool:
        return bool(self.auth.verify(message))

    def serialize(self, ser: Serializer) -> None:
        ser.uleb128(int(self.variant))
        self.auth.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "AccountAuthenticator":
        raw = des.uleb128()
        try:
            variant = AccountAuthenticatorVariant(raw)
        except ValueError:
            raise BcsError(f"unknown AccountAuthenticator kind: {raw}") from None
        return cls(variant, _account_auth_class(variant).deserialize(des))

    @classmethod
    def _bare(cls, variant: AccountAuthenticatorVariant, des: Deserializer) -> "AccountAuthenticator":
        return cls(variant, _account_auth_class(variant).deserialize(des))


class TransactionAuthenticatorVariant(IntEnum):
    """Wire discriminant of a transaction authenticator."""

    ED25519 = 0
    MULTI_ED25519 = 1
    MULTI_AGENT = 2
    FEE_PAYER = 3
    SINGLE_SENDER = 4


@dataclass
class Ed25519TransactionAuthenticator:
    """Authenticator for legacy Ed25519 accounts."""

    sender: AccountAuthenticator

    def verify(self, message: bytes) -> bool:
        return self.sender.verify(message)

    def serialize(self, ser: Serializer) -> None:
        self.sender.auth.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "Ed25519TransactionAuthenticator":
        return cls(AccountAuthenticator._bare(AccountAuthenticatorVariant.ED25519, des))


@dataclass
class MultiEd25519TransactionAuthenticator:
    """Authenticator for legacy multi-Ed25519 accounts."""

    sender: AccountAuthenticator

    def verify(self, message: bytes) -> bool:
        return self.sender.verify(message)

    def serialize(self, ser: Serializer) -> None:
        self.sender.auth.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "MultiEd25519TransactionAuthenticator":
        return cls(AccountAuthenticator._bare(AccountAuthenticatorVariant.MULTI_ED25519, des))


def _all_verify(authenticators: list[AccountAuthenticator], message: bytes) -> bool:
    return all(auth.verify(message) for auth in authenticators)


@dataclass
class MultiAgentTransactionAuthenticator:
    """A sender plus secondary signers, each of whom must approve."""

    sender: AccountAuthenticator
    secondary_signer_addresses: list[AccountAddress] = field(default_factory=list)
    secondary_signers: list[AccountAuthenticator] = field(default_factory=list)

    def verify(self, message: bytes) -> bool:
        return self.sender.verify(message) and _all_verify(self.secondary_signers, message)

    def serialize(self, ser: Serializer) -> None:
        self.sender.serialize(ser)
        ser.sequence(self.secondary_signer_addresses)
        ser.sequence(self.secondary_signers)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "MultiAgentTransactionAuthenticator":
        sender = AccountAuthenticator.deserialize(des)
        addresses = des.sequence(AccountAddress)
        signers = des.sequence(AccountAuthenticator)
        return cls(sender, addresses, signers)


@dataclass
class FeePayerTransactionAuthenticator:
    """A multi-agent authenticator with a separate account paying the fees."""

    sender: AccountAuthenticator
    secondary_signer_addresses: list[AccountAddress]
    secondary_signers: list[AccountAuthenticator]
    fee_payer: AccountAddress
    fee_payer_authenticator: AccountAuthenticator

    def verify(self, message: bytes) -> bool:
        return (
            self.sender.verify(message)
            and _all_verify(self.secondary_signers, message)
            and self.fee_payer_authenticator.verify(message)
        )

    def serialize(self, ser: Serializer) -> None:
        self.sender.serialize(ser)
        ser.sequence(self.secondary_signer_addresses)
        ser.sequence(self.secondary_signers)
        self.fee_payer.serialize(ser)
        self.fee_payer_authenticator.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "FeePayerTransactionAuthenticator":
        sender = AccountAuthenticator.deserialize(des)
        addresses = des.sequence(AccountAddress)
        signers = des.sequence(AccountAuthenticator)
        fee_payer = AccountAddress.deserialize(des)
        fee_payer_auth = AccountAuthenticator.deserialize(des)
        return cls(sender, addresses, signers, fee_payer, fee_payer_auth)


@dataclass
class SingleSenderTransactionAuthenticator:
    """Authenticator for single-key and multi-key accounts."""

    sender: AccountAuthenticator

    def verify(self, message: bytes) -> bool:
        return self.sender.verify(message)

    def serialize(self, ser: Serializer) -> None:
        self.sender.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "SingleSenderTransactionAuthenticator":
        return cls(AccountAuthenticator.deserialize(des))


_TXN_AUTH_CLASSES: dict[int, Any] = {
    TransactionAuthenticatorVariant.ED25519: Ed25519TransactionAuthenticator,
    TransactionAuthenticatorVariant.MULTI_ED25519: MultiEd25519TransactionAuthenticator,
    TransactionAuthenticatorVariant.MULTI_AGENT: MultiAgentTransactionAuthenticator,
    TransactionAuthenticatorVariant.FEE_PAYER: FeePayerTransactionAuthenticator,
    TransactionAuthenticatorVariant.SINGLE_SENDER: SingleSenderTransactionAuthenticator,
}

_FROM_ACCOUNT: dict[AccountAuthenticatorVariant, tuple[TransactionAuthenticatorVariant, Any]] = {
    AccountAuthenticatorVariant.ED25519: (
        TransactionAuthenticatorVariant.ED25519,
        Ed25519TransactionAuthenticator,
    ),
    AccountAuthenticatorVariant.MULTI_ED25519: (
        TransactionAuthenticatorVariant.MULTI_ED25519,
        MultiEd25519TransactionAuthenticator,
    ),
    AccountAuthenticatorVariant.SINGLE_SENDER: (
        TransactionAuthenticatorVariant.SINGLE_SENDER,
        SingleSenderTransactionAuthenticator,
    ),
    AccountAuthenticatorVariant.MULTI_KEY: (
        TransactionAuthenticatorVariant.SINGLE_SENDER,
        SingleSenderTransactionAuthenticator,
    ),
}


@dataclass
class TransactionAuthenticator:
    """Authorizes a whole transaction, including fee-payer and multi-agent forms."""

    variant: TransactionAuthenticatorVariant
    auth: Any

    def __post_init__(self) -> None:
        self.variant = TransactionAuthenticatorVariant(self.variant)

    @classmethod
    def from_account_authenticator(cls, auth: AccountAuthenticator) -> "TransactionAuthenticator":
        """Wrap a single account's authenticator for a sender-only transaction."""
        entry: Optional[tuple[TransactionAuthenticatorVariant, Any]] = _FROM_ACCOUNT.get(auth.variant)
        if entry is None:
            raise ValueError(f"unknown authenticator type {int(auth.variant)}")
        variant, wrapper = entry
        return cls(variant, wrapper(auth))

    def verify(self, message: bytes) -> bool:
        return bool(self.auth.verify(message))

    def serialize(self, ser: Serializer) -> None:
        ser.uleb128(int(self.variant))
        self.auth.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "TransactionAuthenticator":
        raw = des.uleb128()
        auth_cls = _TXN_AUTH_CLASSES.get(raw)
        if auth_cls is None:
            raise BcsError(f"unknown TransactionAuthenticator kind: {raw}")
        return cls(TransactionAuthenticatorVariant(raw), auth_cls.deserialize(des))