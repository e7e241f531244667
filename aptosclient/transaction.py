"""Raw and signed transactions, and the messages that signers sign."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache
from typing import Any, Optional, Protocol, Sequence, Union

from .address import ACCOUNT_ZERO, AccountAddress
from .authenticator import (
    AccountAuthenticator,
    FeePayerTransactionAuthenticator,
    MultiAgentTransactionAuthenticator,
    TransactionAuthenticator,
    TransactionAuthenticatorVariant,
)
from .bcs import BcsError, Deserializer, Serializer, serialize
from .payload import TransactionPayload
from .util import bytes_to_hex, sha3_256_hash

_RAW_TRANSACTION_SALT = b"APTOS::RawTransaction"
_RAW_TRANSACTION_WITH_DATA_SALT = b"APTOS::RawTransactionWithData"
_TRANSACTION_SALT = b"APTOS::Transaction"

# Discriminant of a user transaction inside the on-chain Transaction enum.
USER_TRANSACTION_VARIANT = 0


class _MessageSigner(Protocol):
    def sign(self, message: bytes) -> AccountAuthenticator: ...


@lru_cache(maxsize=None)
def raw_transaction_prehash() -> bytes:
    """SHA3-256 domain separator prepended to a RawTransaction's signing message."""
    return sha3_256_hash([_RAW_TRANSACTION_SALT])


@lru_cache(maxsize=None)
def raw_transaction_with_data_prehash() -> bytes:
    """SHA3-256 domain separator prepended to a RawTransactionWithData's signing message."""
    return sha3_256_hash([_RAW_TRANSACTION_WITH_DATA_SALT])


@lru_cache(maxsize=None)
def _transaction_prefix() -> bytes:
    return sha3_256_hash([_TRANSACTION_SALT])


@dataclass
class RawTransaction:
    """The parts of a transaction before it is signed."""

    sender: AccountAddress
    sequence_number: int
    payload: TransactionPayload
    max_gas_amount: int
    gas_unit_price: int
    expiration_timestamp_seconds: int
    chain_id: int

    def signing_message(self) -> bytes:
        """The bytes a signer signs: the domain prehash followed by the BCS encoding."""
        return raw_transaction_prehash() + serialize(self)

    def sign(self, signer: _MessageSigner) -> AccountAuthenticator:
        """Sign the signing message and return the signer's authenticator."""
        return signer.sign(self.signing_message())

    def signed_transaction(self, sender: _MessageSigner) -> "SignedTransaction":
        """Sign as the only signer and wrap the result as a signed transaction."""
        return self.signed_transaction_with_authenticator(self.sign(sender))

    def signed_transaction_with_authenticator(
        self, auth: AccountAuthenticator
    ) -> "SignedTransaction":
        """Build a sender-only signed transaction from an existing authenticator."""
        return SignedTransaction(self, TransactionAuthenticator.from_account_authenticator(auth))

    def serialize(self, ser: Serializer) -> None:
        self.sender.serialize(ser)
        ser.u64(self.sequence_number)
        self.payload.serialize(ser)
        ser.u64(self.max_gas_amount)
        ser.u64(self.gas_unit_price)
        ser.u64(self.expiration_timestamp_seconds)
        ser.u8(self.chain_id)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "RawTransaction":
        sender = AccountAddress.deserialize(des)
        sequence_number = des.u64()
        payload = TransactionPayload.deserialize(des)
        max_gas_amount = des.u64()
        gas_unit_price = des.u64()
        expiration = des.u64()
        chain_id = des.u8()
        return cls(
            sender,
            sequence_number,
            payload,
            max_gas_amount,
            gas_unit_price,
            expiration,
            chain_id,
        )


class RawTransactionWithDataVariant(IntEnum):
    """Kinds of transaction that carry extra signer data."""

    MULTI_AGENT = 0
    MULTI_AGENT_WITH_FEE_PAYER = 1


@dataclass
class MultiAgentRawTransactionWithData:
    """A raw transaction with the addresses of its secondary signers."""

    raw_txn: RawTransaction
    secondary_signers: list[AccountAddress] = field(default_factory=list)

    def serialize(self, ser: Serializer) -> None:
        self.raw_txn.serialize(ser)
        ser.sequence(self.secondary_signers)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "MultiAgentRawTransactionWithData":
        raw_txn = RawTransaction.deserialize(des)
        return cls(raw_txn, des.sequence(AccountAddress))


@dataclass
class MultiAgentWithFeePayerRawTransactionWithData:
    """A raw transaction with secondary signers and a fee-paying account."""

    raw_txn: RawTransaction
    secondary_signers: list[AccountAddress] = field(default_factory=list)
    fee_payer: AccountAddress = ACCOUNT_ZERO

    def serialize(self, ser: Serializer) -> None:
        self.raw_txn.serialize(ser)
        ser.sequence(self.secondary_signers)
        self.fee_payer.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "MultiAgentWithFeePayerRawTransactionWithData":
        raw_txn = RawTransaction.deserialize(des)
        secondary = des.sequence(AccountAddress)
        fee_payer = AccountAddress.deserialize(des)
        return cls(raw_txn, secondary, fee_payer)


_WITH_DATA_CLASSES: dict[int, Any] = {
    RawTransactionWithDataVariant.MULTI_AGENT: MultiAgentRawTransactionWithData,
    RawTransactionWithDataVariant.MULTI_AGENT_WITH_FEE_PAYER: (
        MultiAgentWithFeePayerRawTransactionWithData
    ),
}


@dataclass
class RawTransactionWithData:
    """A multi-agent or fee-payer transaction before signing."""

    variant: RawTransactionWithDataVariant
    inner: Union[MultiAgentRawTransactionWithData, MultiAgentWithFeePayerRawTransactionWithData]

    def __post_init__(self) -> None:
        self.variant = RawTransactionWithDataVariant(self.variant)

    def set_fee_payer(self, fee_payer: AccountAddress) -> bool:
        """Set the fee payer; returns False if this is not a fee-payer transaction."""
        if self.variant != RawTransactionWithDataVariant.MULTI_AGENT_WITH_FEE_PAYER:
            return False
        self.inner.fee_payer = fee_payer
        return True

    def to_multi_agent_signed_transaction(
        self,
        sender: AccountAuthenticator,
        additional_signers: Sequence[AccountAuthenticator],
    ) -> Optional["SignedTransaction"]:
        """Assemble a multi-agent signed transaction, or None for another variant."""
        if self.variant != RawTransactionWithDataVariant.MULTI_AGENT:
            return None
        inner = self.inner
        auth = MultiAgentTransactionAuthenticator(
            sender=sender,
            secondary_signer_addresses=inner.secondary_signers,
            secondary_signers=list(additional_signers),
        )
        return SignedTransaction(
            inner.raw_txn,
            TransactionAuthenticator(TransactionAuthenticatorVariant.MULTI_AGENT, auth),
        )

    def to_fee_payer_signed_transaction(
        self,
        sender: AccountAuthenticator,
        fee_payer_authenticator: AccountAuthenticator,
        additional_signers: Sequence[AccountAuthenticator],
    ) -> Optional["SignedTransaction"]:
        """Assemble a fee-payer signed transaction, or None for another variant."""
        if self.variant != RawTransactionWithDataVariant.MULTI_AGENT_WITH_FEE_PAYER:
            return None
        inner = self.inner
        auth = FeePayerTransactionAuthenticator(
            sender=sender,
            secondary_signer_addresses=inner.secondary_signers,
            secondary_signers=list(additional_signers),
            fee_payer=inner.fee_payer,
            fee_payer_authenticator=fee_payer_authenticator,
        )
        return SignedTransaction(
            inner.raw_txn,
            TransactionAuthenticator(TransactionAuthenticatorVariant.FEE_PAYER, auth),
        )

    def signing_message(self) -> bytes:
        """The domain prehash followed by the BCS encoding of this transaction."""
        return raw_transaction_with_data_prehash() + serialize(self)

    def sign(self, signer: _MessageSigner) -> AccountAuthenticator:
        return signer.sign(self.signing_message())

    def serialize(self, ser: Serializer) -> None:
        ser.uleb128(int(self.variant))
        self.inner.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "RawTransactionWithData":
        raw = des.uleb128()
        inner_cls = _WITH_DATA_CLASSES.get(raw)
        if inner_cls is None:
            raise BcsError(f"unknown RawTransactionWithData variant {raw}")
        return cls(RawTransactionWithDataVariant(raw), inner_cls.deserialize(des))


@dataclass
class SignedTransaction:
    """A raw transaction together with the authenticator that approves it."""

    transaction: Union[RawTransaction, RawTransactionWithData]
    authenticator: TransactionAuthenticator

    def verify(self) -> None:
        """Check the signatures; raise ValueError if they do not approve the transaction."""
        if not self.authenticator.verify(self.transaction.signing_message()):
            raise ValueError("signature is invalid")

    def hash(self) -> str:
        """The hex transaction hash, treating this as a user transaction."""
        txn_bytes = serialize(self)
        digest = sha3_256_hash(
            [_transaction_prefix(), bytes([USER_TRANSACTION_VARIANT]), txn_bytes]
        )
        return bytes_to_hex(digest)

    def serialize(self, ser: Serializer) -> None:
        self.transaction.serialize(ser)
        self.authenticator.serialize(ser)

    @classmethod
    def deserialize(cls, des: Deserializer) -> "SignedTransaction":
        transaction = RawTransaction.deserialize(des)
        return cls(transaction, TransactionAuthenticator.deserialize(des))