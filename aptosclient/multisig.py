"""Entry-function payloads for the on-chain multisig account module."""

from __future__ import annotations

from typing import Iterable, Sequence

from .address import ACCOUNT_ONE, AccountAddress
from .bcs import Serializer, serialize
from .moduleid import ModuleId
from .payload import EntryFunction, MultisigTransactionPayload
from .util import sha3_256_hash

_MULTISIG_MODULE = ModuleId(ACCOUNT_ONE, "multisig_account")


def _u64_bytes(value: int) -> bytes:
    ser = Serializer()
    ser.u64(value)
    return ser.to_bytes()


def _length_prefixed(data: bytes) -> bytes:
    ser = Serializer()
    ser.write_bytes(data)
    return ser.to_bytes()


def _entry(function: str, args: Sequence[bytes]) -> EntryFunction:
    return EntryFunction(
        module=_MULTISIG_MODULE,
        function=function,
        arg_types=[],
        args=list(args),
    )


def _transaction_call(
    function: str, multisig_address: AccountAddress, extra_args: Iterable[bytes]
) -> EntryFunction:
    return _entry(function, [bytes(multisig_address), *extra_args])


def multisig_create_account_payload(
    required_signers: int,
    additional_addresses: Sequence[AccountAddress],
    metadata_keys: Sequence[str],
    metadata_values: bytes,
) -> EntryFunction:
    """Payload that creates a multisig account owned by the sender and the given addresses.

    ``required_signers`` must lie between 1 and the total number of owners.
    ``metadata_values`` must already be BCS encoded.
    """
    owners = Serializer()
    owners.sequence(additional_addresses)

    keys = Serializer()
    keys.uleb128(len(metadata_keys))
    for key in metadata_keys:
        keys.write_string(key)

    return _entry(
        "create_with_owners",
        [
            owners.to_bytes(),
            _u64_bytes(required_signers),
            keys.to_bytes(),
            bytes(metadata_values),
        ],
    )


def multisig_add_owner_payload(owner: AccountAddress) -> EntryFunction:
    """Payload that adds an owner to the multisig."""
    return _entry("add_owner", [bytes(owner)])


def multisig_remove_owner_payload(owner: AccountAddress) -> EntryFunction:
    """Payload that removes an owner from the multisig."""
    return _entry("remove_owner", [bytes(owner)])


def multisig_change_threshold_payload(num_signatures_required: int) -> EntryFunction:
    """Payload that changes how many owner approvals a transaction needs."""
    return _entry("update_signatures_required", [_u64_bytes(num_signatures_required)])


def multisig_create_transaction_payload(
    multisig_address: AccountAddress, payload: MultisigTransactionPayload
) -> EntryFunction:
    """Payload that proposes a transaction, storing its full contents on chain."""
    encoded = _length_prefixed(serialize(payload))
    return _transaction_call("create_transaction", multisig_address, [encoded])


def multisig_create_transaction_payload_with_hash(
    multisig_address: AccountAddress, payload: MultisigTransactionPayload
) -> EntryFunction:
    """Payload that proposes a transaction, storing only its SHA3-256 hash on chain."""
    digest = sha3_256_hash([serialize(payload)])
    return _transaction_call(
        "create_transaction_with_hash", multisig_address, [_length_prefixed(digest)]
    )


def multisig_approve_payload(
    multisig_address: AccountAddress, transaction_id: int
) -> EntryFunction:
    """Payload with which an owner approves a pending multisig transaction."""
    return _transaction_call(
        "approve_transaction", multisig_address, [_u64_bytes(transaction_id)]
    )


def multisig_reject_payload(
    multisig_address: AccountAddress, transaction_id: int
) -> EntryFunction:
    """Payload with which an owner rejects a pending multisig transaction."""
    return _transaction_call(
        "reject_transaction", multisig_address, [_u64_bytes(transaction_id)]
    )