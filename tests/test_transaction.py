import hmac
from dataclasses import dataclass, replace

import pytest

from aptosclient.address import ACCOUNT_ONE, ACCOUNT_TWO, AccountAddress
from aptosclient.authenticator import (
    AccountAuthenticator,
    AccountAuthenticatorVariant,
    Ed25519TransactionAuthenticator,
    FeePayerTransactionAuthenticator,
    MultiAgentTransactionAuthenticator,
    TransactionAuthenticatorVariant,
    register_account_authenticator,
)
from aptosclient.bcs import BcsError, Deserializer, Serializer, deserialize, serialize
from aptosclient.moduleid import ModuleId
from aptosclient.payload import EntryFunction, TransactionPayload
from aptosclient.transaction import (
    MultiAgentRawTransactionWithData,
    MultiAgentWithFeePayerRawTransactionWithData,
    RawTransaction,
    RawTransactionWithData,
    RawTransactionWithDataVariant,
    SignedTransaction,
    raw_transaction_prehash,
    raw_transaction_with_data_prehash,
)


@dataclass(frozen=True)
class FakeAuth:
    key: bytes
    signature: bytes

    def verify(self, message):
        expected = hmac.new(self.key, message, "sha256").digest()
        return hmac.compare_digest(expected, self.signature)

    def serialize(self, ser):
        ser.write_bytes(self.key)
        ser.write_bytes(self.signature)

    @classmethod
    def deserialize(cls, des):
        key = des.read_bytes()
        return cls(key, des.read_bytes())


class FakeSigner:
    def __init__(self, key):
        self.key = key

    def sign(self, message):
        sig = hmac.new(self.key, message, "sha256").digest()
        return AccountAuthenticator(AccountAuthenticatorVariant.ED25519, FakeAuth(self.key, sig))


@pytest.fixture(autouse=True)
def _register_fake():
    register_account_authenticator(AccountAuthenticatorVariant.ED25519, FakeAuth)


def _address(last):
    return AccountAddress(bytes(31) + bytes([last]))


def _raw_txn(sequence_number=2):
    receiver = AccountAddress(bytes(range(32)))
    amount = Serializer()
    amount.u64(10_000)
    payload = EntryFunction(
        module=ModuleId(ACCOUNT_ONE, "aptos_account"),
        function="transfer",
        arg_types=[],
        args=[receiver.data, amount.to_bytes()],
    )
    return RawTransaction(
        sender=AccountAddress(bytes([0xAB]) * 32),
        sequence_number=sequence_number,
        payload=TransactionPayload(payload),
        max_gas_amount=1000,
        gas_unit_price=2000,
        expiration_timestamp_seconds=1714158778,
        chain_id=4,
    )


def test_raw_transaction_sign():
    txn = _raw_txn()
    signed = txn.signed_transaction(FakeSigner(b"sender-key"))
    assert isinstance(signed.authenticator.auth, Ed25519TransactionAuthenticator)
    signed.verify()

    txn1_bytes = serialize(txn)
    txn2 = deserialize(RawTransaction, txn1_bytes)
    assert serialize(txn2) == txn1_bytes
    assert txn2 == txn


def test_missing_payload_fails_to_serialize():
    txn = replace(_raw_txn(), payload=TransactionPayload())
    with pytest.raises(BcsError):
        serialize(txn)


def test_prehashes_are_distinct_digests():
    assert len(raw_transaction_prehash()) == 32
    assert len(raw_transaction_with_data_prehash()) == 32
    assert raw_transaction_prehash() != raw_transaction_with_data_prehash()
    assert raw_transaction_prehash() == raw_transaction_prehash()


def test_signing_message_layout():
    txn = _raw_txn()
    message = txn.signing_message()
    assert message[:32] == raw_transaction_prehash()
    assert message[32:] == serialize(txn)


def test_verify_rejects_tampered_transaction():
    signed = _raw_txn().signed_transaction(FakeSigner(b"sender-key"))
    tampered = SignedTransaction(_raw_txn(sequence_number=3), signed.authenticator)
    with pytest.raises(ValueError, match="signature is invalid"):
        tampered.verify()


def test_signed_transaction_round_trip():
    signed = _raw_txn().signed_transaction(FakeSigner(b"sender-key"))
    data = serialize(signed)
    back = deserialize(SignedTransaction, data)
    assert back == signed
    assert serialize(back) == data


def test_hash_shape_and_sensitivity():
    signer = FakeSigner(b"sender-key")
    first = _raw_txn().signed_transaction(signer)
    second = _raw_txn(sequence_number=9).signed_transaction(signer)
    digest = first.hash()
    assert digest.startswith("0x")
    assert len(digest) == 66
    assert digest == first.hash()
    assert digest != second.hash()


def test_multi_agent_round_trip_and_message():
    txn = RawTransactionWithData(
        RawTransactionWithDataVariant.MULTI_AGENT,
        MultiAgentRawTransactionWithData(_raw_txn(), [ACCOUNT_TWO]),
    )
    data = serialize(txn)
    assert data[0] == 0
    back = deserialize(RawTransactionWithData, data)
    assert back == txn
    message = txn.signing_message()
    assert message[:32] == raw_transaction_with_data_prehash()
    assert message[32:] == data


def test_fee_payer_round_trip():
    txn = RawTransactionWithData(
        RawTransactionWithDataVariant.MULTI_AGENT_WITH_FEE_PAYER,
        MultiAgentWithFeePayerRawTransactionWithData(_raw_txn(), [], _address(7)),
    )
    data = serialize(txn)
    assert data[0] == 1
    assert data[-32:] == _address(7).data
    assert deserialize(RawTransactionWithData, data) == txn


def test_unknown_with_data_variant():
    with pytest.raises(BcsError):
        RawTransactionWithData.deserialize(Deserializer(bytes([5])))


def test_set_fee_payer():
    multi = RawTransactionWithData(
        RawTransactionWithDataVariant.MULTI_AGENT,
        MultiAgentRawTransactionWithData(_raw_txn()),
    )
    assert multi.set_fee_payer(_address(9)) is False

    fee = RawTransactionWithData(
        RawTransactionWithDataVariant.MULTI_AGENT_WITH_FEE_PAYER,
        MultiAgentWithFeePayerRawTransactionWithData(_raw_txn()),
    )
    assert fee.set_fee_payer(_address(9)) is True
    assert fee.inner.fee_payer == _address(9)


def test_with_data_sign_verifies_against_signing_message():
    txn = RawTransactionWithData(
        RawTransactionWithDataVariant.MULTI_AGENT,
        MultiAgentRawTransactionWithData(_raw_txn(), [ACCOUNT_TWO]),
    )
    auth = txn.sign(FakeSigner(b"sender-key"))
    assert auth.verify(txn.signing_message()) is True
    assert auth.verify(txn.inner.raw_txn.signing_message()) is False


def test_to_multi_agent_signed_transaction():
    txn = RawTransactionWithData(
        RawTransactionWithDataVariant.MULTI_AGENT,
        MultiAgentRawTransactionWithData(_raw_txn(), [ACCOUNT_TWO]),
    )
    sender = txn.sign(FakeSigner(b"sender-key"))
    second = txn.sign(FakeSigner(b"second-key"))
    assert txn.to_fee_payer_signed_transaction(sender, second, []) is None

    signed = txn.to_multi_agent_signed_transaction(sender, [second])
    assert signed.transaction == txn.inner.raw_txn
    assert signed.authenticator.variant == TransactionAuthenticatorVariant.MULTI_AGENT
    auth = signed.authenticator.auth
    assert isinstance(auth, MultiAgentTransactionAuthenticator)
    assert auth.secondary_signer_addresses == [ACCOUNT_TWO]
    assert auth.secondary_signers == [second]


def test_to_fee_payer_signed_transaction():
    txn = RawTransactionWithData(
        RawTransactionWithDataVariant.MULTI_AGENT_WITH_FEE_PAYER,
        MultiAgentWithFeePayerRawTransactionWithData(_raw_txn(), [], _address(7)),
    )
    sender = txn.sign(FakeSigner(b"sender-key"))
    payer = txn.sign(FakeSigner(b"payer-key"))
    assert txn.to_multi_agent_signed_transaction(sender, []) is None

    signed = txn.to_fee_payer_signed_transaction(sender, payer, [])
    assert signed.authenticator.variant == TransactionAuthenticatorVariant.FEE_PAYER
    auth = signed.authenticator.auth
    assert isinstance(auth, FeePayerTransactionAuthenticator)
    assert auth.fee_payer == _address(7)
    assert auth.fee_payer_authenticator == payer

    back = deserialize(SignedTransaction, serialize(signed))
    assert back == signed