# aptosclient

Pure-Python building blocks for composing, encoding, signing and hashing Aptos
transactions. It has no third-party dependencies.

## Modules

- `aptosclient.bcs`: Binary Canonical Serialization. `Serializer` writes
  `u8` … `u256`, `bool`, `uleb128`, length-prefixed bytes and strings, fixed
  bytes, structs and sequences; `Deserializer` reads them back. The helpers
  `serialize(value)` and `deserialize(cls, data)` encode and decode a single
  value. `deserialize` rejects trailing bytes. Every failure raises `BcsError`,
  which is a subclass of `ValueError`.
- `aptosclient.util`: `parse_hex`, `bytes_to_hex`, `sha3_256_hash`,
  `str_to_uint64`, `str_to_big_int` and `pretty_json`.
- `aptosclient.address`: `AccountAddress`, a frozen 32-byte address. It
  offers relaxed parsing (`from_string_relaxed`), the short form through
  `str()` (`0x0` to `0xf` for special addresses) and the full form through
  `string_long()`, JSON conversion (`to_json` / `from_json`), and derivation
  of object, named-object and resource-account addresses. The module also
  has the constants `ACCOUNT_ZERO` to `ACCOUNT_FOUR`, and the errors
  `AddressTooShortError` and `AddressTooLongError`.
- `aptosclient.account`: the `Signer` protocol and `Account`, which pairs an
  address with a signer. `Account.from_signer(signer)` takes the address
  from the signer's auth key, unless you pass one auth key explicitly.
- `aptosclient.nodeinfo`: `NodeInfo`, the chain state a node reports.
  `NodeInfo.from_json(data)` builds it. The numeric accessors (`epoch()`,
  `ledger_version()`, `block_height()`, …) return 0 and log an error when
  the reported string is malformed.
- `aptosclient.typetag`: `TypeTag` and its kinds. The primitive tags are
  `BoolTag`, `U8Tag` … `U256Tag`, `AddressTag` and `SignerTag`; the others
  are `VectorTag` and `StructTag`. The helpers are `new_vector_tag`,
  `new_string_tag`, `new_option_tag` and `new_object_tag`, and the module
  provides `APTOS_COIN_TYPE_TAG`.
- `aptosclient.moduleid`: `ModuleId`, such as `0x1::coin`.
- `aptosclient.script`: `Script` and typed `ScriptArgument` values. The
  argument types are the members of `ScriptArgumentVariant`.
- `aptosclient.payload`: `EntryFunction`, `Multisig`,
  `MultisigTransactionPayload`, the deprecated `ModuleBundle` (it refuses to
  encode), and the `TransactionPayload` wrapper.
- `aptosclient.authenticator`: `AccountAuthenticator` and the transaction
  authenticators. These are `Ed25519TransactionAuthenticator`,
  `MultiEd25519TransactionAuthenticator`,
  `MultiAgentTransactionAuthenticator`, `FeePayerTransactionAuthenticator`
  and `SingleSenderTransactionAuthenticator`, wrapped by
  `TransactionAuthenticator`.
- `aptosclient.transaction`: `RawTransaction` and `RawTransactionWithData`
  (multi-agent and fee payer), with signing messages and domain prehashes.
  `SignedTransaction.verify()` raises `ValueError` when a signature is
  invalid, and `SignedTransaction.hash()` returns the transaction hash.
- `aptosclient.multisig`: entry-function payload builders for the
  `0x1::multisig_account` module. They create an account, add and remove
  owners, change the threshold, propose a transaction (in full or by hash),
  and approve or reject one.

## Installation

```
pip install .
```

## Examples

Addresses:

```python
from aptosclient.address import AccountAddress

addr = AccountAddress.from_string_relaxed("0x1")
print(addr)                # 0x1
print(addr.string_long())  # 0x0000000000000000000000000000000000000000000000000000000000000001
```

Type tags and a BCS round trip:

```python
from aptosclient import bcs
from aptosclient.typetag import (
    TypeTag, new_object_tag, new_option_tag, new_string_tag, new_vector_tag,
)

tag = TypeTag(new_option_tag(new_vector_tag(new_object_tag(new_string_tag()))))
print(tag)  # 0x1::option::Option<vector<0x1::object::Object<0x1::string::String>>>

data = bcs.serialize(tag)
assert bcs.deserialize(TypeTag, data) == tag
```

A multisig approval payload, wrapped for a transaction:

```python
from aptosclient.multisig import multisig_approve_payload
from aptosclient.payload import TransactionPayload

payload = TransactionPayload(multisig_approve_payload(addr, 5))
```

## Signing

A `RawTransaction` is signed by any object whose `sign(message)` method
returns an `AccountAuthenticator`. `RawTransaction.signed_transaction(signer)`
produces a `SignedTransaction` for a single sender.

To decode authenticators from bytes, register the class for each account
authenticator scheme with `register_account_authenticator(variant, cls)`.
That class must provide `deserialize(des)`, and its instances must provide
`serialize(ser)` and `verify(message)`.

## What this package does not do

- It has no key types and no signature schemes of its own. It does not
  generate, store or use Ed25519, Secp256k1 or multi-key private keys.
  Signers and account authenticator implementations come from you.
- It has no network client. It does not talk to a node's REST API to read
  accounts, submit or simulate transactions, wait for them, or call view
  functions.
- `SignedTransaction.deserialize` decodes only transactions built on a plain
  `RawTransaction`.

## Running the tests

```
pip install .[test]
pytest
```