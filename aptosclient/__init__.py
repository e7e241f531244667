"""BCS encoding, addresses, type tags, payloads, authenticators, transactions and multisig payload builders for Aptos."""

__version__ = "0.1.0"