"""Accounts: an address paired with a signer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .address import AccountAddress


@runtime_checkable
class Signer(Protocol):
    """Something that can sign messages on behalf of an account."""

    def sign(self, message: bytes) -> Any: ...

    def sign_message(self, message: bytes) -> Any: ...

    def simulation_authenticator(self) -> Any: ...

    def pub_key(self) -> Any: ...

    def auth_key(self) -> bytes: ...


@dataclass
class Account:
    """An on-chain account with the signer that controls it."""

    address: AccountAddress
    signer: Signer

    @classmethod
    def from_signer(cls, signer: Signer, *args: bytes) -> "Account":
        """Create an account from a signer, optionally with an explicit auth key.

        Without an auth key, the address is the signer's own auth key.
        """
        if len(args) > 1:
            raise ValueError("must only provide one auth key")
        key = args[0] if args else signer.auth_key()
        return cls(address=AccountAddress(bytes(key)), signer=signer)

    def sign(self, message: bytes) -> Any:
        """Sign a message, returning the signer's authenticator."""
        return self.signer.sign(message)

    def sign_message(self, message: bytes) -> Any:
        """Sign a message, returning the raw signature."""
        return self.signer.sign_message(message)

    def simulation_authenticator(self) -> Any:
        return self.signer.simulation_authenticator()

    def pub_key(self) -> Any:
        return self.signer.pub_key()

    def auth_key(self) -> bytes:
        return self.signer.auth_key()

    def account_address(self) -> AccountAddress:
        return self.address