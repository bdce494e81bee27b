"""Signing capability used by the order builder, plus a local-key implementation."""

import logging
from typing import Protocol, runtime_checkable

from eth_abi.exceptions import EncodingError
from eth_account import Account
from eth_account.messages import SignableMessage

from .eip712 import hash_typed_data, typed_data_hashes
from .errors import SigningError
from .model import TypedData

logger = logging.getLogger(__name__)


@runtime_checkable
class OrderSigner(Protocol):
    """Anything that can report its address and sign an EIP-712 envelope.

    Hardware wallets, remote key services and test doubles all fit, as long
    as ``sign_typed_data`` signs the same digest as ``eip712.hash_typed_data``.
    """

    async def get_address(self) -> str: ...

    async def sign_typed_data(self, domain: dict, types: dict, message: dict) -> str: ...


def _primary_type(types: dict) -> str:
    """The one struct type not referenced by any other (EIP712Domain excluded)."""
    message_types = [name for name in types if name != "EIP712Domain"]
    referenced = {
        field["type"].split("[")[0]
        for name in message_types
        for field in types[name]
    }
    roots = [name for name in message_types if name not in referenced]
    if len(roots) != 1:
        raise SigningError(f"Cannot determine primary type from {sorted(message_types)}")
    return roots[0]


class LocalAccountSigner:
    """Signs with an in-process private key via eth-account.

    Args:
        private_key: Ethereum private key (hex string, 0x prefix optional).
    """

    def __init__(self, private_key: str):
        if not private_key.startswith("0x"):
            private_key = f"0x{private_key}"
        try:
            self._account = Account.from_key(private_key)
        except Exception as exc:
            raise SigningError("Invalid private key") from exc
        self.address = self._account.address

    def __repr__(self) -> str:
        return f"LocalAccountSigner(address={self.address})"

    async def get_address(self) -> str:
        return self.address

    async def sign_typed_data(self, domain: dict, types: dict, message: dict) -> str:
        typed_data = {
            "primaryType": _primary_type(types),
            "types": types,
            "domain": domain,
            "message": message,
        }
        try:
            digest = hash_typed_data(typed_data)
            signed = self._account.unsafe_sign_hash(digest)
        except (KeyError, ValueError, TypeError, EncodingError) as exc:
            raise SigningError(f"Could not sign typed data: {exc}") from exc
        logger.debug("Signed %s for %s", typed_data["primaryType"], self.address)
        return "0x" + bytes(signed.signature).hex()


def recover_signer(typed_data: TypedData, signature: str) -> str:
    """Recover the checksummed address that produced ``signature`` over the envelope."""
    domain_separator, struct_hash = typed_data_hashes(typed_data)
    signable = SignableMessage(version=b"\x01", header=domain_separator, body=struct_hash)
    return Account.recover_message(signable, signature=signature)
