"""
Identity module for the DAppChain SDK.

This module handles Ed25519 key pairs and the derivation of chain-scoped
addresses from public keys.
"""
from dappchain_sdk.models import Address
from dappchain_sdk.identity.crypto import (
    generate_ed25519_keypair, local_address_from_public_key, sign, verify
)
from dappchain_sdk.identity.types import Identity

__all__ = [
    'derive_address',
    'local_address_from_public_key',
    'generate_ed25519_keypair',
    'sign',
    'verify',
    'Identity',
]


def derive_address(public_key: bytes, chain_id: str) -> Address:
    """
    Derive the address of a public key on the given chain.

    Args:
        public_key: Raw Ed25519 public key bytes
        chain_id: Identifier of a DAppChain

    Returns:
        An address, identical for identical inputs

    Raises:
        ValueError: If the public key is malformed
    """
    return Address(chain_id=chain_id, local=local_address_from_public_key(public_key))
