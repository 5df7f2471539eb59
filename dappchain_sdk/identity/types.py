"""
Data types for the identity module.
"""
from dataclasses import dataclass, field

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from dappchain_sdk.identity.crypto import (
    generate_ed25519_keypair, load_private_key, private_key_bytes, public_key_bytes
)
from dappchain_sdk.models import Address


@dataclass(frozen=True)
class Identity:
    """
    An Ed25519 key pair used to address and sign DAppChain transactions.

    Attributes:
        private_key: Ed25519 private key used by the signing middleware
        public_key: Raw 32-byte public key
    """
    private_key: Ed25519PrivateKey = field(repr=False)
    public_key: bytes

    @classmethod
    def generate(cls) -> "Identity":
        """Create an identity with a fresh random key pair"""
        private_key, public_key = generate_ed25519_keypair()
        return cls(private_key=private_key, public_key=public_key)

    @classmethod
    def from_private_key(cls, seed: bytes) -> "Identity":
        """Restore an identity from a raw 32-byte private key seed"""
        private_key = load_private_key(seed)
        return cls(private_key=private_key, public_key=public_key_bytes(private_key))

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()

    @property
    def private_key_seed(self) -> bytes:
        """Raw 32-byte seed, accepted back by from_private_key"""
        return private_key_bytes(self.private_key)

    def to_address(self, chain_id: str) -> Address:
        """
        Generate a DAppChain address for this identity.

        Address generation is based on the public key and the chain ID,
        the algorithm is deterministic.
        """
        from dappchain_sdk.identity import derive_address
        return derive_address(self.public_key, chain_id)
