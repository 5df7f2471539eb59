"""
Cryptographic operations for the identity module.
"""
import hashlib
import logging
from typing import Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey, Ed25519PublicKey
)
from cryptography.hazmat.primitives.serialization import (
    Encoding, PrivateFormat, PublicFormat, NoEncryption
)

from dappchain_sdk.models import LOCAL_ADDRESS_SIZE

PUBLIC_KEY_SIZE = 32
PRIVATE_KEY_SIZE = 32

logger = logging.getLogger(__name__)


def generate_ed25519_keypair() -> Tuple[Ed25519PrivateKey, bytes]:
    """
    Generate an Ed25519 keypair.

    Returns:
        Tuple of (private_key, public_key_bytes)
    """
    private_key = Ed25519PrivateKey.generate()
    return private_key, public_key_bytes(private_key)


def public_key_bytes(private_key: Ed25519PrivateKey) -> bytes:
    """Raw 32-byte public key for the given private key"""
    return private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


def private_key_bytes(private_key: Ed25519PrivateKey) -> bytes:
    """Raw 32-byte seed of the given private key"""
    return private_key.private_bytes(
        encoding=Encoding.Raw,
        format=PrivateFormat.Raw,
        encryption_algorithm=NoEncryption()
    )


def load_private_key(seed: bytes) -> Ed25519PrivateKey:
    """
    Load an Ed25519 private key from its raw seed.

    Raises:
        ValueError: If the seed isn't 32 bytes
    """
    if len(seed) != PRIVATE_KEY_SIZE:
        raise ValueError(f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(seed)}")
    return Ed25519PrivateKey.from_private_bytes(seed)


def local_address_from_public_key(public_key: bytes) -> bytes:
    """
    Derive the 20-byte local address of a public key.

    The local address is the last 20 bytes of the SHA-256 digest of the
    raw public key.

    Args:
        public_key: Raw Ed25519 public key bytes

    Returns:
        Local address bytes

    Raises:
        ValueError: If the public key isn't 32 bytes
    """
    if len(public_key) != PUBLIC_KEY_SIZE:
        raise ValueError(f"Public key must be {PUBLIC_KEY_SIZE} bytes, got {len(public_key)}")
    digest = hashlib.sha256(public_key).digest()
    return digest[-LOCAL_ADDRESS_SIZE:]


def sign(message: bytes, private_key: Ed25519PrivateKey) -> bytes:
    """Produce a detached 64-byte Ed25519 signature"""
    return private_key.sign(message)


def verify(message: bytes, signature: bytes, public_key: bytes) -> bool:
    """Check a detached Ed25519 signature against a raw public key"""
    try:
        Ed25519PublicKey.from_public_bytes(public_key).verify(signature, message)
    except InvalidSignature:
        logger.debug("Signature verification failed for key %s…", public_key.hex()[:8])
        return False
    return True
