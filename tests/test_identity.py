"""
Tests for the identity module and address derivation.
"""
import hashlib

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st
from pydantic import ValidationError

from dappchain_sdk.identity import (
    Identity, derive_address, generate_ed25519_keypair, local_address_from_public_key,
    sign, verify
)
from dappchain_sdk.models import Address
from conftest import CHAIN_ID, TEST_SEED

public_key_strategy = st.binary(min_size=32, max_size=32)
chain_id_strategy = st.text(min_size=1, max_size=40).filter(lambda s: ":" not in s)


@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(public_key=public_key_strategy, chain_id=chain_id_strategy)
def test_derive_address_is_deterministic(public_key, chain_id):
    """Same inputs always give byte-identical addresses"""
    first = derive_address(public_key, chain_id)
    second = derive_address(public_key, chain_id)

    assert first == second
    assert first.local == second.local
    assert first.chain_id == chain_id
    assert len(first.local) == 20


def test_local_address_is_sha256_suffix():
    public_key = bytes(range(32))
    assert local_address_from_public_key(public_key) == hashlib.sha256(public_key).digest()[-20:]


def test_chain_id_scopes_address():
    public_key = b"\x07" * 32
    a = derive_address(public_key, "chain-a")
    b = derive_address(public_key, "chain-b")

    assert a.local == b.local
    assert a != b


@pytest.mark.parametrize("bad_key", [b"", b"\x01" * 31, b"\x01" * 33])
def test_malformed_public_key(bad_key):
    with pytest.raises(ValueError):
        derive_address(bad_key, CHAIN_ID)


def test_identity_from_private_key_is_stable():
    """Restoring the same seed yields the same keys and address"""
    first = Identity.from_private_key(TEST_SEED)
    second = Identity.from_private_key(TEST_SEED)

    assert first.public_key == second.public_key
    assert first.to_address(CHAIN_ID) == second.to_address(CHAIN_ID)
    assert first.public_key_hex == first.public_key.hex()


def test_identity_seed_round_trip():
    """The exported seed restores the same identity"""
    identity = Identity.generate()

    restored = Identity.from_private_key(identity.private_key_seed)

    assert len(identity.private_key_seed) == 32
    assert restored.public_key == identity.public_key
    assert Identity.from_private_key(TEST_SEED).private_key_seed == TEST_SEED


def test_identity_generate():
    identity = Identity.generate()

    assert len(identity.public_key) == 32
    assert identity.to_address(CHAIN_ID) == derive_address(identity.public_key, CHAIN_ID)
    assert "private_key" not in repr(identity)


def test_identity_rejects_short_seed():
    with pytest.raises(ValueError, match="32 bytes"):
        Identity.from_private_key(b"\x00" * 16)


def test_sign_and_verify():
    private_key, public_key = generate_ed25519_keypair()
    signature = sign(b"message", private_key)

    assert verify(b"message", signature, public_key)
    assert not verify(b"tampered", signature, public_key)


def test_address_string_form(identity):
    address = identity.to_address(CHAIN_ID)
    text = str(address)

    assert text == f"{CHAIN_ID}:0x{address.local.hex()}"
    assert Address.from_string(text) == address


@pytest.mark.parametrize("text", ["0xabcdef", "default:0xzz", "default:0x0102", ":0x" + "00" * 20])
def test_address_from_string_invalid(text):
    with pytest.raises(ValueError):
        Address.from_string(text)


def test_address_rejects_wrong_local_size():
    with pytest.raises(ValidationError):
        Address(chain_id=CHAIN_ID, local=b"\x00" * 19)


def test_address_is_immutable(identity):
    address = identity.to_address(CHAIN_ID)
    with pytest.raises(ValidationError):
        address.chain_id = "other"
