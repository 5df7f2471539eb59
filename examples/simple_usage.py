#!/usr/bin/env python3
"""
Simple example of using the DAppChain SDK.
"""
import asyncio
import logging
import os

from dappchain_sdk import (
    DAppChainClient, DAppChainError, Identity, NetworkConfig, NonceTxMiddleware,
    SignedTxMiddleware, TxMiddleware
)


async def main():
    """
    Demonstrate basic usage of the DAppChainClient.

    This example shows how to:
    1. Load or create an identity
    2. Build a client with nonce + signing middleware
    3. Commit a transaction and query a contract
    """
    logging.basicConfig(level=logging.DEBUG)

    network = os.environ.get("DAPPCHAIN_NETWORK", "local")
    seed = os.environ.get("PRIVATE_KEY_SEED")
    identity = Identity.from_private_key(bytes.fromhex(seed)) if seed else Identity.generate()
    chain_id = NetworkConfig.get_chain_id(network)

    async with DAppChainClient.from_network(network) as client:
        client.tx_middleware = TxMiddleware([
            NonceTxMiddleware(identity.public_key, client),
            SignedTxMiddleware(identity.private_key),
        ])

        address = identity.to_address(chain_id)
        print(f"Sending from {address}")

        try:
            # Payload would normally be a serialized protobuf call message
            result = await client.commit_tx(b"\x08\x01")
            print(f"Committed: hash={result.hash} height={result.height}")

            state = await client.query(address, b"", result_type=dict)
            print(f"Query result: {state}")
        except DAppChainError as e:
            print(f"ERROR: {e}")


if __name__ == "__main__":
    asyncio.run(main())
