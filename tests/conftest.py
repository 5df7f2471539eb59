"""
Pytest fixtures for the DAppChain SDK tests.
"""
import json
from typing import Dict, List, Optional, Union

import pytest

from dappchain_sdk import _rate_limited_log
from dappchain_sdk.client import DAppChainClient
from dappchain_sdk.config import NetworkConfig
from dappchain_sdk.exceptions import TransportError
from dappchain_sdk.identity import Identity
from dappchain_sdk.transport import RpcTransport, TransportResponse

# Constants for testing
WRITE_URL = "http://localhost:46658/rpc"
READ_URL = "http://localhost:46658/query"
NONCE_URL = "http://localhost:46658/nonce"
CHAIN_ID = "default"
TEST_SEED = bytes(range(32))


def commit_body(check_code=0, check_log="", deliver_code=0, deliver_log="",
                tx_hash="ABCD", height=42) -> Dict:
    """Build a broadcast_tx_commit response body"""
    return {
        "jsonrpc": "2.0",
        "id": "",
        "result": {
            "check_tx": {"code": check_code, "log": check_log},
            "deliver_tx": {"code": deliver_code, "log": deliver_log},
            "hash": tx_hash,
            "height": height,
        },
    }


class RecordingTransport(RpcTransport):
    """
    Transport returning queued outcomes and recording every request.

    Each queued outcome is either a TransportResponse or an exception to raise.
    """

    def __init__(self, outcomes: Optional[List[Union[TransportResponse, Exception]]] = None):
        self.outcomes = list(outcomes or [])
        self.requests: List[Dict] = []
        self.closed = False

    def queue_json(self, payload, status_code: int = 200) -> None:
        self.queue_body(json.dumps(payload).encode("utf-8"), status_code)

    def queue_body(self, body: bytes, status_code: int = 200) -> None:
        self.outcomes.append(TransportResponse("POST", WRITE_URL, status_code, body))

    async def request(self, method, url, body=None, headers=None) -> TransportResponse:
        self.requests.append({"method": method, "url": url, "body": body, "headers": headers})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return TransportResponse(method, url, outcome.status_code, outcome.body)

    async def close(self) -> None:
        self.closed = True

    @property
    def last_json(self) -> Dict:
        return json.loads(self.requests[-1]["body"])


class UnreachableTransport(RecordingTransport):
    """Transport whose exchanges never complete."""

    async def request(self, method, url, body=None, headers=None) -> TransportResponse:
        self.requests.append({"method": method, "url": url, "body": body, "headers": headers})
        raise TransportError(method, url)


@pytest.fixture(autouse=True)
def _reset_rate_limited_log():
    """Each test sees every rate-limited warning."""
    _rate_limited_log.reset()
    yield
    _rate_limited_log.reset()


@pytest.fixture(autouse=True)
def _reset_network_cache():
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def identity():
    """Deterministic identity"""
    return Identity.from_private_key(TEST_SEED)


@pytest.fixture
def fake_transport():
    return RecordingTransport()


@pytest.fixture
def fake_client(fake_transport):
    """Client wired to the recording transport"""
    return DAppChainClient(WRITE_URL, READ_URL, transport=fake_transport)


@pytest.fixture
def client():
    """Client using the real requests transport (pair with requests_mock)"""
    return DAppChainClient(WRITE_URL, READ_URL)


@pytest.fixture
def contract_address(identity):
    return identity.to_address(CHAIN_ID)
