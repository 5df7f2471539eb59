"""
DAppChain SDK - JSON-RPC client for committing transactions to and querying
a DAppChain.
"""
import logging

from .client import DAppChainClient
from .config import NetworkConfig
from .exceptions import (
    DAppChainError, DecodeError, HttpError, MiddlewareError, RpcError,
    TransportError, TxCheckError, TxCommitError, TxDeliverError
)
from .identity import Identity, derive_address
from .middleware import (
    NonceTxMiddleware, SignedTxMiddleware, TxMiddleware, TxMiddlewareHandler
)
from .models import Address, BroadcastTxResult, TxResult
from .transport import RequestsTransport, RpcTransport, TransportResponse
from .version import __version__

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DAppChainClient",
    "NetworkConfig",
    "Identity",
    "derive_address",
    "Address",
    "BroadcastTxResult",
    "TxResult",
    "TxMiddleware",
    "TxMiddlewareHandler",
    "NonceTxMiddleware",
    "SignedTxMiddleware",
    "RpcTransport",
    "RequestsTransport",
    "TransportResponse",
    "DAppChainError",
    "TransportError",
    "HttpError",
    "RpcError",
    "TxCommitError",
    "TxCheckError",
    "TxDeliverError",
    "MiddlewareError",
    "DecodeError",
    "__version__",
]
