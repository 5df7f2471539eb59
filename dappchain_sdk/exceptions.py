"""
Exceptions for the DAppChain SDK.
"""
from typing import Any, Optional


class DAppChainError(Exception):
    """Base exception for all DAppChain SDK errors."""
    pass


class TransportError(DAppChainError):
    """Raised when an HTTP exchange with the DAppChain never completed."""

    def __init__(self, method: str, url: str):
        self.method = method
        self.url = url
        super().__init__(f"HTTP '{method}' request to '{url}' failed")


class HttpError(DAppChainError):
    """Raised when the DAppChain responds with an HTTP error status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        text = f"HTTP Error {status_code}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)


class RpcError(DAppChainError):
    """Raised when the response body carries a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"JSON-RPC Error {code} ({message}): {data}")


class TxCommitError(DAppChainError):
    """Raised when a committed transaction was rejected by the DAppChain."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class TxCheckError(TxCommitError):
    """Transaction failed validation before block inclusion (CheckTx)."""
    pass


class TxDeliverError(TxCommitError):
    """Transaction failed while being executed in a block (DeliverTx)."""
    pass


class MiddlewareError(DAppChainError):
    """
    Raised when a middleware stage fails.

    The exception raised by the stage is kept unmodified in ``error``
    (and as ``__cause__``).
    """

    def __init__(self, stage: str, error: BaseException):
        self.stage = stage
        self.error = error
        super().__init__(f"Tx middleware '{stage}' failed: {error}")


class DecodeError(DAppChainError):
    """Raised when a response body doesn't match the expected schema."""

    def __init__(self, message: str, body: bytes = b""):
        self.body = body
        super().__init__(message)
