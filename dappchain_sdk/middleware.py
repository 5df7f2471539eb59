"""
Transaction middleware.

A middleware stage transforms the serialized bytes of an outgoing
transaction, for example by attaching a nonce or a signature. Stages run
strictly in order, each one receiving the output of the previous one.
"""
import inspect
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Awaitable, Callable, Iterable, List, Union

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from .exceptions import MiddlewareError
from .identity.crypto import public_key_bytes, sign
from .proto import NonceTx, SignedTx

if TYPE_CHECKING:
    from .client import DAppChainClient

logger = logging.getLogger(__name__)

TxHandlerFunc = Callable[[bytes], Union[bytes, Awaitable[bytes]]]


class TxMiddlewareHandler(ABC):
    """Base class for a single middleware stage."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def handle(self, tx_data: bytes) -> bytes:
        """
        Transform the serialized transaction.

        Args:
            tx_data: Output of the previous stage

        Returns:
            Bytes handed to the next stage
        """
        pass


class FuncTxMiddlewareHandler(TxMiddlewareHandler):
    """Adapts a plain function or coroutine function to a stage."""

    def __init__(self, func: TxHandlerFunc, name: str = ""):
        self.func = func
        self._name = name or getattr(func, "__name__", type(func).__name__)

    @property
    def name(self) -> str:
        return self._name

    async def handle(self, tx_data: bytes) -> bytes:
        result = self.func(tx_data)
        if inspect.isawaitable(result):
            result = await result
        return result


class TxMiddleware:
    """
    Ordered chain of middleware stages.

    The first failing stage aborts the chain; its exception is wrapped,
    unmodified, in a MiddlewareError.
    """

    def __init__(self, handlers: Iterable[Union[TxMiddlewareHandler, TxHandlerFunc]] = ()):
        self.handlers: List[TxMiddlewareHandler] = [
            h if isinstance(h, TxMiddlewareHandler) else FuncTxMiddlewareHandler(h)
            for h in handlers
        ]

    def __len__(self) -> int:
        return len(self.handlers)

    async def handle(self, tx_data: bytes) -> bytes:
        """
        Run every stage over the transaction bytes.

        Raises:
            MiddlewareError: If a stage fails
        """
        for handler in self.handlers:
            try:
                tx_data = await handler.handle(tx_data)
            except Exception as e:
                logger.error(f"Tx middleware '{handler.name}' failed: {e}")
                raise MiddlewareError(handler.name, e) from e
            if not isinstance(tx_data, (bytes, bytearray)):
                error = TypeError(
                    f"Tx middleware must return bytes, got {type(tx_data).__name__}"
                )
                raise MiddlewareError(handler.name, error) from error
            tx_data = bytes(tx_data)
        return tx_data


class NonceTxMiddleware(TxMiddlewareHandler):
    """
    Wraps the transaction in a NonceTx.

    The sequence number is the current nonce of the public key plus one.
    """

    def __init__(self, public_key: bytes, client: "DAppChainClient"):
        self.public_key = public_key
        self.client = client

    async def handle(self, tx_data: bytes) -> bytes:
        nonce = await self.client.get_nonce(self.public_key.hex())
        tx = NonceTx(inner=tx_data, sequence=nonce + 1)
        logger.debug(f"Attached sequence {nonce + 1} to Tx")
        return tx.SerializeToString()


class SignedTxMiddleware(TxMiddlewareHandler):
    """Signs the transaction and wraps it in a SignedTx."""

    def __init__(self, private_key: Ed25519PrivateKey):
        self.private_key = private_key
        self.public_key = public_key_bytes(private_key)

    async def handle(self, tx_data: bytes) -> bytes:
        signature = sign(tx_data, self.private_key)
        tx = SignedTx(inner=tx_data, signature=signature, public_key=self.public_key)
        return tx.SerializeToString()
