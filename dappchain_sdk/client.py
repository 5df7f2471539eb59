"""
DAppChainClient - Writes to & reads from a DAppChain.
"""
import base64
import logging
import urllib.parse
import uuid
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from .classifier import check_response
from .config import NetworkConfig, validate_url
from .exceptions import DecodeError, TxCheckError, TxDeliverError
from .middleware import TxMiddleware
from .models import (
    Address, BroadcastTxResponse, BroadcastTxResult, JsonRpcResponse,
    NonceResponse, QueryJsonRpcRequest, QueryParams, TxJsonRpcRequest, TxResult
)
from .transport import JSON_HEADERS, RpcTransport, TransportResponse, get_transport

T = TypeVar('T')

# Types whose no-argument constructor gives the value of an empty query
_ZERO_VALUE_TYPES = (int, float, str, bytes, bool, list, dict, tuple, set)


def _serialize(message: Any) -> bytes:
    """Serialized bytes of a protobuf message, or the bytes themselves"""
    if message is None:
        return b""
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    if hasattr(message, "SerializeToString"):
        return message.SerializeToString()
    raise TypeError(f"Expected bytes or a protobuf message, got {type(message).__name__}")


def _zero_value(result_type: Optional[Type[Any]]) -> Any:
    if result_type in _ZERO_VALUE_TYPES:
        return result_type()
    return None


def _new_request_id() -> str:
    return str(uuid.uuid4())


class DAppChainClient:
    """
    Client for committing transactions to and querying a DAppChain.

    The client keeps no per-call state: endpoints, middleware, transport and
    logger are fixed at construction, so one instance can serve concurrent
    calls. Callers that rely on strictly increasing nonces must serialize
    their commits.
    """

    def __init__(
        self,
        write_url: str,
        read_url: str,
        tx_middleware: Optional[TxMiddleware] = None,
        transport: Optional[RpcTransport] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the DAppChainClient

        Args:
            write_url: DAppChain URL for the write interface, e.g. "http://localhost:46658/rpc"
            read_url: DAppChain URL for the read interface, e.g. "http://localhost:46658/query"
            tx_middleware: Middleware to apply when committing transactions
            transport: HTTP transport, a requests-based one is used if omitted
            logger: Logger to use instead of the module logger (silent by default)

        Raises:
            ValueError: If either URL isn't a valid http(s) URL
        """
        self.write_url = validate_url("write_url", write_url)
        self.read_url = validate_url("read_url", read_url)
        self.tx_middleware = tx_middleware
        self.transport = transport or get_transport()
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_network(cls, network: str, **kwargs: Any) -> "DAppChainClient":
        """
        Create a client for one of the networks in networks.json.

        Args:
            network: Network name, e.g. "local"
            **kwargs: Passed to the constructor; write_url / read_url override
                the configured endpoints
        """
        write_url = NetworkConfig.get_write_url(network, kwargs.pop("write_url", None))
        read_url = NetworkConfig.get_read_url(network, kwargs.pop("read_url", None))
        return cls(write_url, read_url, **kwargs)

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "DAppChainClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def commit_tx(self, tx: Any) -> BroadcastTxResult:
        """
        Commit a transaction to the DAppChain.

        Args:
            tx: Transaction to commit, a protobuf message or serialized bytes

        Returns:
            Commit metadata

        Raises:
            MiddlewareError: If a middleware stage fails, nothing is sent
            TransportError: If the request never completed
            HttpError: If the node answered with an HTTP error
            RpcError: If the node answered with a JSON-RPC error
            TxCheckError: If the Tx was rejected before block inclusion
            TxDeliverError: If the Tx failed while executing
            DecodeError: If the response has no decodable result
        """
        tx_bytes = _serialize(tx)
        if self.tx_middleware is not None:
            tx_bytes = await self.tx_middleware.handle(tx_bytes)

        payload = base64.b64encode(tx_bytes).decode("ascii")
        self.logger.debug(f"Tx: {payload}")
        request = TxJsonRpcRequest(
            method="broadcast_tx_commit",
            params=[payload],
            id=_new_request_id()
        )
        response = await self._post(self.write_url, request)

        if not response.body:
            raise DecodeError("Empty response to broadcast_tx_commit")
        try:
            result = BroadcastTxResponse.model_validate_json(response.body).result
        except ValidationError as e:
            self.logger.error(f"Invalid broadcast_tx_commit response: {e}")
            raise DecodeError(f"Invalid broadcast_tx_commit response: {e}", response.body) from e
        if result is None:
            raise DecodeError("Missing result in broadcast_tx_commit response", response.body)

        # Deliver fields are only meaningful once the check phase passed
        self._check_tx_result(result.check_tx, "check_tx", TxCheckError, response.body)
        self._check_tx_result(result.deliver_tx, "deliver_tx", TxDeliverError, response.body)
        self.logger.info(f"Tx committed: hash={result.hash} height={result.height}")
        return result

    def _check_tx_result(
        self,
        tx_result: Optional[TxResult],
        phase: str,
        error_class: Union[Type[TxCheckError], Type[TxDeliverError]],
        body: bytes
    ) -> None:
        if tx_result is None:
            raise DecodeError(f"Missing {phase} in broadcast_tx_commit response", body)
        if tx_result.code == 0:
            return
        message = tx_result.error or f"Failed to commit Tx: {tx_result.code}"
        self.logger.warning(f"{error_class.__name__} {tx_result.code}: {message}")
        raise error_class(tx_result.code, message)

    async def query(
        self,
        contract: Address,
        query: Any = None,
        result_type: Optional[Type[T]] = None
    ) -> Optional[T]:
        """
        Query the current state of a contract.

        Args:
            contract: Address of the contract to query
            query: Query message, a protobuf message or serialized bytes
            result_type: Type to decode the result into (anything pydantic
                can validate); the raw JSON value is returned if omitted

        Returns:
            Decoded result, or the zero value of result_type (None for
            types without one) when the node returned an empty body

        Raises:
            TransportError, HttpError, RpcError: See check_response
            DecodeError: If the result doesn't match result_type
        """
        request = QueryJsonRpcRequest(
            method="query",
            params=QueryParams(
                contract=contract.local_hex,
                query=base64.b64encode(_serialize(query)).decode("ascii")
            ),
            id=_new_request_id()
        )
        response = await self._post(self.read_url, request)

        if not response.body:
            return _zero_value(result_type)

        target = JsonRpcResponse[result_type] if result_type is not None else JsonRpcResponse[Any]
        try:
            return target.model_validate_json(response.body).result
        except ValidationError as e:
            self.logger.error(f"Invalid query response: {e}")
            raise DecodeError(f"Invalid query response: {e}", response.body) from e

    async def get_nonce(self, key: str) -> int:
        """
        Get the nonce of a public key.

        Args:
            key: Hex encoded public key,
                e.g. 441b9dcc47a734695a508edf174f7aaf76dd7209dea2d51d3582da77ce2756be

        Returns:
            The nonce, 0 if the node returned an empty body

        Raises:
            TransportError, HttpError, RpcError: See check_response
            DecodeError: If the body isn't a nonce response
        """
        # The nonce endpoint replaces the read URL's path, e.g. /query -> /nonce
        query = urllib.parse.urlencode({"key": '"{}"'.format(key)})
        url = urllib.parse.urlsplit(self.read_url)._replace(path="/nonce", query=query).geturl()
        response = await self._send("GET", url)

        if not response.body:
            return 0
        try:
            return NonceResponse.model_validate_json(response.body).result
        except ValidationError as e:
            self.logger.error(f"Invalid nonce response: {e}")
            raise DecodeError(f"Invalid nonce response: {e}", response.body) from e

    async def _post(
        self,
        url: str,
        request: Union[TxJsonRpcRequest, QueryJsonRpcRequest]
    ) -> TransportResponse:
        body = request.model_dump_json()
        self.logger.debug(f"{request.method} body: {body}")
        return await self._send("POST", url, body.encode("utf-8"), JSON_HEADERS)

    async def _send(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        headers: Optional[dict] = None
    ) -> TransportResponse:
        response = await self.transport.request(method, url, body=body, headers=headers)
        check_response(response, self.logger)
        if response.body:
            self.logger.debug(f"Response: {response.text}")
        return response
