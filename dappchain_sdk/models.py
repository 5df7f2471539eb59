"""
Data models for the DAppChain SDK.

These mirror the JSON-RPC envelopes exchanged with a DAppChain node.
"""
import base64
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar('T')

JSONRPC_VERSION = "2.0"
LOCAL_ADDRESS_SIZE = 20


class Address(BaseModel):
    """Chain-scoped address, ``local`` is derived from a public key"""
    model_config = ConfigDict(frozen=True)

    chain_id: str
    local: bytes

    @field_validator("local")
    @classmethod
    def _check_local_size(cls, value: bytes) -> bytes:
        if len(value) != LOCAL_ADDRESS_SIZE:
            raise ValueError(
                f"Local address must be {LOCAL_ADDRESS_SIZE} bytes, got {len(value)}"
            )
        return value

    @property
    def local_hex(self) -> str:
        """0x-prefixed lowercase hex of the local address"""
        return "0x" + self.local.hex()

    def __str__(self) -> str:
        return f"{self.chain_id}:{self.local_hex}"

    @classmethod
    def from_string(cls, value: str) -> "Address":
        """
        Parse an address in ``<chain_id>:0x<hex>`` form.

        Raises:
            ValueError: If the string isn't a valid address
        """
        chain_id, sep, local = value.rpartition(":")
        if not sep or not chain_id:
            raise ValueError(f"Invalid address string: {value}")
        if local.startswith(("0x", "0X")):
            local = local[2:]
        try:
            local_bytes = bytes.fromhex(local)
        except ValueError as e:
            raise ValueError(f"Invalid local address '{local}': {e}")
        return cls(chain_id=chain_id, local=local_bytes)


class TxJsonRpcRequest(BaseModel):
    """JSON-RPC request carrying positional string params"""
    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: List[str]
    id: str = ""


class QueryParams(BaseModel):
    contract: str
    # base64 encoded query
    query: str


class QueryJsonRpcRequest(BaseModel):
    """JSON-RPC request for contract state queries"""
    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: QueryParams
    id: str = ""


class RpcErrorData(BaseModel):
    code: int
    message: str = ""
    data: Any = None


class JsonRpcErrorResponse(BaseModel):
    error: Optional[RpcErrorData] = None


class JsonRpcResponse(BaseModel, Generic[T]):
    jsonrpc: Optional[str] = None
    id: Any = None
    result: Optional[T] = None


class TxResult(BaseModel):
    """Outcome of one processing phase of a transaction"""
    model_config = ConfigDict(populate_by_name=True)

    code: int = 0
    error: str = Field("", alias="log")
    data: bytes = b""

    @field_validator("error", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("data", mode="before")
    @classmethod
    def _decode_data(cls, value: Any) -> Any:
        # Node encodes binary data as base64
        if value is None:
            return b""
        if isinstance(value, str):
            return base64.b64decode(value)
        return value


class BroadcastTxResult(BaseModel):
    """Result of a broadcast_tx_commit call"""
    model_config = ConfigDict(populate_by_name=True)

    code: Optional[str] = None
    log: str = ""
    hash: str = ""
    # Block height at which the Tx was committed
    height: int = 0
    check_tx: Optional[TxResult] = None
    # Absent when the check phase rejected the Tx
    deliver_tx: Optional[TxResult] = None

    @field_validator("code", mode="before")
    @classmethod
    def _code_to_str(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("log", mode="before")
    @classmethod
    def _log_none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class BroadcastTxResponse(JsonRpcResponse[BroadcastTxResult]):
    pass


class NonceResponse(BaseModel):
    result: int = Field(0, ge=0, lt=2 ** 64)
