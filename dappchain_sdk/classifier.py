"""
Classification of completed HTTP exchanges.

Transport failures never reach this module: the transport raises
TransportError before a response exists, so no body is inspected for them.
The remaining checks run in a fixed order: HTTP status, then JSON-RPC error
envelope. A body that can't be decoded never raises here.
"""
import logging
from typing import Optional

from pydantic import ValidationError

from ._rate_limited_log import rate_limited_log
from .exceptions import HttpError, RpcError
from .models import JsonRpcErrorResponse
from .transport import TransportResponse

logger = logging.getLogger(__name__)


def _decode_error_envelope(
    response: TransportResponse,
    log: logging.Logger
) -> Optional[JsonRpcErrorResponse]:
    try:
        return JsonRpcErrorResponse.model_validate_json(response.body)
    except ValidationError as e:
        rate_limited_log(
            f"Unable to decode JSON-RPC envelope from {response.method} {response.url}: "
            f"{e.error_count()} validation error(s)",
            level="warning",
            logger_instance=log
        )
        return None


def check_response(
    response: TransportResponse,
    log: Optional[logging.Logger] = None
) -> None:
    """
    Raise the error a completed exchange represents, if any.

    Args:
        response: The completed HTTP exchange
        log: Logger to report undecodable bodies to

    Raises:
        HttpError: If the status code indicates an error
        RpcError: If the body carries a JSON-RPC error object
    """
    log = log or logger

    if response.is_http_error:
        message = None
        if response.body:
            envelope = _decode_error_envelope(response, log)
            if envelope is not None and envelope.error is not None:
                message = envelope.error.message
        raise HttpError(response.status_code, message)

    if not response.body:
        return

    envelope = _decode_error_envelope(response, log)
    if envelope is not None and envelope.error is not None:
        error = envelope.error
        raise RpcError(error.code, error.message, error.data)
