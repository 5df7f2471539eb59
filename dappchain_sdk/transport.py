"""
Transport layer for the DAppChain client.

This module provides an abstraction over the HTTP exchange with a DAppChain
node. A transport performs a single request and either returns the status
code and body, or raises TransportError when no exchange completed.
"""
import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter

from .exceptions import TransportError

# Configure logger
logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass
class TransportResponse:
    """
    A completed HTTP exchange.

    Attributes:
        method: HTTP method of the request
        url: Target URL of the request
        status_code: HTTP status code returned by the server
        body: Raw response body, empty when the server sent none
        headers: Response headers
    """
    method: str
    url: str
    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_http_error(self) -> bool:
        return self.status_code >= 400

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class RpcTransport(ABC):
    """
    Abstract base class for transport implementations.

    Implementations must raise TransportError when the exchange doesn't
    complete (DNS, connection or protocol failure) and must never retry.
    """

    @abstractmethod
    async def request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        """
        Perform one HTTP request.

        Args:
            method: HTTP method ("GET", "POST")
            url: Fully built target URL
            body: Request body, if any
            headers: Request headers, if any

        Returns:
            The completed exchange

        Raises:
            TransportError: If no HTTP exchange completed
        """
        pass

    async def close(self) -> None:
        """Close any open connections or resources."""
        pass


class RequestsTransport(RpcTransport):
    """
    Transport backed by ``requests`` sessions.

    The blocking call runs in a worker thread so that the client's
    coroutines only suspend at this boundary. ``requests.Session`` isn't
    thread-safe, so each worker thread gets its own session. A session
    passed in by the caller is shared by all threads and used under a lock.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize the transport.

        Args:
            session: Session to use for every request, one session per
                worker thread is created if omitted
            timeout: Optional per-request timeout in seconds, none by default
        """
        self.session = session
        self.timeout = timeout
        self._lock = threading.Lock()
        self._local = threading.local()
        self._sessions: List[requests.Session] = []

    def _thread_session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = create_session()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def _send(
        self,
        method: str,
        url: str,
        body: Optional[bytes],
        headers: Optional[Dict[str, str]]
    ) -> TransportResponse:
        try:
            if self.session is not None:
                with self._lock:
                    response = self.session.request(
                        method, url, data=body, headers=headers, timeout=self.timeout
                    )
            else:
                response = self._thread_session().request(
                    method, url, data=body, headers=headers, timeout=self.timeout
                )
        except requests.RequestException as e:
            logger.error(f"HTTP {method} request to {url} failed: {e}")
            raise TransportError(method, url) from e

        return TransportResponse(
            method=method,
            url=url,
            status_code=response.status_code,
            body=response.content or b"",
            headers=dict(response.headers)
        )

    async def request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        return await asyncio.to_thread(self._send, method, url, body, headers)

    async def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
        if self.session is not None:
            sessions.append(self.session)
        for session in sessions:
            session.close()


def create_session() -> requests.Session:
    """New session that never retries; retry policy belongs to callers"""
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def get_transport(timeout: Optional[float] = None) -> RpcTransport:
    """
    Get the default transport implementation.

    Args:
        timeout: Optional per-request timeout in seconds

    Returns:
        Transport implementation
    """
    logger.debug("Using requests-based transport")
    return RequestsTransport(timeout=timeout)
