"""
Transport: performs exactly one HTTP exchange.

Redirects are never followed here; every status comes back as a
RawResponse and the engine decides what to do with it. Network-level
failures are raised as TransportFailure with a distinguishable kind.
"""

import socket
from enum import Enum
from http.client import RemoteDisconnected
from typing import Any, Dict, Iterator

import requests
from urllib3.exceptions import ProtocolError

from .context import RawResponse, RequestDescriptor
from .session_manager import ThreadSafeSessionManager


class TransportFailureKind(str, Enum):
    """Kinds of failure the transport can report."""
    TIMEOUT = "timeout"
    CONNECTION_REFUSED = "connection_refused"
    CONNECTION_RESET = "connection_reset"
    SOCKET_ERROR = "socket_error"
    INVALID_URL = "invalid_url"


class TransportFailure(Exception):
    """
    A single exchange failed before an HTTP response was received.

    Args:
        kind: What went wrong
        message: Description from the underlying library
    """

    def __init__(self, kind: TransportFailureKind, message: str = ""):
        self.kind = kind
        super().__init__(message)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Walk an exception, its causes and wrapped reasons (urllib3 MaxRetryError)."""
    seen = set()
    stack = [exc]
    while stack:
        current = stack.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        stack.append(current.__cause__)
        stack.append(current.__context__)
        reason = getattr(current, 'reason', None)
        if isinstance(reason, BaseException):
            stack.append(reason)
        stack.extend(arg for arg in current.args if isinstance(arg, BaseException))


def _chain_contains(exc: BaseException, *types) -> bool:
    return any(isinstance(item, types) for item in _exception_chain(exc))


def classify_requests_exception(exc: requests.exceptions.RequestException) -> TransportFailure:
    """
    Convert a requests exception into a TransportFailure.

    Examples:
        >>> failure = classify_requests_exception(requests.exceptions.ReadTimeout())
        >>> failure.kind
        <TransportFailureKind.TIMEOUT: 'timeout'>
    """
    message = str(exc)

    # ConnectTimeout is also a ConnectionError, check timeouts first
    if isinstance(exc, requests.exceptions.Timeout):
        return TransportFailure(TransportFailureKind.TIMEOUT, message)

    if isinstance(exc, (
        requests.exceptions.InvalidURL,
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.URLRequired,
    )):
        return TransportFailure(TransportFailureKind.INVALID_URL, message)

    if _chain_contains(exc, ConnectionRefusedError):
        return TransportFailure(TransportFailureKind.CONNECTION_REFUSED, message)

    if _chain_contains(exc, socket.timeout):
        return TransportFailure(TransportFailureKind.TIMEOUT, message)

    if isinstance(exc, requests.exceptions.ChunkedEncodingError) or _chain_contains(
        exc, ConnectionResetError, ConnectionAbortedError, RemoteDisconnected, ProtocolError
    ):
        return TransportFailure(TransportFailureKind.CONNECTION_RESET, message)

    return TransportFailure(TransportFailureKind.SOCKET_ERROR, message)


class RequestsTransport:
    """
    Transport backed by a thread-local requests.Session.

    Args:
        verify: TLS certificate verification, passed straight to requests

    Example:
        >>> transport = RequestsTransport()
        >>> raw = transport.perform_exchange(RequestDescriptor("GET", "https://api.example.com"))
        >>> raw.status_code
        200
    """

    def __init__(self, verify: bool = True):
        self.verify = verify
        self._session_manager = ThreadSafeSessionManager(session_factory=requests.Session)

    def _request_kwargs(self, request: RequestDescriptor) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            'headers': dict(request.headers),
            'timeout': request.timeout,
            'allow_redirects': False,
            'verify': self.verify,
        }
        if request.auth is not None:
            kwargs['auth'] = request.auth

        if request.is_multipart:
            # String form fields are sent as parts without filename so the
            # body is always multipart/form-data
            parts: Dict[str, Any] = {
                name: (None, str(value)) for name, value in (request.form or {}).items()
            }
            parts.update(request.files or {})
            kwargs['files'] = parts
        elif request.body is not None:
            kwargs['data'] = request.body.encode('utf-8')

        return kwargs

    def perform_exchange(self, request: RequestDescriptor) -> RawResponse:
        """
        Send one request and return whatever came back.

        Raises:
            TransportFailure: no HTTP response was received
        """
        session = self._session_manager.get_session()
        try:
            response = session.request(
                method=request.method,
                url=request.url,
                **self._request_kwargs(request)
            )
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e) from e

        return RawResponse(
            status_code=response.status_code,
            url=request.url,
            headers=response.headers,
            body=response.text,
            reason=response.reason or "",
        )

    def close(self):
        self._session_manager.close_all()

    @property
    def active_sessions(self) -> int:
        return self._session_manager.get_active_sessions_count()
