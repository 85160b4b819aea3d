"""Core API Adaptor модули."""

from .config import ClientConfig, DEFAULT_MAX_REDIRECTS, DEFAULT_TIMEOUT_IN_SECONDS
from .context import Origin, RawResponse, RequestDescriptor, Success
from .exceptions import (
    APIAdaptorError,
    ConfigurationError,
    InvalidUrl,
    TimedOut,
    EndpointNotFound,
    SocketError,
    TooManyRedirects,
    RedirectLocationMissing,
    HTTPErrorKind,
    HTTPErrorResponse,
    HTTPClientError,
    HTTPBadRequest,
    HTTPUnauthorized,
    HTTPForbidden,
    HTTPNotFound,
    HTTPConflict,
    HTTPGone,
    HTTPPayloadTooLarge,
    HTTPUnprocessableEntity,
    HTTPTooManyRequests,
    HTTPServerError,
    HTTPInternalServerError,
    HTTPBadGateway,
    HTTPUnavailable,
    HTTPGatewayTimeout,
)
from .error_handler import ErrorHandler
from .headers import HeaderContext, default_request_headers, user_agent
from .redirect_policy import (
    DoNotFollow,
    Follow,
    RedirectOutcome,
    RedirectPolicy,
    Reject,
    RejectReason,
)
from .transport import (
    RequestsTransport,
    TransportFailure,
    TransportFailureKind,
    classify_requests_exception,
)
from .request_engine import RequestEngine, next_hop
from .json_client import JSONClient

__all__ = [
    # Config
    "ClientConfig",
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_TIMEOUT_IN_SECONDS",
    # Data
    "Origin",
    "RawResponse",
    "RequestDescriptor",
    "Success",
    # Engine
    "ErrorHandler",
    "HeaderContext",
    "default_request_headers",
    "user_agent",
    "RedirectPolicy",
    "RedirectOutcome",
    "Follow",
    "DoNotFollow",
    "Reject",
    "RejectReason",
    "RequestsTransport",
    "TransportFailure",
    "TransportFailureKind",
    "classify_requests_exception",
    "RequestEngine",
    "next_hop",
    "JSONClient",
    # Exceptions
    "APIAdaptorError",
    "ConfigurationError",
    "InvalidUrl",
    "TimedOut",
    "EndpointNotFound",
    "SocketError",
    "TooManyRedirects",
    "RedirectLocationMissing",
    "HTTPErrorKind",
    "HTTPErrorResponse",
    "HTTPClientError",
    "HTTPBadRequest",
    "HTTPUnauthorized",
    "HTTPForbidden",
    "HTTPNotFound",
    "HTTPConflict",
    "HTTPGone",
    "HTTPPayloadTooLarge",
    "HTTPUnprocessableEntity",
    "HTTPTooManyRequests",
    "HTTPServerError",
    "HTTPInternalServerError",
    "HTTPBadGateway",
    "HTTPUnavailable",
    "HTTPGatewayTimeout",
]
