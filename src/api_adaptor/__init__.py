"""API Adaptor - foundation for JSON API clients with safe redirect handling."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.json_client import JSONClient
from .core.config import ClientConfig
from .core.headers import HeaderContext
from .core.env_config import load_from_env
from .core.logging import LoggingConfig
from .core.exceptions import (
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
from .response import Response
from .list_response import ListResponse, PageItemIterator
from .base import Base, InvalidAPIURL

# Set up logging - add NullHandler to prevent "No handler found" warnings
# Users can configure logging themselves using logging.getLogger('api_adaptor')
logging.getLogger('api_adaptor').addHandler(logging.NullHandler())

# Version info - read from package metadata (single source of truth in pyproject.toml)
try:
    __version__ = version("api-adaptor")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Clients
    "JSONClient",
    "Base",
    "InvalidAPIURL",

    # Config
    "ClientConfig",
    "LoggingConfig",
    "HeaderContext",
    "load_from_env",

    # Responses
    "Response",
    "ListResponse",
    "PageItemIterator",

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

    # Version
    "__version__",
]
