"""
JSON HTTP client.

Thin layer over RequestEngine: serializes request bodies, builds request
descriptors and wraps successful responses.
"""

import json
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from requests.utils import guess_filename

from .config import ClientConfig
from .context import RawResponse, RequestDescriptor, Success
from .headers import HeaderContext
from .logging.logger import APIAdaptorLogger
from .request_engine import RequestEngine

ResponseFactory = Callable[[Success], Any]


def _buffer_file(name: str, value: Any) -> Tuple[Any, ...]:
    """
    Read an upload into memory as a ``(filename, bytes[, ...])`` tuple.

    A redirected request is sent again with the same descriptor, and a
    stream can only be read once.
    """
    if isinstance(value, tuple):
        filename, fileobj, *rest = value
        return (filename, fileobj.read(), *rest)
    return (guess_filename(value) or name, value.read())


def _split_multipart(params: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Separate file-like values (anything with ``read``) from plain form fields."""
    form: Dict[str, Any] = {}
    files: Dict[str, Any] = {}
    for name, value in params.items():
        if hasattr(value, 'read') or (isinstance(value, tuple) and len(value) >= 2 and hasattr(value[1], 'read')):
            files[name] = _buffer_file(name, value)
        else:
            form[name] = value
    return form, files


class JSONClient:
    """
    HTTP client for JSON APIs.

    Follows redirects according to the config, never retries, and raises an
    APIAdaptorError subclass for every unsuccessful outcome.

    Args:
        config: ClientConfig (defaults: 4s timeout, 3 redirects, GET/HEAD only)
        transport: Custom transport (``perform_exchange(request) -> RawResponse``)
        header_context: Ambient headers; each client gets its own by default
        logger: Custom APIAdaptorLogger
        **options: ClientConfig fields, used when ``config`` is not given

    Examples:
        >>> client = JSONClient(bearer_token="secret", max_redirects=5)
        >>> response = client.get_json("https://api.test/users")
        >>> response["results"]

        >>> with JSONClient(ClientConfig.create(timeout=10)) as client:
        ...     client.post_json("https://api.test/users", {"name": "Alice"})
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport=None,
        header_context: Optional[HeaderContext] = None,
        logger: Optional[APIAdaptorLogger] = None,
        **options: Any
    ):
        if config is None:
            config = ClientConfig.create(**options)
        elif options:
            raise TypeError("Pass either config or keyword options, not both")

        self.config = config
        self._owns_logger = logger is None
        self._engine = RequestEngine(
            config,
            transport=transport,
            header_context=header_context,
            logger=logger,
        )

    @property
    def header_context(self) -> HeaderContext:
        return self._engine.header_context

    @property
    def logger(self) -> APIAdaptorLogger:
        return self._engine.logger

    # Raw

    def get_raw(self, url: str) -> RawResponse:
        """
        GET without parsing the body.

        Raises the same errors as ``get_json``.
        """
        return self._engine.execute(RequestDescriptor("GET", url)).response

    get_raw_response = get_raw

    # JSON

    def get_json(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        response_factory: Optional[ResponseFactory] = None
    ):
        """
        GET and wrap the JSON response.

        Args:
            url: Absolute URL
            headers: Extra headers for this request (never modified)
            response_factory: Builds the return value from the Success
                (default: ``Response``)

        Example:
            >>> client.get_json("https://api.test/posts",
            ...                 response_factory=lambda r: ListResponse(r, api))
        """
        return self._json_request("GET", url, None, headers, response_factory)

    def post_json(self, url: str, params: Any = None, headers: Optional[Mapping[str, str]] = None):
        return self._json_request("POST", url, {} if params is None else params, headers)

    def put_json(self, url: str, params: Any, headers: Optional[Mapping[str, str]] = None):
        return self._json_request("PUT", url, params, headers)

    def patch_json(self, url: str, params: Any, headers: Optional[Mapping[str, str]] = None):
        return self._json_request("PATCH", url, params, headers)

    def delete_json(self, url: str, params: Any = None, headers: Optional[Mapping[str, str]] = None):
        """DELETE; ``params`` is sent as a JSON body only when given."""
        return self._json_request("DELETE", url, params, headers)

    # Multipart

    def post_multipart(self, url: str, params: Mapping[str, Any]):
        """
        POST multipart/form-data.

        Values with a ``read`` method (open files, BytesIO) or
        ``(filename, fileobj[, content_type])`` tuples are uploaded as files;
        everything else becomes a form field.

        Example:
            >>> with open("photo.jpg", "rb") as f:
            ...     client.post_multipart("https://api.test/upload",
            ...                           {"file": f, "description": "Profile photo"})
        """
        return self._multipart_request("POST", url, params)

    def put_multipart(self, url: str, params: Mapping[str, Any]):
        return self._multipart_request("PUT", url, params)

    # Internals

    def _json_request(
        self,
        method: str,
        url: str,
        params: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        response_factory: Optional[ResponseFactory] = None
    ):
        request = RequestDescriptor(
            method,
            url,
            headers=dict(headers or {}),
            body=None if params is None else json.dumps(params),
        )
        success = self._engine.execute(request)
        return self._wrap(success, response_factory)

    def _multipart_request(self, method: str, url: str, params: Mapping[str, Any]):
        form, files = _split_multipart(params or {})
        request = RequestDescriptor(method, url, form=form, files=files)
        return self._wrap(self._engine.execute(request))

    def _wrap(self, success: Success, response_factory: Optional[ResponseFactory] = None):
        if response_factory is not None:
            return response_factory(success)

        from ..response import Response
        return Response(success)

    def close(self):
        """Close transport sessions and any log handlers this client installed."""
        self._engine.close()
        if self._owns_logger:
            self._engine.logger.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
