"""Request descriptors, origins and exchange results passed through the engine."""

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, NamedTuple, Optional, Tuple
from urllib.parse import urlsplit

from requests.structures import CaseInsensitiveDict

from .exceptions import InvalidUrl

DEFAULT_PORTS = {"http": 80, "https": 443}

METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"})


class Origin(NamedTuple):
    """(scheme, host, port) security boundary of a URL."""

    scheme: str
    host: str
    port: int

    @classmethod
    def from_url(cls, url: str) -> "Origin":
        """
        Derive the origin of an absolute http(s) URL.

        Raises:
            InvalidUrl: URL is empty, contains whitespace, has no
                scheme/host or an unparseable port
        """
        if not isinstance(url, str) or not url:
            raise InvalidUrl(f"Invalid URL: {url!r}")
        if any(ch.isspace() for ch in url):
            raise InvalidUrl(f"Invalid URL (contains whitespace): {url!r}")

        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError as e:
            raise InvalidUrl(f"Invalid URL {url!r}: {e}") from e

        scheme = parts.scheme.lower()
        host = parts.hostname
        if scheme not in DEFAULT_PORTS or not host:
            raise InvalidUrl(f"Invalid URL (expected absolute http(s) URL): {url!r}")

        return cls(scheme, host, port if port is not None else DEFAULT_PORTS[scheme])


@dataclass(frozen=True)
class RequestDescriptor:
    """
    One physical HTTP exchange.

    Never mutated: the engine derives a new descriptor for every hop with
    ``with_url``.

    Attributes:
        method: HTTP method (GET, HEAD, POST, PUT, PATCH, DELETE)
        url: Absolute target URL
        headers: Case-insensitive header mapping
        body: Serialized request body (JSON text) or None
        form: Multipart form fields (non-file values)
        files: Multipart file uploads
        auth: (user, password) for basic auth, or None
        timeout: Seconds for connect and read
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: Optional[str] = None
    form: Optional[Mapping[str, Any]] = None
    files: Optional[Mapping[str, Any]] = None
    auth: Optional[Tuple[str, str]] = None
    timeout: float = 4

    def __post_init__(self):
        method = self.method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers or {}))

    @property
    def has_body(self) -> bool:
        return self.body is not None or bool(self.form) or bool(self.files)

    @property
    def is_multipart(self) -> bool:
        return self.files is not None or self.form is not None

    def with_url(self, url: str) -> "RequestDescriptor":
        return replace(self, url=url)


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and body of one exchange, whatever the status."""

    status_code: int
    url: str
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: str = ""
    reason: str = ""

    def __post_init__(self):
        object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers or {}))

    @property
    def location(self) -> Optional[str]:
        """Location header, or None when absent or blank."""
        value = self.headers.get("Location")
        if value is None or not str(value).strip():
            return None
        return str(value).strip()


@dataclass(frozen=True)
class Success:
    """Terminal successful outcome of a logical request."""

    response: RawResponse
    exchanges: int = 1
    redirects_followed: int = 0

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self.response.headers

    @property
    def body(self) -> str:
        return self.response.body

    @property
    def url(self) -> str:
        return self.response.url
