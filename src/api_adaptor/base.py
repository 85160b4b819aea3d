"""
Base class for API-specific clients.

Subclass ``Base`` to describe one API: the endpoint URL, helpers that map
domain calls to URLs, and pagination through ``get_list``.
"""

from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote_plus, urlsplit

from .core.config import ClientConfig
from .core.exceptions import APIAdaptorError
from .core.json_client import JSONClient
from .list_response import ListResponse


class InvalidAPIURL(APIAdaptorError):
    """Endpoint URL given to a Base client is not a valid absolute URL."""

    def __init__(self, endpoint_url: str):
        self.endpoint_url = endpoint_url
        super().__init__(f"Invalid API URL: {endpoint_url!r}")


def _is_valid_endpoint(url: str) -> bool:
    if not isinstance(url, str) or not url or any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
        parts.port
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)


class Base:
    """
    Base API client.

    Options are merged in this order (later wins): ``Base.default_options``,
    then the options given to the instance. They are ClientConfig fields
    plus ``transport``, ``header_context`` and ``logger``.

    Args:
        endpoint_url: Base URL of the API (optional)
        **options: Client options

    Raises:
        InvalidAPIURL: endpoint_url is given but is not an absolute URL

    Example:
        >>> class PostsAPI(Base):
        ...     def post(self, slug):
        ...         return self.get_json(self.url_for_slug(f"posts/{slug}"))
        ...
        ...     def posts(self, page=1):
        ...         return self.get_list(self.url_for_slug("posts", {"page": page}))
        >>>
        >>> Base.default_options = {"timeout": 10}
        >>> api = PostsAPI("https://api.test", bearer_token="secret")
        >>> api.posts().results
    """

    default_options: Optional[Dict[str, Any]] = None

    _CLIENT_KWARGS = ("transport", "header_context", "logger")

    def __init__(self, endpoint_url: Optional[str] = None, **options: Any):
        if endpoint_url is not None and not _is_valid_endpoint(endpoint_url):
            raise InvalidAPIURL(endpoint_url)

        merged = dict(Base.default_options or {})
        merged.update(options)
        merged.pop('endpoint_url', None)

        self.endpoint_url = endpoint_url
        self.options = merged
        self._client: Optional[JSONClient] = None

    @property
    def client(self) -> JSONClient:
        """JSONClient built from the options on first use."""
        if self._client is None:
            self._client = self.create_client()
        return self._client

    def create_client(self) -> JSONClient:
        client_kwargs = {key: self.options[key] for key in self._CLIENT_KWARGS if key in self.options}
        config_options = {key: value for key, value in self.options.items() if key not in self._CLIENT_KWARGS}

        config = config_options.pop('config', None)
        if config is None:
            config = ClientConfig.create(**config_options)
        return JSONClient(config, **client_kwargs)

    # Delegation to JSONClient

    def get_json(self, url: str, headers: Optional[Mapping[str, str]] = None, response_factory=None):
        return self.client.get_json(url, headers, response_factory)

    def post_json(self, url: str, params: Any = None, headers: Optional[Mapping[str, str]] = None):
        return self.client.post_json(url, params, headers)

    def put_json(self, url: str, params: Any, headers: Optional[Mapping[str, str]] = None):
        return self.client.put_json(url, params, headers)

    def patch_json(self, url: str, params: Any, headers: Optional[Mapping[str, str]] = None):
        return self.client.patch_json(url, params, headers)

    def delete_json(self, url: str, params: Any = None, headers: Optional[Mapping[str, str]] = None):
        return self.client.delete_json(url, params, headers)

    def get_raw(self, url: str):
        return self.client.get_raw(url)

    get_raw_response = get_raw

    def post_multipart(self, url: str, params: Mapping[str, Any]):
        return self.client.post_multipart(url, params)

    def put_multipart(self, url: str, params: Mapping[str, Any]):
        return self.client.put_multipart(url, params)

    # URLs and lists

    @property
    def base_url(self) -> str:
        return (self.endpoint_url or "").rstrip("/")

    def url_for_slug(self, slug: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        ``{endpoint}/{slug}.json`` plus a query string.

        Params are sorted by key and escaped; list values repeat as
        ``key[]=value``.

        Example:
            >>> api = Base("https://api.test")
            >>> api.url_for_slug("posts", {"tags": ["a b", "c"], "page": 2})
            'https://api.test/posts.json?page=2&tags%5B%5D=a+b&tags%5B%5D=c'
        """
        return f"{self.base_url}/{slug}.json{self._query_string(params or {})}"

    @staticmethod
    def _query_string(params: Mapping[str, Any]) -> str:
        if not params:
            return ""

        pairs = []
        for key, value in sorted(params.items(), key=lambda item: str(item[0])):
            if isinstance(value, (list, tuple)):
                pairs.extend(f"{quote_plus(f'{key}[]')}={quote_plus(str(v))}" for v in value)
            else:
                pairs.append(f"{quote_plus(str(key))}={quote_plus(str(value))}")
        return "?" + "&".join(pairs)

    def get_list(self, url: str) -> ListResponse:
        """
        GET a paginated list page.

        Neighbouring pages are fetched through this same client.
        """
        return self.get_json(url, response_factory=lambda success: ListResponse(success, self))

    def close(self):
        if self._client is not None:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
