"""
Response wrapper for JSON API responses.
"""

import json
from typing import Any, Iterator, Mapping, Optional

from .core.context import RawResponse, Success

_MISSING = object()


class Response:
    """
    Successful JSON response with dict-style access to the parsed body.

    The body is parsed lazily on first access and cached.

    Args:
        raw: Final RawResponse of the request (or a Success wrapping one)

    Example:
        >>> response = client.get_json("https://api.test/users/1")
        >>> response["name"]
        'Alice'
        >>> response.dig("address", "city")
        'London'
    """

    def __init__(self, raw):
        if isinstance(raw, Success):
            self.exchanges = raw.exchanges
            raw = raw.response
        else:
            self.exchanges = 1
        self._raw: RawResponse = raw
        self._parsed = _MISSING

    @property
    def status_code(self) -> int:
        return self._raw.status_code

    @property
    def code(self) -> int:
        return self._raw.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self._raw.headers

    @property
    def url(self) -> str:
        """URL of the final hop (after redirects)."""
        return self._raw.url

    @property
    def raw_response_body(self) -> str:
        return self._raw.body

    def to_dict(self) -> Any:
        """
        Parsed JSON body.

        Raises:
            ValueError: body is not valid JSON
        """
        if self._parsed is _MISSING:
            self._parsed = json.loads(self._raw.body)
        return self._parsed

    parsed_content = to_dict

    def __getitem__(self, key):
        return self.to_dict()[key]

    def get(self, key, default: Optional[Any] = None) -> Any:
        return self.to_dict().get(key, default)

    def dig(self, *keys) -> Any:
        """
        Walk nested dicts/lists; None as soon as a step is missing.

        Example:
            >>> response.dig("results", 0, "id")
            42
        """
        value = self.to_dict()
        for key in keys:
            try:
                value = value[key]
            except (KeyError, IndexError, TypeError):
                return None
        return value

    def __iter__(self) -> Iterator:
        return iter(self.to_dict())

    def __contains__(self, key) -> bool:
        return key in self.to_dict()

    def present(self) -> bool:
        return True

    def blank(self) -> bool:
        return False

    def __repr__(self):
        return f"<{self.__class__.__name__} [{self.status_code}] {self.url}>"
