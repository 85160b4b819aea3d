"""
Headers sent with every request.

``HeaderContext`` is the ambient, per-thread header store (request ids,
tenant ids and the like set by the application around a block of calls).
``default_request_headers`` builds the Accept / User-Agent / Content-Type
defaults that every hop starts from.
"""

import threading
from typing import Dict, Mapping, Optional

from .env_config.validator import AppIdentity

JSON_CONTENT_TYPE = "application/json"


class HeaderContext:
    """
    Per-thread ambient headers.

    Each thread sees only the headers it set itself. Blank values are kept
    in the store but never reported by ``headers()``, so setting a header to
    ``None`` or ``""`` effectively removes it.

    Example:
        >>> context = HeaderContext()
        >>> context.set_header("X-Request-Id", "12345")
        >>> context.headers()
        {'X-Request-Id': '12345'}
        >>> context.clear_headers()
    """

    def __init__(self):
        self._local = threading.local()

    def _store(self) -> Dict[str, Optional[str]]:
        store = getattr(self._local, 'headers', None)
        if store is None:
            store = {}
            self._local.headers = store
        return store

    def set_header(self, name: str, value: Optional[str]) -> None:
        self._store()[name] = value

    def headers(self) -> Dict[str, str]:
        """Current thread's headers with None/blank values dropped."""
        return {
            name: value
            for name, value in self._store().items()
            if value is not None and str(value) != ""
        }

    def clear_headers(self) -> None:
        self._local.headers = {}


def user_agent(identity: Optional[AppIdentity] = None) -> str:
    """
    User-Agent for outgoing requests, from APP_NAME / APP_VERSION / APP_CONTACT.

    Example:
        >>> user_agent()
        'Python ApiAdaptor App/Version not stated (Contact not stated)'
    """
    return (identity or AppIdentity()).user_agent()


def default_request_headers(has_body: bool = False, identity: Optional[AppIdentity] = None) -> Dict[str, str]:
    """
    Default headers for one request.

    ``Content-Type: application/json`` is only added when the request has a
    JSON body.
    """
    headers = {
        "Accept": JSON_CONTENT_TYPE,
        "User-Agent": user_agent(identity),
    }
    if has_body:
        headers["Content-Type"] = JSON_CONTENT_TYPE
    return headers


def merge_headers(*layers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Merge header layers case-insensitively, later layers winning.

    The casing of the winning layer's key is kept.

    Example:
        >>> merge_headers({"Accept": "a"}, {"accept": "b"})
        {'accept': 'b'}
    """
    merged: Dict[str, str] = {}
    lower_to_key: Dict[str, str] = {}
    for layer in layers:
        for name, value in (layer or {}).items():
            previous = lower_to_key.pop(name.lower(), None)
            if previous is not None:
                del merged[previous]
            merged[name] = value
            lower_to_key[name.lower()] = name
    return merged
