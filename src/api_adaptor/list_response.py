"""
Paginated list responses.

A list page is a JSON object with a ``results`` array and optional
metadata; neighbouring pages are discovered through the ``Link`` header:

    Link: <https://api.test/posts?page=2>; rel="next",
          <https://api.test/posts?page=1>; rel="previous"
"""

from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import urljoin

from requests.utils import parse_header_links

from .response import Response

_NOT_FETCHED = object()


class ListResponse(Response):
    """
    One page of a paginated list.

    Iteration and ``len`` cover the current page only; use
    ``with_subsequent_pages()`` to walk every following page.

    Args:
        raw: RawResponse (or Success) of this page
        api_client: Object with ``get_list(url)`` used to fetch neighbours

    Example:
        >>> page = api.get_list("https://api.test/posts?page=1")
        >>> page.results
        [{'id': 1}, {'id': 2}]
        >>> page.has_next_page
        True
        >>> [post["id"] for post in page.with_subsequent_pages()]
        [1, 2, 3, 4, 5, 6]
    """

    def __init__(self, raw, api_client):
        super().__init__(raw)
        self._api_client = api_client
        self._links: Optional[Dict[str, str]] = None
        self._next_page = _NOT_FETCHED
        self._previous_page = _NOT_FETCHED

    @property
    def results(self) -> List[Any]:
        return self.to_dict().get("results", [])

    # Page metadata

    @property
    def current_page(self) -> Optional[int]:
        return self.to_dict().get("current_page")

    @property
    def total_pages(self) -> Optional[int]:
        return self.to_dict().get("pages")

    @property
    def page_size(self) -> Optional[int]:
        return self.to_dict().get("page_size")

    @property
    def total(self) -> Optional[int]:
        return self.to_dict().get("total")

    # Links

    @property
    def links(self) -> Dict[str, str]:
        """rel -> absolute URL from the Link header (empty for an unpaginated list)."""
        if self._links is None:
            links: Dict[str, str] = {}
            header = self.headers.get("Link")
            if header:
                for link in parse_header_links(header):
                    rel = link.get("rel")
                    url = link.get("url")
                    if rel and url:
                        for name in rel.split():
                            links.setdefault(name, urljoin(self.url, url))
            self._links = links
        return self._links

    def page_link(self, rel: str) -> Optional[str]:
        return self.links.get(rel)

    @property
    def has_next_page(self) -> bool:
        return self.page_link("next") is not None

    @property
    def has_previous_page(self) -> bool:
        return self.page_link("previous") is not None

    @property
    def next_page(self) -> Optional["ListResponse"]:
        """
        Next page, fetched on first access and memoised.

        Holding a reference to any page keeps the sequence stable: a page
        already loaded is never fetched again through it.
        """
        if self._next_page is _NOT_FETCHED:
            self._next_page = self._fetch("next")
        return self._next_page

    @property
    def previous_page(self) -> Optional["ListResponse"]:
        if self._previous_page is _NOT_FETCHED:
            self._previous_page = self._fetch("previous")
        return self._previous_page

    def _fetch(self, rel: str) -> Optional["ListResponse"]:
        url = self.page_link(rel)
        if url is None:
            return None
        return self._api_client.get_list(url)

    def with_subsequent_pages(self) -> "PageItemIterator":
        """Lazy iterator over this page's items and every following page's."""
        return PageItemIterator(self)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, key):
        if isinstance(key, (int, slice)):
            return self.results[key]
        return super().__getitem__(key)


class PageItemIterator:
    """
    Iterator over items across pages, starting at ``first_page``.

    The next page is requested only once the current page's items are
    exhausted, through the page's memoised ``next_page``; iterating again
    from the same first page therefore never re-fetches anything.

    Example:
        >>> items = PageItemIterator(first_page)
        >>> next(items)
        {'id': 1}
    """

    def __init__(self, first_page: ListResponse):
        self._page: Optional[ListResponse] = first_page
        self._items: Iterator[Any] = iter(first_page.results)

    def __iter__(self) -> "PageItemIterator":
        return self

    def __next__(self) -> Any:
        while self._page is not None:
            try:
                return next(self._items)
            except StopIteration:
                self._page = self._page.next_page
                if self._page is not None:
                    self._items = iter(self._page.results)
        raise StopIteration
