"""
Pytest configuration and fixtures for api-adaptor tests.
"""

import logging
from typing import Callable, List, Optional

import pytest
import responses as responses_lib

from api_adaptor.core.config import ClientConfig
from api_adaptor.core.context import RawResponse, RequestDescriptor
from api_adaptor.core.json_client import JSONClient
from api_adaptor.core.logging.config import LoggingConfig
from api_adaptor.core.logging.filters import clear_correlation_id


class FakeTransport:
    """
    In-memory transport for engine tests.

    ``routes`` maps URL -> RawResponse, or a callable returning one (or
    raising TransportFailure). Every exchange is recorded in ``calls``.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls: List[RequestDescriptor] = []

    def add(self, url: str, status: int = 200, body: str = "", headers: Optional[dict] = None):
        self.routes[url] = RawResponse(status, url, headers or {}, body)

    def redirect(self, url: str, location: Optional[str], status: int = 302):
        headers = {} if location is None else {"Location": location}
        self.add(url, status, "", headers)

    def perform_exchange(self, request: RequestDescriptor) -> RawResponse:
        self.calls.append(request)
        route = self.routes.get(request.url)
        if route is None:
            return RawResponse(404, request.url, {}, "no route")
        if callable(route):
            return route(request)
        return route

    @property
    def urls(self) -> List[str]:
        return [call.url for call in self.calls]


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """
    Keep User-Agent deterministic regardless of the caller's environment and
    undo any handler/propagation changes a configured logger made to the
    package logger.
    """
    for name in ("APP_NAME", "APP_VERSION", "APP_CONTACT"):
        monkeypatch.delenv(name, raising=False)

    yield

    clear_correlation_id()
    package_logger = logging.getLogger("api_adaptor")
    for handler in package_logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            handler.close()
            package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def client():
    """JSONClient with default configuration."""
    client = JSONClient()
    yield client
    client.close()


@pytest.fixture
def make_client() -> Callable[..., JSONClient]:
    """Factory for JSONClient with keyword config options; closes them after the test."""
    created = []

    def factory(**options) -> JSONClient:
        c = JSONClient(ClientConfig.create(**options))
        created.append(c)
        return c

    yield factory

    for c in created:
        c.close()


@pytest.fixture
def logging_config_with_file(tmp_path):
    """LoggingConfig writing JSON to a temporary file."""
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(tmp_path / "api_adaptor.log"),
    )
