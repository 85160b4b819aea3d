"""
Tests for ErrorHandler: status and transport failure classification.
"""

import pytest

from api_adaptor.core.error_handler import ErrorHandler
from api_adaptor.core.exceptions import (
    EndpointNotFound,
    HTTPBadGateway,
    HTTPBadRequest,
    HTTPClientError,
    HTTPConflict,
    HTTPErrorResponse,
    HTTPForbidden,
    HTTPGatewayTimeout,
    HTTPGone,
    HTTPInternalServerError,
    HTTPNotFound,
    HTTPPayloadTooLarge,
    HTTPServerError,
    HTTPTooManyRequests,
    HTTPUnauthorized,
    HTTPUnavailable,
    HTTPUnprocessableEntity,
    InvalidUrl,
    SocketError,
    TimedOut,
)
from api_adaptor.core.transport import TransportFailure, TransportFailureKind

URL = "https://api.example.com/resource"


class TestErrorClassForStatus:
    """Статус -> класс исключения."""

    @pytest.mark.parametrize("status, expected", [
        (400, HTTPBadRequest),
        (401, HTTPUnauthorized),
        (403, HTTPForbidden),
        (404, HTTPNotFound),
        (409, HTTPConflict),
        (410, HTTPGone),
        (413, HTTPPayloadTooLarge),
        (422, HTTPUnprocessableEntity),
        (429, HTTPTooManyRequests),
        (418, HTTPClientError),
        (451, HTTPClientError),
        (500, HTTPInternalServerError),
        (502, HTTPBadGateway),
        (503, HTTPUnavailable),
        (504, HTTPGatewayTimeout),
        (501, HTTPServerError),
        (599, HTTPServerError),
        (302, HTTPErrorResponse),
        (304, HTTPErrorResponse),
    ])
    def test_mapping(self, status, expected):
        assert ErrorHandler.error_class_for_status(status) is expected


class TestBuildHttpError:
    """Построение HTTP ошибок."""

    def test_408_is_timeout(self):
        error = ErrorHandler.build_http_error(408, URL, "slow")
        assert isinstance(error, TimedOut)
        assert error.url == URL

    def test_message_embeds_url_and_body(self):
        error = ErrorHandler.build_http_error(404, URL, "nothing here")
        assert isinstance(error, HTTPNotFound)
        assert str(error) == f"URL: {URL}\nResponse body:\nnothing here"
        assert error.http_body == "nothing here"
        assert error.status_code == 404

    def test_json_body_parsed_into_details(self):
        error = ErrorHandler.build_http_error(422, URL, '{"errors": ["name is required"]}')
        assert error.error_details == {"errors": ["name is required"]}

    def test_non_json_body_has_no_details(self):
        error = ErrorHandler.build_http_error(500, URL, "<html>oops</html>")
        assert error.error_details is None
        assert error.http_body == "<html>oops</html>"

    def test_empty_body(self):
        error = ErrorHandler.build_http_error(503, URL, "")
        assert error.error_details is None
        assert error.is_intermittent


class TestParseErrorDetails:

    @pytest.mark.parametrize("body", [None, "", "not json", "{broken"])
    def test_unparseable(self, body):
        assert ErrorHandler.parse_error_details(body) is None

    def test_list_body(self):
        assert ErrorHandler.parse_error_details("[1, 2]") == [1, 2]


class TestClassifyTransportFailure:
    """Сбои транспорта -> исключения."""

    @pytest.mark.parametrize("kind, expected", [
        (TransportFailureKind.CONNECTION_REFUSED, EndpointNotFound),
        (TransportFailureKind.TIMEOUT, TimedOut),
        (TransportFailureKind.CONNECTION_RESET, TimedOut),
        (TransportFailureKind.INVALID_URL, InvalidUrl),
        (TransportFailureKind.SOCKET_ERROR, SocketError),
    ])
    def test_mapping(self, kind, expected):
        error = ErrorHandler.classify_transport_failure(TransportFailure(kind, "boom"), URL)
        assert isinstance(error, expected)

    def test_refused_message(self):
        failure = TransportFailure(TransportFailureKind.CONNECTION_REFUSED, "refused")
        error = ErrorHandler.classify_transport_failure(failure, URL)
        assert str(error) == f"Could not connect to {URL}"

    def test_empty_message_gets_default(self):
        failure = TransportFailure(TransportFailureKind.SOCKET_ERROR)
        error = ErrorHandler.classify_transport_failure(failure, URL)
        assert URL in str(error)
