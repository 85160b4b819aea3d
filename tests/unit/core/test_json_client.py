"""
Tests for JSONClient over a mocked HTTP layer.
"""

import io
import json

import pytest
import requests
import responses

from api_adaptor.core.config import ClientConfig
from api_adaptor.core.exceptions import (
    EndpointNotFound,
    HTTPErrorResponse,
    HTTPForbidden,
    HTTPGone,
    HTTPInternalServerError,
    HTTPNotFound,
    HTTPUnavailable,
    TimedOut,
    TooManyRedirects,
)
from api_adaptor.core.headers import HeaderContext
from api_adaptor.core.json_client import JSONClient
from api_adaptor.response import Response

BASE = "https://api.example.com"


class TestGetJson:

    @responses.activate
    def test_returns_response(self, client):
        responses.add(responses.GET, f"{BASE}/users/1", json={"id": 1, "name": "Alice"})

        response = client.get_json(f"{BASE}/users/1")

        assert isinstance(response, Response)
        assert response["name"] == "Alice"
        assert response.status_code == 200

    @responses.activate
    def test_follows_redirect(self, client):
        responses.add(responses.GET, f"{BASE}/a", status=302, headers={"Location": "/b"})
        responses.add(responses.GET, f"{BASE}/b", json={"x": 1})

        response = client.get_json(f"{BASE}/a")

        assert response.to_dict() == {"x": 1}
        assert response.exchanges == 2
        assert [call.request.url for call in responses.calls] == [f"{BASE}/a", f"{BASE}/b"]

    @responses.activate
    def test_default_headers(self, client):
        responses.add(responses.GET, f"{BASE}/a", json={})

        client.get_json(f"{BASE}/a")

        sent = responses.calls[0].request.headers
        assert sent["Accept"] == "application/json"
        assert sent["User-Agent"] == "Python ApiAdaptor App/Version not stated (Contact not stated)"
        assert "Content-Type" not in sent

    @responses.activate
    def test_caller_headers_not_mutated(self, client):
        responses.add(responses.GET, f"{BASE}/a", json={})
        headers = {"X-Trace": "abc"}

        client.get_json(f"{BASE}/a", headers)

        assert headers == {"X-Trace": "abc"}
        assert responses.calls[0].request.headers["X-Trace"] == "abc"

    @responses.activate
    def test_response_factory(self, client):
        responses.add(responses.GET, f"{BASE}/a", json={"x": 1})

        result = client.get_json(f"{BASE}/a", response_factory=lambda success: success.status_code)

        assert result == 200

    @responses.activate
    def test_ambient_headers(self):
        responses.add(responses.GET, f"{BASE}/a", json={})
        context = HeaderContext()
        context.set_header("X-Request-Id", "req-1")

        with JSONClient(header_context=context) as client:
            client.get_json(f"{BASE}/a")

        assert responses.calls[0].request.headers["X-Request-Id"] == "req-1"

    def test_header_context_is_per_client(self):
        first, second = JSONClient(), JSONClient()
        assert first.header_context is not second.header_context


class TestErrors:
    """HTTP статусы -> исключения."""

    @pytest.mark.parametrize("status, expected", [
        (403, HTTPForbidden),
        (404, HTTPNotFound),
        (410, HTTPGone),
        (500, HTTPInternalServerError),
        (503, HTTPUnavailable),
    ])
    @responses.activate
    def test_status_errors(self, client, status, expected):
        responses.add(responses.GET, f"{BASE}/a", status=status, body='{"error": "nope"}')

        with pytest.raises(expected) as exc_info:
            client.get_json(f"{BASE}/a")

        assert exc_info.value.status_code == status
        assert exc_info.value.error_details == {"error": "nope"}
        assert f"{BASE}/a" in str(exc_info.value)

    @responses.activate
    def test_408(self, client):
        responses.add(responses.GET, f"{BASE}/a", status=408)
        with pytest.raises(TimedOut):
            client.get_json(f"{BASE}/a")

    @responses.activate
    def test_post_302_raises(self, client):
        responses.add(responses.POST, f"{BASE}/a", status=302, headers={"Location": "/b"})

        with pytest.raises(HTTPErrorResponse) as exc_info:
            client.post_json(f"{BASE}/a", {"x": 1})

        assert exc_info.value.status_code == 302
        assert len(responses.calls) == 1

    @responses.activate
    def test_too_many_redirects(self, make_client):
        for i in range(3):
            responses.add(responses.GET, f"{BASE}/r{i}", status=301, headers={"Location": f"/r{i + 1}"})

        with pytest.raises(TooManyRedirects):
            make_client(max_redirects=2).get_json(f"{BASE}/r0")

    @responses.activate
    def test_connection_refused(self, client):
        responses.add(
            responses.GET,
            f"{BASE}/a",
            body=requests.exceptions.ConnectionError(ConnectionRefusedError(111, "Connection refused")),
        )
        with pytest.raises(EndpointNotFound):
            client.get_json(f"{BASE}/a")

    @responses.activate
    def test_read_timeout(self, client):
        responses.add(responses.GET, f"{BASE}/a", body=requests.exceptions.ReadTimeout("read timed out"))
        with pytest.raises(TimedOut):
            client.get_json(f"{BASE}/a")


class TestWriteMethods:

    @pytest.mark.parametrize("method_name, http_method", [
        ("post_json", responses.POST),
        ("put_json", responses.PUT),
        ("patch_json", responses.PATCH),
        ("delete_json", responses.DELETE),
    ])
    @responses.activate
    def test_json_body(self, client, method_name, http_method):
        responses.add(http_method, f"{BASE}/items/1", json={"ok": True})

        getattr(client, method_name)(f"{BASE}/items/1", {"name": "x"})

        sent = responses.calls[0].request
        assert json.loads(sent.body) == {"name": "x"}
        assert sent.headers["Content-Type"] == "application/json"

    @responses.activate
    def test_post_without_params_sends_empty_object(self, client):
        responses.add(responses.POST, f"{BASE}/items", json={})
        client.post_json(f"{BASE}/items")
        assert responses.calls[0].request.body == b"{}"

    @responses.activate
    def test_delete_without_params_has_no_body(self, client):
        responses.add(responses.DELETE, f"{BASE}/items/1", status=204)

        response = client.delete_json(f"{BASE}/items/1")

        assert response.status_code == 204
        assert responses.calls[0].request.body is None
        assert "Content-Type" not in responses.calls[0].request.headers

    @responses.activate
    def test_bearer_token(self, make_client):
        responses.add(responses.PUT, f"{BASE}/items/1", json={})
        make_client(bearer_token="secret").put_json(f"{BASE}/items/1", {})
        assert responses.calls[0].request.headers["Authorization"] == "Bearer secret"

    @responses.activate
    def test_basic_auth(self, make_client):
        responses.add(responses.GET, f"{BASE}/a", json={})
        make_client(basic_auth={"user": "u", "password": "p"}).get_json(f"{BASE}/a")
        assert responses.calls[0].request.headers["Authorization"] == "Basic dTpw"


class TestMultipart:

    @responses.activate
    def test_post_multipart(self, client):
        responses.add(responses.POST, f"{BASE}/upload", json={"uploaded": True})

        response = client.post_multipart(
            f"{BASE}/upload",
            {"description": "Profile photo", "file": ("photo.jpg", io.BytesIO(b"data"))},
        )

        sent = responses.calls[0].request
        assert response["uploaded"] is True
        assert sent.headers["Content-Type"].startswith("multipart/form-data")
        assert b"Profile photo" in sent.body
        assert b'filename="photo.jpg"' in sent.body

    @responses.activate
    def test_put_multipart(self, client):
        responses.add(responses.PUT, f"{BASE}/upload", json={})
        client.put_multipart(f"{BASE}/upload", {"file": io.BytesIO(b"data")})
        assert responses.calls[0].request.headers["Content-Type"].startswith("multipart/form-data")

    @responses.activate
    @pytest.mark.parametrize("status", [307, 308])
    def test_file_resent_after_redirect(self, make_client, status):
        responses.add(
            responses.POST, f"{BASE}/upload", status=status,
            headers={"Location": f"{BASE}/upload2"},
        )
        responses.add(responses.POST, f"{BASE}/upload2", status=201, json={"uploaded": True})

        client = make_client(follow_non_get_redirects=True)
        response = client.post_multipart(
            f"{BASE}/upload",
            {"file": ("a.txt", io.BytesIO(b"PAYLOAD-123"), "text/plain")},
        )

        assert response.status_code == 201
        assert len(responses.calls) == 2
        for call in responses.calls:
            assert b'filename="a.txt"' in call.request.body
            assert b"PAYLOAD-123" in call.request.body

    @responses.activate
    def test_bare_file_object_resent_after_redirect(self, make_client, tmp_path):
        path = tmp_path / "report.csv"
        path.write_bytes(b"a,b\n1,2\n")
        responses.add(
            responses.PUT, f"{BASE}/upload", status=307,
            headers={"Location": f"{BASE}/upload2"},
        )
        responses.add(responses.PUT, f"{BASE}/upload2", json={})

        with open(path, "rb") as f:
            make_client(follow_non_get_redirects=True).put_multipart(f"{BASE}/upload", {"file": f})

        second = responses.calls[1].request.body
        assert b'filename="report.csv"' in second
        assert b"a,b\n1,2\n" in second


class TestRaw:

    @responses.activate
    def test_get_raw(self, client):
        responses.add(responses.GET, f"{BASE}/file.txt", body="plain text", content_type="text/plain")

        raw = client.get_raw(f"{BASE}/file.txt")

        assert raw.body == "plain text"
        assert raw.status_code == 200
        assert client.get_raw_response(f"{BASE}/file.txt").body == "plain text"

    @responses.activate
    def test_get_raw_raises(self, client):
        responses.add(responses.GET, f"{BASE}/file.txt", status=404)
        with pytest.raises(HTTPNotFound):
            client.get_raw(f"{BASE}/file.txt")


class TestClientConstruction:

    def test_keyword_options(self):
        client = JSONClient(timeout=10, max_redirects=1)
        assert client.config.timeout == 10
        assert client.config.max_redirects == 1

    def test_config_and_options_rejected(self):
        with pytest.raises(TypeError):
            JSONClient(ClientConfig(), timeout=10)

    def test_context_manager_closes(self):
        with JSONClient() as client:
            pass
        assert client._engine.transport.active_sessions == 0
