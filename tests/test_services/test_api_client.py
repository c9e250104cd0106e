"""
Tests for RosterApiClient request encoding and error mapping.
"""

import json

import pytest
import urllib3

from roster.services.api_client import ApiError, RosterApiClient


class FakeResponse:
    def __init__(self, status, payload=None):
        self.status = status
        self.data = b"" if payload is None else json.dumps(payload).encode("utf-8")


class RecordingHttp:
    """Returns one canned response and remembers the request."""

    def __init__(self, response=None, raises=None):
        self.response = response
        self.raises = raises
        self.requests = []

    def request(self, method, url, body=None, headers=None, **kwargs):
        self.requests.append({"method": method, "url": url, "body": body, "headers": headers})
        if self.raises is not None:
            raise self.raises
        return self.response


def _client(http):
    return RosterApiClient("http://roster-api.test/", timeout=1.0, http=http)


class TestRequests:
    """What goes over the wire."""

    def test_joins_base_url_and_path(self):
        http = RecordingHttp(FakeResponse(200, []))
        assert _client(http).get("/departments") == []
        assert http.requests[0]["url"] == "http://roster-api.test/departments"
        assert http.requests[0]["body"] is None

    def test_sends_json_body(self):
        http = RecordingHttp(FakeResponse(200, {"d_no": 4}))
        result = _client(http).patch("/departments/4", {"d_name": "Finance"})

        sent = http.requests[0]
        assert sent["method"] == "PATCH"
        assert json.loads(sent["body"]) == {"d_name": "Finance"}
        assert sent["headers"]["Content-Type"] == "application/json"
        assert result == {"d_no": 4}

    def test_empty_body_returns_none(self):
        http = RecordingHttp(FakeResponse(204))
        assert _client(http).delete("/employees/5") is None


class TestErrors:
    """Every failure surfaces as ApiError."""

    def test_non_2xx_status(self):
        http = RecordingHttp(FakeResponse(500, {"message": "boom"}))
        with pytest.raises(ApiError) as excinfo:
            _client(http).get("/departments")
        assert str(excinfo.value) == "Request failed with status code 500"
        assert excinfo.value.status == 500
        assert excinfo.value.method == "GET"

    def test_transport_failure(self):
        http = RecordingHttp(raises=urllib3.exceptions.ProtocolError("Connection aborted."))
        with pytest.raises(ApiError) as excinfo:
            _client(http).post("/employees", {"e_name": "Ada"})
        assert "Connection aborted." in str(excinfo.value)
        assert excinfo.value.status is None

    def test_timeout(self):
        http = RecordingHttp(
            raises=urllib3.exceptions.ReadTimeoutError(None, "/departments", "Read timed out.")
        )
        with pytest.raises(ApiError) as excinfo:
            _client(http).get("/departments")
        assert "Read timed out." in str(excinfo.value)

    def test_non_finite_body_is_refused_before_sending(self):
        http = RecordingHttp(FakeResponse(201, {}))
        with pytest.raises(ApiError) as excinfo:
            _client(http).post("/employees", {"salary": float("nan")})
        assert "not valid JSON" in str(excinfo.value)
        assert http.requests == []

    def test_invalid_json(self):
        response = FakeResponse(200)
        response.data = b"<html>"
        with pytest.raises(ApiError):
            _client(RecordingHttp(response)).get("/departments")
