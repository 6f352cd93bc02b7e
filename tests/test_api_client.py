"""Tests for the North API client contract."""

import json

import pytest
import requests

from services.api import ApiClient, ApiError
from services.config_manager import NorthConfig

from .conftest import BASE_URL, make_response


class TestApiClient:

    @pytest.fixture
    def client(self, config, session):
        return ApiClient(config, session=session)

    def test_get_builds_url_and_headers(self, client, session):
        session.request.return_value = make_response(200, [{"id": "m1"}])

        result = client.get("/measures")

        assert result == [{"id": "m1"}]
        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == "GET"
        assert url == f"{BASE_URL}/measures"
        assert kwargs["data"] is None
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["headers"]["Cache-Control"] == "no-store"

    def test_post_serializes_body(self, client, session):
        body = {"code": "GRAM", "translations": []}
        session.request.return_value = make_response(201, {"id": "m1", **body})

        result = client.post("/measures", body)

        assert result["id"] == "m1"
        assert json.loads(session.request.call_args.kwargs["data"]) == body

    def test_extra_headers_override_defaults(self, client, session):
        session.request.return_value = make_response(200, {})

        client.put("/measures/m1", {}, headers={"X-Trace": "abc", "Accept": "text/plain"})

        headers = session.request.call_args.kwargs["headers"]
        assert headers["X-Trace"] == "abc"
        assert headers["Accept"] == "text/plain"

    def test_no_content_returns_none(self, client, session):
        resp = make_response(204)
        session.request.return_value = resp

        assert client.delete("/measures/m1") is None
        resp.json.assert_not_called()

    def test_error_uses_message_from_body(self, client, session):
        session.request.return_value = make_response(404, {"message": "Measure not found"})

        with pytest.raises(ApiError) as exc_info:
            client.get("/measures/missing")

        err = exc_info.value
        assert err.status == 404
        assert err.message == "Measure not found"
        assert str(err) == "Measure not found"
        assert err.data == {"message": "Measure not found"}

    def test_error_without_message(self, client, session):
        session.request.return_value = make_response(500, {"detail": "boom"})

        with pytest.raises(ApiError) as exc_info:
            client.get("/products")

        assert exc_info.value.status == 500
        assert exc_info.value.message == "HTTP error! status: 500"
        assert exc_info.value.data == {"detail": "boom"}

    def test_error_with_non_json_body_keeps_status(self, client, session):
        session.request.return_value = make_response(502, json_error=True)

        with pytest.raises(ApiError) as exc_info:
            client.get("/products")

        assert exc_info.value.status == 502
        assert exc_info.value.data is None

    def test_network_failure_has_status_zero(self, client, session):
        session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(ApiError) as exc_info:
            client.get("/measures")

        assert exc_info.value.status == 0
        assert "Failed to connect to North API" in exc_info.value.message
        assert "connection refused" in exc_info.value.message

    def test_undecodable_success_body_has_status_zero(self, client, session):
        session.request.return_value = make_response(200, json_error=True)

        with pytest.raises(ApiError) as exc_info:
            client.get("/measures")

        assert exc_info.value.status == 0

    def test_base_url_and_timeout_from_config(self, session):
        session.request.return_value = make_response(200, [])
        client = ApiClient(NorthConfig(base_url="http://north.test/", timeout=5.0), session=session)

        client.get("measures")

        assert session.request.call_args.args[1] == "http://north.test/measures"
        assert session.request.call_args.kwargs["timeout"] == 5.0
