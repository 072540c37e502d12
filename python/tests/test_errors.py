"""Tests for error handling and response envelopes.

Verifies:
- Error envelope shape is correct
- Every error code maps to correct HTTP status
- Unknown exceptions return E_INTERNAL with 500
- Malformed JSON and invalid parameters return E_INVALID_REQUEST
- Route misses return E_NOT_FOUND
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from arena.errors import (
    ERROR_CODE_TO_STATUS,
    ApiError,
    ApiErrorCode,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    StreamTimeoutError,
)
from arena.responses import (
    error_response,
    sse_error_payload,
    success_response,
    unhandled_exception_handler,
)
from tests.helpers import API


class TestErrorResponse:
    """Tests for error response envelope format."""

    def test_error_response_has_correct_shape(self):
        """Error response contains error object with code and message."""
        response = error_response(ApiErrorCode.E_NOT_FOUND, "Resource not found")

        assert response["error"]["code"] == "E_NOT_FOUND"
        assert response["error"]["message"] == "Resource not found"

    def test_error_response_code_is_string(self):
        """Error code in response is a string, not enum."""
        response = error_response(ApiErrorCode.E_TURN_ALREADY_VOTED, "Turn already voted")

        assert type(response["error"]["code"]) is str

    def test_error_response_includes_explicit_request_id(self):
        response = error_response(ApiErrorCode.E_INTERNAL, "boom", request_id="req-1")

        assert response["error"]["request_id"] == "req-1"

    def test_error_response_omits_request_id_outside_request(self):
        response = error_response(ApiErrorCode.E_INTERNAL, "boom")

        assert "request_id" not in response["error"]


class TestSseErrorPayload:
    """Tests for the in-band SSE error event payload."""

    def test_payload_uses_error_code_and_message(self):
        payload = sse_error_payload(StreamTimeoutError(), request_id="req-9")

        assert payload == {
            "error": {
                "code": "E_STREAM_TIMEOUT",
                "message": "Stream timed out",
                "request_id": "req-9",
            }
        }

    def test_payload_has_no_status_code(self):
        payload = sse_error_payload(ApiError(ApiErrorCode.E_INTERNAL, "boom"))

        assert payload == {"error": {"code": "E_INTERNAL", "message": "boom"}}


class TestSuccessResponse:
    """Tests for success response envelope format."""

    def test_success_response_has_data_key(self):
        """Success response wraps data in 'data' key."""
        response = success_response({"id": "123"})

        assert response == {"data": {"id": "123"}}

    def test_success_response_with_list(self):
        items = [{"id": "1"}, {"id": "2"}]

        assert success_response(items)["data"] == items


class TestErrorCodeToStatus:
    """Tests for error code to HTTP status mapping."""

    def test_all_error_codes_have_status_mapping(self):
        """Every ApiErrorCode has a corresponding HTTP status."""
        for code in ApiErrorCode:
            assert code in ERROR_CODE_TO_STATUS, f"Missing status mapping for {code}"

    @pytest.mark.parametrize(
        "code,status",
        [
            (ApiErrorCode.E_CONTENT_REQUIRED, 400),
            (ApiErrorCode.E_WINNER_REQUIRED, 400),
            (ApiErrorCode.E_INVALID_WINNER, 400),
            (ApiErrorCode.E_CHAT_NOT_FOUND, 404),
            (ApiErrorCode.E_TURN_NOT_FOUND, 404),
            (ApiErrorCode.E_TURN_ALREADY_VOTED, 409),
            (ApiErrorCode.E_TURN_NOT_ACCEPTING_MESSAGES, 409),
            (ApiErrorCode.E_INTERNAL, 500),
            (ApiErrorCode.E_STREAM_TIMEOUT, 504),
        ],
    )
    def test_status_for_code(self, code, status):
        assert ApiError(code, "msg").status_code == status


class TestErrorClasses:
    """Tests for the ApiError subclasses."""

    def test_not_found_defaults(self):
        err = NotFoundError()
        assert err.code == ApiErrorCode.E_NOT_FOUND
        assert err.status_code == 404

    def test_invalid_request_defaults(self):
        err = InvalidRequestError()
        assert err.code == ApiErrorCode.E_INVALID_REQUEST
        assert err.status_code == 400

    def test_conflict_carries_code(self):
        err = ConflictError(ApiErrorCode.E_TURN_ALREADY_VOTED)
        assert err.status_code == 409
        assert err.message == "Conflict"

    def test_stream_timeout(self):
        err = StreamTimeoutError()
        assert err.code == ApiErrorCode.E_STREAM_TIMEOUT
        assert err.status_code == 504


class TestUnhandledExceptions:
    """Unexpected exceptions never leak their text to clients."""

    def test_unhandled_exception_returns_internal(self):
        app = FastAPI()
        app.add_exception_handler(Exception, unhandled_exception_handler)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret database password")

        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["error"]["code"] == "E_INTERNAL"
        assert "secret" not in response.text


class TestRequestErrors:
    """Framework-level request errors use the error envelope."""

    def test_malformed_json_returns_invalid_request(self, client):
        response = client.post(
            f"{API}/chats",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_INVALID_REQUEST"

    def test_invalid_path_uuid_returns_invalid_request(self, client):
        response = client.get(f"{API}/chats/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_INVALID_REQUEST"

    def test_unknown_route_returns_not_found(self, client):
        response = client.get(f"{API}/nope")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "E_NOT_FOUND"

    def test_error_body_carries_request_id(self, client):
        response = client.get(f"{API}/nope", headers={"X-Request-ID": "trace-42"})

        assert response.json()["error"]["request_id"] == "trace-42"
