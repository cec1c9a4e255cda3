# =============================================================================
# tests/test_errors.py - Error Taxonomy and Classification Tests
# =============================================================================
# Unit tests for core/models/errors.py and app/exceptions.classify().
# Classification is tested directly, without a running app.
# =============================================================================

import json
import logging

import pytest
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.context import RequestContext
from app.exceptions import (
    DEFAULT_ERROR_MESSAGE,
    ApiError,
    classify,
    error_response,
    not_found_error,
    parse_validation_error_message,
)
from core.models.errors import (
    CODE_TO_STATUS,
    ErrorCode,
    ErrorResponse,
    code_to_status,
    error_schema_for,
    status_to_code,
)

CONTEXT = RequestContext(request_id="req_1234", method="GET", path="/api/things")


# =============================================================================
# Code <-> Status Tables
# =============================================================================

class TestCodeToStatus:
    """code_to_status is total and matches the published table."""

    @pytest.mark.parametrize("code, status", [
        (ErrorCode.BAD_REQUEST, 400),
        (ErrorCode.FORBIDDEN, 403),
        (ErrorCode.DISABLED, 403),
        (ErrorCode.UNAUTHORIZED, 403),
        (ErrorCode.INSUFFICIENT_PERMISSIONS, 403),
        (ErrorCode.USAGE_EXCEEDED, 403),
        (ErrorCode.EXPIRED, 403),
        (ErrorCode.NOT_FOUND, 404),
        (ErrorCode.METHOD_NOT_ALLOWED, 405),
        (ErrorCode.NOT_UNIQUE, 409),
        (ErrorCode.DELETE_PROTECTED, 412),
        (ErrorCode.PRECONDITION_FAILED, 412),
        (ErrorCode.RATE_LIMITED, 429),
        (ErrorCode.INTERNAL_SERVER_ERROR, 500),
    ])
    def test_table(self, code, status):
        assert code_to_status(code) == status

    def test_covers_all_fourteen_codes(self):
        assert len(ErrorCode) == 14
        assert set(CODE_TO_STATUS) == set(ErrorCode)

    def test_accepts_raw_strings(self):
        assert code_to_status("RATE_LIMITED") == 429

    def test_unknown_code_is_500(self):
        assert code_to_status("TEAPOT") == 500


class TestStatusToCode:
    """status_to_code is exact for five statuses and INTERNAL_SERVER_ERROR otherwise."""

    @pytest.mark.parametrize("status, code", [
        (400, ErrorCode.BAD_REQUEST),
        (401, ErrorCode.UNAUTHORIZED),
        (403, ErrorCode.FORBIDDEN),
        (404, ErrorCode.NOT_FOUND),
        (405, ErrorCode.METHOD_NOT_ALLOWED),
    ])
    def test_exact_statuses(self, status, code):
        assert status_to_code(status) == code

    @pytest.mark.parametrize("status", [409, 412, 418, 429, 500, 502, 200])
    def test_other_statuses(self, status):
        assert status_to_code(status) == ErrorCode.INTERNAL_SERVER_ERROR

    def test_round_trip_is_lossy(self):
        """DISABLED shares 403 with FORBIDDEN, so it comes back as FORBIDDEN."""
        assert status_to_code(code_to_status(ErrorCode.DISABLED)) == ErrorCode.FORBIDDEN


# =============================================================================
# ApiError
# =============================================================================

class TestApiError:

    def test_status_derived_from_code(self):
        err = ApiError(ErrorCode.NOT_UNIQUE, "Slug already taken")

        assert err.status_code == 409
        assert err.code == ErrorCode.NOT_UNIQUE
        assert err.message == "Slug already taken"
        assert str(err) == "[NOT_UNIQUE] Slug already taken"

    def test_accepts_string_code(self):
        assert ApiError("EXPIRED", "Link expired").status_code == 403

    def test_not_found_error_mentions_path(self):
        err = not_found_error("/api/nope")

        assert err.code == ErrorCode.NOT_FOUND
        assert err.message == "The requested resource /api/nope was not found"


# =============================================================================
# classify()
# =============================================================================

class TestClassify:

    def test_api_error(self):
        """RATE_LIMITED maps to 429 and carries the context request id."""
        status, body = classify(ApiError(ErrorCode.RATE_LIMITED, "too many requests"), CONTEXT)

        assert status == 429
        assert body.to_dict() == {
            "code": "RATE_LIMITED",
            "message": "too many requests",
            "requestId": "req_1234",
        }

    def test_framework_http_exception(self):
        status, body = classify(StarletteHTTPException(status_code=401, detail="Missing token"), CONTEXT)

        assert status == 401
        assert body.code == ErrorCode.UNAUTHORIZED
        assert body.message == "Missing token"

    def test_framework_exception_with_unmapped_status_keeps_status(self):
        status, body = classify(StarletteHTTPException(status_code=418, detail="teapot"), CONTEXT)

        assert status == 418
        assert body.code == ErrorCode.INTERNAL_SERVER_ERROR

    def test_structured_detail_is_json(self):
        status, body = classify(
            StarletteHTTPException(status_code=400, detail={"field": "x", "errors": [1, 2]}),
            CONTEXT,
        )

        assert status == 400
        assert json.loads(body.message) == {"field": "x", "errors": [1, 2]}
        assert body.message == '{"field": "x", "errors": [1, 2]}'

    def test_unknown_exception(self):
        status, body = classify(ValueError("bad things"), CONTEXT)

        assert status == 500
        assert body.code == ErrorCode.INTERNAL_SERVER_ERROR
        assert body.message == "bad things"
        assert body.request_id == "req_1234"

    def test_unknown_exception_without_message(self):
        _, body = classify(RuntimeError(), CONTEXT)

        assert body.message == DEFAULT_ERROR_MESSAGE

    def test_validation_error(self):
        """Only the first issue is reported, with the body prefix dropped."""
        exc = RequestValidationError([
            {"type": "invalid_email", "loc": ("body", "email"), "msg": "Invalid email", "input": "x"},
            {"type": "missing", "loc": ("body", "name"), "msg": "Field required", "input": None},
        ])

        status, body = classify(exc, CONTEXT)

        assert status == 400
        assert body.to_dict() == {
            "code": "BAD_REQUEST",
            "message": "email: Invalid email",
            "requestId": "req_1234",
        }

    def test_missing_request_id_is_empty_string(self):
        _, body = classify(ApiError(ErrorCode.FORBIDDEN, "no"), RequestContext())

        assert body.to_dict()["requestId"] == ""

    def test_server_errors_are_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="app.exceptions"):
            classify(ApiError(ErrorCode.INTERNAL_SERVER_ERROR, "db down"), CONTEXT)

        assert any("req_1234" in r.getMessage() for r in caplog.records)

    def test_client_errors_are_not_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="app.exceptions"):
            classify(ApiError(ErrorCode.NOT_FOUND, "missing"), CONTEXT)

        assert caplog.records == []


# =============================================================================
# Validation Message Extraction
# =============================================================================

class TestParseValidationErrorMessage:

    def test_nested_path(self):
        exc = RequestValidationError([
            {"type": "value_error", "loc": ("body", "files", 0), "msg": "File type is not allowed", "input": None},
        ])

        assert parse_validation_error_message(exc) == "files.0: File type is not allowed"

    def test_query_location_dropped(self):
        exc = RequestValidationError([
            {"type": "greater_than_equal", "loc": ("query", "perPage"), "msg": "too small", "input": "0"},
        ])

        assert parse_validation_error_message(exc) == "perPage: too small"

    def test_lone_location_kept(self):
        exc = RequestValidationError([
            {"type": "missing", "loc": ("body",), "msg": "Field required", "input": None},
        ])

        assert parse_validation_error_message(exc) == "body: Field required"

    def test_empty_issue_list_falls_back_to_raw_text(self):
        exc = RequestValidationError([])

        assert parse_validation_error_message(exc) == str(exc)

    def test_malformed_issue_falls_back_to_raw_text(self):
        exc = RequestValidationError([{"msg": "no location"}])

        assert parse_validation_error_message(exc) == str(exc)


# =============================================================================
# Response Helpers and Schemas
# =============================================================================

class TestErrorResponseHelpers:

    def test_error_response(self):
        response = error_response(CONTEXT, ErrorCode.DELETE_PROTECTED, "Cannot delete")

        assert response.status_code == 412
        assert json.loads(response.body) == {
            "code": "DELETE_PROTECTED",
            "message": "Cannot delete",
            "requestId": "req_1234",
        }

    def test_error_response_model_accepts_wire_names(self):
        body = ErrorResponse.model_validate({"code": "NOT_FOUND", "message": "x", "requestId": "r"})

        assert body.request_id == "r"

    def test_error_schema_for_limits_codes(self):
        schema = error_schema_for(ErrorCode.NOT_FOUND, ErrorCode.EXPIRED)

        schema.model_validate({"code": "EXPIRED", "message": "x", "requestId": "r"})
        with pytest.raises(ValidationError):
            schema.model_validate({"code": "FORBIDDEN", "message": "x", "requestId": "r"})

    def test_error_schema_for_is_cached(self):
        assert error_schema_for(ErrorCode.BAD_REQUEST) is error_schema_for(ErrorCode.BAD_REQUEST)

    def test_error_schema_for_needs_codes(self):
        with pytest.raises(ValueError):
            error_schema_for()
