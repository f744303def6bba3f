"""Errors — tests for the board error hierarchy.

Tests cover:
    - Malformed and unauthorized errors share status and public code
    - Internal codes stay distinct for logging
    - to_response never includes the internal message
"""

from board.core.errors import (
    BadRequestError, DatabaseError, MalformedRequestError, UnauthorizedActionError,
)


def test_request_errors_are_indistinguishable_to_clients():
    malformed = MalformedRequestError("body did not match")
    unauthorized = UnauthorizedActionError("token mismatch")
    assert malformed.http_status == unauthorized.http_status == 400
    assert malformed.public_code == unauthorized.public_code == "BAD_REQUEST"
    assert isinstance(malformed, BadRequestError)
    assert isinstance(unauthorized, BadRequestError)


def test_internal_codes_differ():
    assert MalformedRequestError("x").code == "MALFORMED_REQUEST"
    assert UnauthorizedActionError("x").code == "UNAUTHORIZED_ACTION"


def test_to_response_hides_message():
    response = UnauthorizedActionError("token mismatch for alice").to_response()
    assert "token mismatch" not in str(response)
    assert response["error"]["code"] == "BAD_REQUEST"


def test_database_error_is_503():
    err = DatabaseError("boom", "commit")
    assert err.http_status == 503
    assert err.to_response()["error"]["code"] == "DATABASE_ERROR"
