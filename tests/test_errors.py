"""Tests for CORS error types."""

import pytest
from fastapi import HTTPException

from fastapi_cors_shield.errors import (
    CORSConfigurationError,
    CORSValidationError,
    ValidationErrorKind,
    preflight_error,
)


class TestValidationErrorKind:
    """Kinds carry stable codes and messages."""

    def test_codes(self):
        """Test the numeric code of each error kind."""
        assert [kind.code for kind in ValidationErrorKind] == [100, 101, 102, 103, 104, 105]

    def test_every_kind_has_message(self):
        """Test that every error kind has a default message."""
        for kind in ValidationErrorKind:
            assert kind.default_message


class TestCORSValidationError:
    """Error rendering."""

    def test_str_includes_code(self):
        """Test that str() renders the message and code."""
        error = CORSValidationError(
            ValidationErrorKind.ORIGIN_NOT_ALLOWED, "this is a validation error"
        )
        assert str(error) == "this is a validation error [101]"

    def test_default_message(self):
        """Test that the default message is used when none is given."""
        error = preflight_error(ValidationErrorKind.METHOD_MISSING)
        assert error.message == ValidationErrorKind.METHOD_MISSING.default_message
        assert error.cause is None

    def test_cause_is_chained(self):
        """Test that the cause is kept on the error."""
        cause = RuntimeError("boom")
        error = CORSValidationError(ValidationErrorKind.CONFIGURATION_INVALID, cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["error"] == "boom"

    def test_to_dict(self):
        """Test the JSON body representation."""
        error = preflight_error(ValidationErrorKind.HEADERS_NOT_ALLOWED)
        assert error.to_dict() == {
            "code": 103,
            "kind": "headers_not_allowed",
            "message": "one or more headers were not whitelisted",
        }

    @pytest.mark.parametrize(
        "kind, status_code",
        [
            (ValidationErrorKind.ORIGIN_NOT_ALLOWED, 403),
            (ValidationErrorKind.METHOD_NOT_ALLOWED, 405),
            (ValidationErrorKind.HEADERS_NOT_ALLOWED, 400),
            (ValidationErrorKind.METHOD_MISSING, 400),
            (ValidationErrorKind.METHOD_INVALID, 400),
            (ValidationErrorKind.CONFIGURATION_INVALID, 500),
        ],
    )
    def test_to_http_exception(self, kind, status_code):
        """Test the HTTP status mapping for each kind."""
        exc = preflight_error(kind).to_http_exception(headers={"Vary": "Origin"})
        assert isinstance(exc, HTTPException)
        assert exc.status_code == status_code
        assert exc.detail == kind.default_message
        assert exc.headers == {"Vary": "Origin"}


class TestCORSConfigurationError:
    """Configuration errors are both CORS errors and ValueErrors."""

    def test_kind_and_hierarchy(self):
        """Test that configuration errors are also value errors."""
        error = CORSConfigurationError("bad options")
        assert error.kind == ValidationErrorKind.CONFIGURATION_INVALID
        assert isinstance(error, CORSValidationError)
        assert isinstance(error, ValueError)
        assert str(error) == "bad options [100]"
