"""Error types for CORS configuration and preflight validation.

Every failure the library reports is a `CORSValidationError` tagged with a
`ValidationErrorKind`. Configuration problems are raised when options are
compiled; preflight failures are returned to the caller, who decides how to
render them (see `CORSValidationError.to_http_exception`).
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class ValidationErrorKind(str, Enum):
    """Classification of CORS failures."""
    CONFIGURATION_INVALID = "configuration_invalid"
    ORIGIN_NOT_ALLOWED = "origin_not_allowed"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    HEADERS_NOT_ALLOWED = "headers_not_allowed"
    METHOD_MISSING = "method_missing"
    METHOD_INVALID = "method_invalid"

    @property
    def code(self) -> int:
        return _ERROR_CODES[self]

    @property
    def default_message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_CODES: Dict[ValidationErrorKind, int] = {
    ValidationErrorKind.CONFIGURATION_INVALID: 100,
    ValidationErrorKind.ORIGIN_NOT_ALLOWED: 101,
    ValidationErrorKind.METHOD_NOT_ALLOWED: 102,
    ValidationErrorKind.HEADERS_NOT_ALLOWED: 103,
    ValidationErrorKind.METHOD_MISSING: 104,
    ValidationErrorKind.METHOD_INVALID: 105,
}

_ERROR_MESSAGES: Dict[ValidationErrorKind, str] = {
    ValidationErrorKind.CONFIGURATION_INVALID: "one or more options were invalid",
    ValidationErrorKind.ORIGIN_NOT_ALLOWED: "the requested origin was not whitelisted",
    ValidationErrorKind.METHOD_NOT_ALLOWED: "the requested method was not whitelisted",
    ValidationErrorKind.HEADERS_NOT_ALLOWED: "one or more headers were not whitelisted",
    ValidationErrorKind.METHOD_MISSING: "no http method was provided for validation",
    ValidationErrorKind.METHOD_INVALID: (
        "a CORS preflight must be sent using the OPTIONS http method"
    ),
}

_HTTP_STATUS: Dict[ValidationErrorKind, int] = {
    ValidationErrorKind.CONFIGURATION_INVALID: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValidationErrorKind.ORIGIN_NOT_ALLOWED: status.HTTP_403_FORBIDDEN,
    ValidationErrorKind.METHOD_NOT_ALLOWED: status.HTTP_405_METHOD_NOT_ALLOWED,
    ValidationErrorKind.HEADERS_NOT_ALLOWED: status.HTTP_400_BAD_REQUEST,
    ValidationErrorKind.METHOD_MISSING: status.HTTP_400_BAD_REQUEST,
    ValidationErrorKind.METHOD_INVALID: status.HTTP_400_BAD_REQUEST,
}


class CORSValidationError(Exception):
    """A CORS configuration or validation failure.

    Args:
        kind: The failure classification
        message: Human readable explanation; defaults to the kind's message
        cause: The underlying error, if any
    """

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.kind = ValidationErrorKind(kind)
        self.message = message or self.kind.default_message
        self.cause = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def code(self) -> int:
        return self.kind.code

    @property
    def status_code(self) -> int:
        return _HTTP_STATUS[self.kind]

    def __str__(self) -> str:
        return f"{self.message} [{self.code}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "code": self.code,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.cause is not None:
            data["error"] = str(self.cause)
        return data

    def to_http_exception(self, headers: Optional[Dict[str, str]] = None) -> HTTPException:
        """Render the failure as an `HTTPException` for FastAPI handlers."""
        return HTTPException(
            status_code=self.status_code,
            detail=self.message,
            headers=headers,
        )


class CORSConfigurationError(CORSValidationError, ValueError):
    """Raised when options cannot be compiled into a policy."""

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(ValidationErrorKind.CONFIGURATION_INVALID, message, cause)


def preflight_error(kind: ValidationErrorKind) -> CORSValidationError:
    return CORSValidationError(kind)
