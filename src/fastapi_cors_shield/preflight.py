"""The CORS preflight state machine.

`run_preflight` runs the preflight checks in a fixed order and stops at the
first failure. Response headers are written as each check passes, so a
failed preflight may leave some headers (always `Vary`) in the sink.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional, Protocol

from fastapi_cors_shield.consts import (
    HEADER_ALLOW_CREDENTIALS,
    HEADER_ALLOW_HEADERS,
    HEADER_ALLOW_METHODS,
    HEADER_ALLOW_ORIGIN,
    HEADER_EXPOSE_HEADERS,
    HEADER_MAX_AGE,
    HEADER_ORIGIN,
    HEADER_REQUEST_HEADERS,
    HEADER_REQUEST_METHOD,
    HEADER_VARY,
    METHOD_OPTIONS,
    PREFLIGHT_VARY_HEADERS,
    WILDCARD,
)
from fastapi_cors_shield.errors import (
    CORSValidationError,
    ValidationErrorKind,
    preflight_error,
)
from fastapi_cors_shield.policy import CORSPolicy, canonical_header_key


class RequestView(Protocol):
    """The parts of an HTTP request the preflight engine reads."""

    method: str
    headers: Mapping[str, str]


@dataclass
class PreflightResponse:
    """Outcome of a single preflight evaluation."""

    error: Optional[CORSValidationError] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def code(self) -> int:
        return self.error.code if self.error is not None else 0

    @property
    def kind(self) -> Optional[ValidationErrorKind]:
        return self.error.kind if self.error is not None else None


PreflightHandler = Callable[[PreflightResponse], Any]


def get_request_header(headers: Mapping[str, str], name: str) -> str:
    """Read a request header, matching the name case-insensitively for plain dicts."""
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    if value is None:
        wanted = name.lower()
        for key, item in headers.items():
            if key.lower() == wanted:
                value = item
                break
    return value or ""


def clean_header_value(value: str) -> List[str]:
    """Split an `Access-Control-Request-Headers` value into canonical names."""
    headers = []
    for item in value.split(","):
        item = item.strip()
        if item:
            headers.append(canonical_header_key(item))
    return headers


def append_vary(headers: MutableMapping[str, str], values: List[str]) -> str:
    """Add `values` to the `Vary` header without duplicating existing entries."""
    existing = headers.get(HEADER_VARY) or ""
    vary = [item.strip() for item in existing.split(",") if item.strip()]
    present = {item.lower() for item in vary}
    for value in values:
        if value.lower() not in present:
            vary.append(value)
            present.add(value.lower())
    headers[HEADER_VARY] = ", ".join(vary)
    return headers[HEADER_VARY]


def run_preflight(
    policy: CORSPolicy,
    request: RequestView,
    response_headers: Optional[MutableMapping[str, str]] = None,
    handler: Optional[PreflightHandler] = None,
) -> PreflightResponse:
    """Validate a preflight request against `policy`.

    Args:
        policy: The compiled policy
        request: The request to validate
        response_headers: Where response headers are written; a new dict
            is used when omitted
        handler: Called exactly once with the result, success or failure

    Returns:
        PreflightResponse: The result; `error` is `None` on success
    """
    sink: MutableMapping[str, str] = {} if response_headers is None else response_headers
    response = PreflightResponse()

    def set_header(name: str, value: str) -> None:
        sink[name] = value
        response.headers[name] = value

    def finish(kind: Optional[ValidationErrorKind] = None) -> PreflightResponse:
        if kind is not None:
            response.error = preflight_error(kind)
        if handler is not None:
            handler(response)
        return response

    # method tokens are case-sensitive
    if request.method != METHOD_OPTIONS:
        return finish(ValidationErrorKind.METHOD_INVALID)

    # keep caches from serving one origin's answer to another
    response.headers[HEADER_VARY] = append_vary(sink, list(PREFLIGHT_VARY_HEADERS))

    request_headers = request.headers
    origin = get_request_header(request_headers, HEADER_ORIGIN)
    if policy.allow_all_origins:
        set_header(HEADER_ALLOW_ORIGIN, WILDCARD)
    elif origin and policy.allows_origin(origin):
        set_header(HEADER_ALLOW_ORIGIN, origin)
    else:
        return finish(ValidationErrorKind.ORIGIN_NOT_ALLOWED)

    method = get_request_header(request_headers, HEADER_REQUEST_METHOD).strip()
    if not method:
        return finish(ValidationErrorKind.METHOD_MISSING)
    method = method.upper()
    if method != METHOD_OPTIONS and method not in policy.allowed_methods:
        return finish(ValidationErrorKind.METHOD_NOT_ALLOWED)
    set_header(HEADER_ALLOW_METHODS, method)

    requested_headers = clean_header_value(
        get_request_header(request_headers, HEADER_REQUEST_HEADERS)
    )
    if not policy.allow_all_headers:
        if any(header not in policy.allowed_headers for header in requested_headers):
            return finish(ValidationErrorKind.HEADERS_NOT_ALLOWED)
    if requested_headers:
        set_header(HEADER_ALLOW_HEADERS, ", ".join(requested_headers))

    if policy.exposed_headers:
        set_header(HEADER_EXPOSE_HEADERS, ", ".join(policy.exposed_headers))

    if policy.max_age > 0:
        set_header(HEADER_MAX_AGE, str(policy.max_age))

    if policy.allow_credentials:
        set_header(HEADER_ALLOW_CREDENTIALS, "true")

    return finish()
