"""The `CORS` manager.

A `CORS` instance wraps one compiled `CORSPolicy` and exposes every
validation entry point of the library: the individual origin / method /
header checks, the preflight engine and the headers for actual (non
preflight) cross-origin responses.

Usage:
    ```python
    from fastapi_cors_shield import CORSOptions, default_headers_with

    cors = CORSOptions(
        allowed_origins=["http*://*.example.com"],
        allowed_headers=default_headers_with("Authorization"),
    ).new_cors()

    result = cors.do_preflight(request, response.headers)
    if result.has_error:
        raise result.error.to_http_exception()
    ```
"""

from typing import Dict, Iterable, MutableMapping, Optional

from fastapi_cors_shield.consts import (
    HEADER_ALLOW_CREDENTIALS,
    HEADER_ALLOW_ORIGIN,
    HEADER_EXPOSE_HEADERS,
    HEADER_ORIGIN,
    HEADER_VARY,
    METHOD_OPTIONS,
    WILDCARD,
)
from fastapi_cors_shield.options import CORSOptions, options_allow_all
from fastapi_cors_shield.policy import (
    DEFAULT_POLICY_DEFAULTS,
    CORSPolicy,
    PolicyDefaults,
    canonical_header_key,
    compile_policy,
)
from fastapi_cors_shield.preflight import (
    PreflightHandler,
    PreflightResponse,
    RequestView,
    run_preflight,
)


class CORS:
    """Validates requests against a compiled CORS policy.

    Instances hold no mutable state and are safe to share between
    concurrently handled requests.
    """

    __slots__ = ("options", "policy")

    def __init__(self, policy: CORSPolicy, options: Optional[CORSOptions] = None):
        self.policy = policy
        self.options = options

    @classmethod
    def from_options(
        cls,
        options: CORSOptions,
        defaults: PolicyDefaults = DEFAULT_POLICY_DEFAULTS,
    ) -> "CORS":
        return cls(compile_policy(options, defaults), options=options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(policy={self.policy!r})"

    def is_origin_allowed(self, origin: str) -> bool:
        return self.policy.allows_origin(origin)

    def is_method_allowed(self, method: str) -> bool:
        """OPTIONS is always allowed since it carries the preflight itself."""
        method = method.upper()
        return method == METHOD_OPTIONS or method in self.policy.allowed_methods

    def are_headers_allowed(self, headers: Iterable[str]) -> bool:
        if self.policy.allow_all_headers:
            return True
        return all(
            canonical_header_key(header) in self.policy.allowed_headers
            for header in headers
        )

    def do_preflight(
        self,
        request: RequestView,
        response_headers: Optional[MutableMapping[str, str]] = None,
        handler: Optional[PreflightHandler] = None,
    ) -> PreflightResponse:
        return run_preflight(self.policy, request, response_headers, handler)

    def simple_response_headers(self, origin: Optional[str]) -> Dict[str, str]:
        """Headers for an actual cross-origin response from `origin`.

        Returns an empty dict when the origin is missing or not allowed.
        """
        if not origin or not self.is_origin_allowed(origin):
            return {}
        headers: Dict[str, str] = {}
        if self.policy.allow_all_origins:
            headers[HEADER_ALLOW_ORIGIN] = WILDCARD
        else:
            headers[HEADER_ALLOW_ORIGIN] = origin
            headers[HEADER_VARY] = HEADER_ORIGIN
        if self.policy.exposed_headers:
            headers[HEADER_EXPOSE_HEADERS] = ", ".join(self.policy.exposed_headers)
        if self.policy.allow_credentials:
            headers[HEADER_ALLOW_CREDENTIALS] = "true"
        return headers


def allow_all() -> CORS:
    """A `CORS` instance allowing all origins, common methods and default headers."""
    return options_allow_all().new_cors()
