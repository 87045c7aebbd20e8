"""FastAPI CORS Shield - strict CORS preflight validation for FastAPI.

FastAPI CORS Shield compiles CORS options into an immutable policy and
validates preflight requests against it with a fixed, ordered sequence of
checks, producing either the exact response headers the CORS protocol needs
or a typed validation failure.

Key Components:
    - CORSOptions: The user facing configuration model
    - CORS: Validates requests against a compiled policy
    - CORSPreflightMiddleware: ASGI middleware answering preflights

Usage:
    ```python
    from fastapi import FastAPI
    from fastapi_cors_shield import CORSOptions, install_cors

    app = FastAPI()
    install_cors(
        app,
        CORSOptions(
            allowed_origins=["https://app.example.com", "http*://*.example.com"],
            allowed_methods=["GET", "POST", "DELETE"],
            allow_credentials=True,
            max_age=600,
        ),
    )
    ```
"""

from fastapi_cors_shield.config import load_options, options_from_env
from fastapi_cors_shield.cors import CORS, allow_all
from fastapi_cors_shield.errors import (
    CORSConfigurationError,
    CORSValidationError,
    ValidationErrorKind,
)
from fastapi_cors_shield.match import Match, em, exact_match, wc, wildcard_match
from fastapi_cors_shield.middleware import CORSPreflightMiddleware, install_cors
from fastapi_cors_shield.options import (
    CORSOptions,
    default_headers_with,
    options_allow_all,
)
from fastapi_cors_shield.origin import Origin
from fastapi_cors_shield.policy import (
    DEFAULT_POLICY_DEFAULTS,
    CORSPolicy,
    PolicyDefaults,
    canonical_header_key,
    compile_policy,
)
from fastapi_cors_shield.preflight import PreflightResponse, run_preflight

__version__ = "0.1.0"

__all__ = [
    "CORS",
    "CORSOptions",
    "CORSPolicy",
    "CORSPreflightMiddleware",
    "CORSConfigurationError",
    "CORSValidationError",
    "DEFAULT_POLICY_DEFAULTS",
    "Match",
    "Origin",
    "PolicyDefaults",
    "PreflightResponse",
    "ValidationErrorKind",
    "allow_all",
    "canonical_header_key",
    "compile_policy",
    "default_headers_with",
    "em",
    "exact_match",
    "install_cors",
    "load_options",
    "options_allow_all",
    "options_from_env",
    "run_preflight",
    "wc",
    "wildcard_match",
]
