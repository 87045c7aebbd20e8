"""Compilation of `CORSOptions` into an immutable `CORSPolicy`.

The compiled policy holds pre-normalized data only (lowercased origins,
uppercased methods, canonical header names) so that evaluating a request does
no configuration work. A policy is never mutated after `compile_policy`
returns it and can be shared freely between concurrent requests.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Tuple

from fastapi_cors_shield.consts import (
    DEFAULT_ALLOWED_HEADERS,
    DEFAULT_EXPOSE_HEADERS,
    SPEC_SIMPLE_METHODS,
    WILDCARD,
)
from fastapi_cors_shield.errors import CORSConfigurationError
from fastapi_cors_shield.options import CORSOptions
from fastapi_cors_shield.origin import Origin

logger = logging.getLogger(__name__)

_TOKEN_CHARS = frozenset(
    "!#$%&'*+-.^_`|~0123456789"
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


def canonical_header_key(name: str) -> str:
    """Return the canonical form of a header name.

    The first letter and every letter following a hyphen are upper cased, the
    rest lower cased: `x-requested-with` becomes `X-Requested-With`. Names that
    are not valid header tokens are returned unchanged.
    """
    if not name or any(char not in _TOKEN_CHARS for char in name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


@dataclass(frozen=True)
class PolicyDefaults:
    """Fallback tables used when a list option is left empty."""

    simple_methods: Tuple[str, ...] = SPEC_SIMPLE_METHODS
    allowed_headers: Tuple[str, ...] = DEFAULT_ALLOWED_HEADERS
    exposed_headers: Tuple[str, ...] = DEFAULT_EXPOSE_HEADERS


DEFAULT_POLICY_DEFAULTS = PolicyDefaults()


@dataclass(frozen=True)
class CORSPolicy:
    """The normalized, ready to evaluate form of `CORSOptions`."""

    allow_all_origins: bool
    origins: Tuple[Origin, ...]
    allowed_methods: FrozenSet[str]
    allow_all_headers: bool
    allowed_headers: FrozenSet[str]
    exposed_headers: Tuple[str, ...]
    max_age: int = 0
    allow_credentials: bool = False

    def allows_origin(self, origin: str) -> bool:
        if self.allow_all_origins:
            return True
        origin = origin.lower()
        return any(entry.allows_for(origin) for entry in self.origins)


def _compile_origins(allowed_origins: List[str]) -> Tuple[bool, Tuple[Origin, ...]]:
    values = [value.strip() for value in allowed_origins if value.strip()]
    # no configured origins means every origin is allowed, not none
    if not values:
        return True, ()
    origins = []
    for value in values:
        if value == WILDCARD:
            return True, ()
        origins.append(Origin.from_config(value))
    return False, tuple(origins)


def _compile_methods(allowed_methods: List[str], defaults: PolicyDefaults) -> FrozenSet[str]:
    methods = [method.strip().upper() for method in allowed_methods if method.strip()]
    if not methods:
        return frozenset(defaults.simple_methods)
    return frozenset(methods)


def _canonical_headers(headers: Iterable[str]) -> List[str]:
    return [canonical_header_key(header.strip()) for header in headers if header.strip()]


def _compile_headers(
    allowed_headers: List[str], defaults: PolicyDefaults
) -> Tuple[bool, FrozenSet[str]]:
    headers = _canonical_headers(allowed_headers)
    if not headers:
        return False, frozenset(_canonical_headers(defaults.allowed_headers))
    if WILDCARD in headers:
        return True, frozenset()
    return False, frozenset(headers)


def _compile_exposed_headers(
    exposed_headers: List[str], defaults: PolicyDefaults
) -> Tuple[str, ...]:
    headers = _canonical_headers(exposed_headers) or _canonical_headers(defaults.exposed_headers)
    # keep the configured order, drop repeats
    return tuple(dict.fromkeys(headers))


def compile_policy(
    options: CORSOptions, defaults: PolicyDefaults = DEFAULT_POLICY_DEFAULTS
) -> CORSPolicy:
    """Validate `options` and build the policy used to evaluate requests.

    Args:
        options: The raw CORS options
        defaults: Fallback tables for empty method / header lists

    Returns:
        CORSPolicy: The compiled policy

    Raises:
        CORSConfigurationError: If a wildcard origin cannot be compiled, the
            max age is negative, or credentials are combined with wildcard
            origins or headers.
    """
    allow_all_origins, origins = _compile_origins(options.allowed_origins)
    allowed_methods = _compile_methods(options.allowed_methods, defaults)
    allow_all_headers, allowed_headers = _compile_headers(options.allowed_headers, defaults)
    exposed_headers = _compile_exposed_headers(options.exposed_headers, defaults)

    if options.max_age < 0:
        raise CORSConfigurationError(f"max age must not be negative, got {options.max_age}")

    if options.allow_credentials and (allow_all_origins or allow_all_headers):
        raise CORSConfigurationError(
            "credentials cannot be allowed together with wildcard origins or headers"
        )

    policy = CORSPolicy(
        allow_all_origins=allow_all_origins,
        origins=origins,
        allowed_methods=allowed_methods,
        allow_all_headers=allow_all_headers,
        allowed_headers=allowed_headers,
        exposed_headers=exposed_headers,
        max_age=options.max_age,
        allow_credentials=options.allow_credentials,
    )
    logger.debug(
        f"Compiled CORS policy: all_origins={allow_all_origins}, "
        f"origins={len(origins)}, methods={sorted(allowed_methods)}, "
        f"all_headers={allow_all_headers}, credentials={options.allow_credentials}"
    )
    return policy
