"""Exact and pattern value matchers."""

import re
from dataclasses import dataclass, field
from typing import Optional, Pattern

from fastapi_cors_shield.errors import CORSConfigurationError


@dataclass(frozen=True)
class Match:
    """An exact value or regular expression matcher.

    Wildcard matchers compile `value` once and only accept candidates that the
    pattern matches in full, so `https://trusted\\.com` never accepts
    `https://trusted.com.evil.net`.
    """

    value: str
    is_wildcard: bool = False
    regex: Optional[Pattern[str]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.is_wildcard:
            return
        try:
            compiled = re.compile(self.value)
        except re.error as e:
            raise CORSConfigurationError(
                f"invalid wildcard pattern {self.value!r}: {e}", cause=e
            ) from e
        object.__setattr__(self, "regex", compiled)

    def matches(self, candidate: str) -> bool:
        if not self.is_wildcard:
            return self.value == candidate
        return self.regex.fullmatch(candidate) is not None


def exact_match(value: str) -> Match:
    return Match(value)


def wildcard_match(pattern: str) -> Match:
    return Match(pattern, is_wildcard=True)


# short aliases
em = exact_match
wc = wildcard_match
