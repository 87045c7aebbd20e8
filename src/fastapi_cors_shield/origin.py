"""Allowed-origin entries with `*` wildcard support."""

import re
from dataclasses import dataclass, field
from typing import Optional, Pattern

from fastapi_cors_shield.consts import WILDCARD


def origin_pattern(origin: str) -> str:
    """Translate a `*` wildcard origin into regular expression source.

    Everything except `*` is matched literally; `*` matches any run of
    characters, including an empty one.
    """
    return ".*".join(re.escape(part) for part in origin.split(WILDCARD))


@dataclass(frozen=True)
class Origin:
    """A single configured origin, stored lowercased."""

    value: str
    is_wildcard: bool = False
    regex: Optional[Pattern[str]] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_config(cls, origin: str) -> "Origin":
        value = origin.strip().lower()
        if WILDCARD not in value:
            return cls(value)
        # escaped parts joined by ".*" always compile
        regex = re.compile(origin_pattern(value))
        return cls(value, is_wildcard=True, regex=regex)

    def allows_for(self, origin: str) -> bool:
        origin = origin.lower()
        if not self.is_wildcard:
            return self.value == origin
        return self.regex.fullmatch(origin) is not None
