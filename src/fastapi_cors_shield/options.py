"""User facing CORS options.

`CORSOptions` is the raw, unvalidated-by-policy configuration. It accepts both
snake_case field names and the wire names used by configuration files
(`AllowedOrigins`, `AllowedMethods`, ...). Compile it with `new_cors()` (or
`fastapi_cors_shield.policy.compile_policy`) before evaluating requests.
"""

from typing import TYPE_CHECKING, Any, List

from pydantic import BaseModel, Field, field_validator

from fastapi_cors_shield.consts import (
    ALL_COMMON_METHODS,
    ALLOW_ALL_ORIGINS,
    DEFAULT_ALLOWED_HEADERS,
)

if TYPE_CHECKING:
    from fastapi_cors_shield.cors import CORS


class CORSOptions(BaseModel):
    """Configurable elements of the CORS validation process.

    Empty `allowed_origins` allows every origin, empty `allowed_methods` falls
    back to the simple methods and empty `allowed_headers` falls back to a
    default header set. A `"*"` entry in `allowed_origins` or
    `allowed_headers` allows everything for that list.

    `allow_credentials` cannot be combined with wildcard origins or headers;
    compiling such options raises `CORSConfigurationError`.
    """

    allowed_origins: List[str] = Field(default_factory=list, alias="AllowedOrigins")
    allowed_methods: List[str] = Field(default_factory=list, alias="AllowedMethods")
    allowed_headers: List[str] = Field(default_factory=list, alias="AllowedHeaders")
    exposed_headers: List[str] = Field(default_factory=list, alias="ExposedHeaders")
    max_age: int = Field(0, alias="MaxAge")
    allow_credentials: bool = Field(False, alias="AllowCredentials")

    model_config = {"populate_by_name": True}

    @field_validator(
        "allowed_origins",
        "allowed_methods",
        "allowed_headers",
        "exposed_headers",
        mode="before",
    )
    @classmethod
    def split_comma_separated(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    def new_cors(self) -> "CORS":
        """Compile these options into a ready to use `CORS` instance."""
        from fastapi_cors_shield.cors import CORS

        return CORS.from_options(self)


def options_allow_all() -> CORSOptions:
    """Options allowing all origins, the common HTTP methods and the default headers."""
    return CORSOptions(
        allowed_origins=list(ALLOW_ALL_ORIGINS),
        allowed_methods=list(ALL_COMMON_METHODS),
        allowed_headers=list(DEFAULT_ALLOWED_HEADERS),
        allow_credentials=False,
        max_age=0,
    )


def default_headers_with(*headers: str) -> List[str]:
    """Return the default allowed headers followed by `headers`.

    Duplicates are not removed.
    """
    return [*DEFAULT_ALLOWED_HEADERS, *headers]
