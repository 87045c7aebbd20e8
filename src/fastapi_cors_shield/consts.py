HEADER_ORIGIN = "Origin"
"""The request header carrying the origin of a cross-origin request"""

HEADER_VARY = "Vary"

HEADER_REQUEST_METHOD = "Access-Control-Request-Method"
"""Preflight request header announcing the method of the actual request"""

HEADER_REQUEST_HEADERS = "Access-Control-Request-Headers"
"""Preflight request header announcing the headers of the actual request"""

HEADER_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
HEADER_ALLOW_METHODS = "Access-Control-Allow-Methods"
HEADER_ALLOW_HEADERS = "Access-Control-Allow-Headers"
HEADER_EXPOSE_HEADERS = "Access-Control-Expose-Headers"
HEADER_MAX_AGE = "Access-Control-Max-Age"
HEADER_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"

PREFLIGHT_VARY_HEADERS = (
    HEADER_ORIGIN,
    HEADER_REQUEST_METHOD,
    HEADER_REQUEST_HEADERS,
)
"""Request headers a preflight response depends on, in the order they are added to `Vary`"""

WILDCARD = "*"
"""Sentinel that switches an origins or headers list to 'allow all'"""

METHOD_OPTIONS = "OPTIONS"

SPEC_SIMPLE_METHODS = ("GET", "HEAD", "POST")
"""Methods the CORS specification treats as simple; used when no methods are configured"""

ALL_COMMON_METHODS = ("DELETE", "GET", "HEAD", "PATCH", "POST", "PUT")

DEFAULT_ALLOWED_HEADERS = ("Accept", "Content-Type", "Origin", "X-Requested-With")
"""Headers allowed when no allowed headers are configured"""

DEFAULT_EXPOSE_HEADERS = (
    "Cache-Control",
    "Content-Language",
    "Content-Type",
    "Expires",
    "Last-Modified",
    "Pragma",
)
"""Safelisted response headers exposed when no exposed headers are configured"""

ALLOW_ALL_ORIGINS = (WILDCARD,)
ALLOW_ALL_HEADERS = (WILDCARD,)
