"""ASGI middleware running the CORS preflight engine for FastAPI / Starlette apps.

Preflight requests are answered by the middleware itself; every other request
is forwarded to the application and, when it carries an allowed `Origin`,
its response is annotated with the CORS headers for actual requests.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from fastapi_cors_shield.consts import (
    HEADER_ORIGIN,
    HEADER_REQUEST_METHOD,
    HEADER_VARY,
    METHOD_OPTIONS,
)
from fastapi_cors_shield.cors import CORS
from fastapi_cors_shield.options import CORSOptions
from fastapi_cors_shield.preflight import PreflightResponse

logger = logging.getLogger(__name__)


class _HeaderRequestView:
    __slots__ = ("method", "headers")

    def __init__(self, method: str, headers: Headers):
        self.method = method
        self.headers = headers


class CORSPreflightMiddleware:
    """Pure ASGI CORS middleware.

    Args:
        app: The wrapped ASGI application
        cors: A compiled `CORS` instance
        options: Options to compile when `cors` is not given
        error_response_type: `"json"` or `"plain"` body for rejected preflights
        strict_preflight: When `False`, `OPTIONS` requests without an
            `Access-Control-Request-Method` header are forwarded to the
            application instead of being rejected
    """

    def __init__(
        self,
        app: ASGIApp,
        cors: Optional[CORS] = None,
        options: Optional[CORSOptions] = None,
        error_response_type: str = "json",
        strict_preflight: bool = True,
    ):
        if cors is None:
            cors = (options or CORSOptions()).new_cors()
        self.app = app
        self.cors = cors
        self.error_response_type = error_response_type
        self.strict_preflight = strict_preflight

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        if HEADER_ORIGIN not in headers:
            await self.app(scope, receive, send)
            return

        if self.is_preflight(scope["method"], headers):
            response = self.preflight_response(scope["method"], headers)
            await response(scope, receive, send)
            return

        await self.simple_response(scope, receive, send, headers)

    def is_preflight(self, method: str, headers: Headers) -> bool:
        if method != METHOD_OPTIONS:
            return False
        return self.strict_preflight or HEADER_REQUEST_METHOD in headers

    def preflight_response(self, method: str, request_headers: Headers) -> Response:
        result: PreflightResponse = self.cors.do_preflight(
            _HeaderRequestView(method, request_headers)
        )
        if not result.has_error:
            return PlainTextResponse("OK", status_code=200, headers=result.headers)

        error = result.error
        logger.info(
            f"Rejected CORS preflight from {request_headers.get(HEADER_ORIGIN)!r}: "
            f"{error.kind.value} [{error.code}]"
        )
        if self.error_response_type == "json":
            return JSONResponse(
                status_code=error.status_code,
                content={"error": error.message, "code": error.code},
                headers=result.headers,
            )
        return PlainTextResponse(
            error.message, status_code=error.status_code, headers=result.headers
        )

    async def simple_response(
        self, scope: Scope, receive: Receive, send: Send, request_headers: Headers
    ) -> None:
        cors_headers = self.cors.simple_response_headers(request_headers[HEADER_ORIGIN])

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start" and cors_headers:
                message.setdefault("headers", [])
                headers = MutableHeaders(scope=message)
                for name, value in cors_headers.items():
                    if name == HEADER_VARY:
                        headers.add_vary_header(value)
                    else:
                        headers[name] = value
            await send(message)

        await self.app(scope, receive, send_with_cors)


def install_cors(
    app: FastAPI,
    options: Optional[CORSOptions] = None,
    cors: Optional[CORS] = None,
    **kwargs,
) -> CORS:
    """Compile `options` and add `CORSPreflightMiddleware` to `app`.

    Returns:
        CORS: The instance the middleware validates with
    """
    if cors is None:
        cors = (options or CORSOptions()).new_cors()
    app.add_middleware(CORSPreflightMiddleware, cors=cors, **kwargs)
    return cors
