"""
Global exception handlers: every ProxyError becomes a JSON ``{"error": ...}``
response; anything that escapes a handler is reported as a generic 500.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from responses_proxy.shared.config import logger
from responses_proxy.shared.constants import UNKNOWN_ERROR_MESSAGE
from responses_proxy.shared.errors import ProxyError
from responses_proxy.shared.metrics import PROXY_ERRORS


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        PROXY_ERRORS.labels(kind=exc.kind).inc()
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "%s error on %s %s: %s (status %d)",
            exc.kind, request.method, request.url.path, exc, exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response(),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        PROXY_ERRORS.labels(kind="unhandled").inc()
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"message": UNKNOWN_ERROR_MESSAGE}},
        )
