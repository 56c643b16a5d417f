import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from responses_proxy.shared.config import logger

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an ID, times it, and writes one access log line.

    The ID is taken from the caller's X-Request-ID header when present so a
    browser session can correlate its own retries.
    """
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        # The 'date' header is dropped; the hosting front end sets its own
        if "date" in response.headers:
            del response.headers["date"]

        logger.info(
            "%s %s -> %d in %.4fs",
            request.method, request.url.path, response.status_code, process_time,
            extra={
                "req_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_sec": round(process_time, 4),
            },
        )
        return response
