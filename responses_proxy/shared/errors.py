"""
Error hierarchy for the proxy.

Every failure branch of the request handler raises one of these; the
exception handler registered in ``error_handlers`` renders ``{"error": ...}``
with the carried status code, so each branch is observable by the caller.
"""

from typing import Any, Dict, List, Optional

from responses_proxy.shared.constants import (
    INVALID_BODY_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    UPSTREAM_ERROR_MESSAGE,
)


class ProxyError(Exception):
    """Base exception carrying an HTTP status and the ``error`` payload."""

    kind = "internal"

    def __init__(
        self,
        status_code: int,
        error: Any,
        headers: Optional[Dict[str, str]] = None,
    ):
        if isinstance(error, dict):
            message = str(error.get("message", ""))
        else:
            message = str(error)
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.headers = headers

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.error}


class MethodNotAllowedError(ProxyError):
    kind = "method"

    def __init__(self):
        # The 405 body carries a bare string, unlike every other branch
        super().__init__(405, METHOD_NOT_ALLOWED_MESSAGE, headers={"Allow": "POST"})


class ConfigurationError(ProxyError):
    kind = "configuration"

    def __init__(self, env_var: str):
        super().__init__(
            500, {"message": f"{env_var} is missing in the server environment variables."}
        )


class MissingFieldsError(ProxyError):
    kind = "validation"

    def __init__(self):
        super().__init__(400, {"message": MISSING_FIELDS_MESSAGE})


class InvalidRequestError(ProxyError):
    kind = "validation"

    def __init__(self, details: List[Dict[str, str]]):
        super().__init__(400, {"message": INVALID_BODY_MESSAGE, "details": details})


class UpstreamError(ProxyError):
    """Non-2xx reply from the upstream API, status code propagated verbatim."""

    kind = "upstream"

    def __init__(self, status_code: int, data: Any):
        error = data.get("error") if isinstance(data, dict) else None
        if not error:
            error = {"message": UPSTREAM_ERROR_MESSAGE, "raw": data}
        super().__init__(status_code, error)


class InternalProxyError(ProxyError):
    kind = "internal"

    def __init__(self, message: Optional[str] = None):
        super().__init__(500, {"message": message or UNKNOWN_ERROR_MESSAGE})
