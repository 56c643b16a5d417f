from fastapi import Depends

from responses_proxy.dependencies import get_api_key_source
from responses_proxy.services.credentials import ApiKeySource
from responses_proxy.shared.config import logger
from .query import HealthCheckResponse

class HealthCheckHandler:
    """Reports readiness without spending an upstream request."""

    def __init__(self, api_keys: ApiKeySource = Depends(get_api_key_source)):
        self._api_keys = api_keys

    async def handle(self) -> HealthCheckResponse:
        key_configured = self._api_keys.is_configured()
        if not key_configured:
            logger.warning("Health check: %s is not set", self._api_keys.env_var)

        services_status = {"api_key": "configured" if key_configured else "missing"}
        overall_status = "ok" if key_configured else "error"
        return HealthCheckResponse(status=overall_status, services=services_status)
