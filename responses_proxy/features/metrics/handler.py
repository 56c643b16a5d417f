from fastapi import Depends
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from responses_proxy.dependencies import get_api_key_source
from responses_proxy.services.credentials import ApiKeySource

class MetricsHandler:
    """Serves the prometheus registry."""

    def __init__(self, api_keys: ApiKeySource = Depends(get_api_key_source)):
        self._api_keys = api_keys

    def get_raw_metrics(self) -> Response:
        """Returns raw metrics in Prometheus format."""
        # The key gauge otherwise only moves when a request reads the key
        self._api_keys.is_configured()
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )
