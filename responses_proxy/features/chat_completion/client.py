import httpx
from typing import Any, Dict, List

from responses_proxy.shared.config import logger
from responses_proxy.shared.constants import DEVELOPER_ROLE, INPUT_TEXT_TYPE, RESPONSES_ENDPOINT
from responses_proxy.shared.errors import InternalProxyError, UpstreamError
from responses_proxy.shared.metrics import TOKENS_RECEIVED, TOKENS_SENT, UPSTREAM_REQUESTS
from responses_proxy.shared.utils import mask_key


def extract_output_text(data: Any) -> str:
    """
    Pulls the assistant text out of a Responses API body.

    Prefers the ``output_text`` convenience field; falls back to joining the
    ``output_text`` parts of every ``message`` item in ``output``. Anything
    missing or oddly shaped yields an empty string.
    """
    if not isinstance(data, dict):
        return ""
    text = data.get("output_text")
    if isinstance(text, str) and text:
        return text

    parts: List[str] = []
    for item in data.get("output") or []:
        if not isinstance(item, dict) or item.get("type") != "message":
            continue
        for part in item.get("content") or []:
            if isinstance(part, dict) and part.get("type") == "output_text" and isinstance(part.get("text"), str):
                parts.append(part["text"])
    return "".join(parts)


def record_usage(data: Any) -> None:
    usage = data.get("usage") if isinstance(data, dict) else None
    if not isinstance(usage, dict):
        return
    TOKENS_SENT.inc(usage.get("input_tokens") or 0)
    TOKENS_RECEIVED.inc(usage.get("output_tokens") or 0)


class ResponsesClient:
    """Sends a single, non-streaming request to the OpenAI Responses API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        model: str,
        max_output_tokens: int,
    ):
        self._client = http_client
        self._url = f"{base_url.rstrip('/')}{RESPONSES_ENDPOINT}"
        self.model = model
        self.max_output_tokens = max_output_tokens

    def build_payload(self, system: str, turns: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Prepends the developer turn to the caller's turns, which pass through untouched."""
        developer_turn = {
            "role": DEVELOPER_ROLE,
            "content": [{"type": INPUT_TEXT_TYPE, "text": system}],
        }
        return {
            "model": self.model,
            "input": [developer_turn, *turns],
            "max_output_tokens": self.max_output_tokens,
        }

    async def create_response(self, api_key: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Posts the payload and returns the parsed body of a 2xx reply."""
        logger.info(
            "Sending %d turn(s) to %s with key %s for model '%s'.",
            len(payload["input"]), self._url, mask_key(api_key), payload["model"],
        )
        headers = {"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"}

        try:
            response = await self._client.post(self._url, json=payload, headers=headers)
        except httpx.RequestError as e:
            UPSTREAM_REQUESTS.labels(status="network_error").inc()
            logger.error("Request error occurred: %r", e)
            raise InternalProxyError(str(e) or f"Request to OpenAI API failed: {type(e).__name__}") from e

        UPSTREAM_REQUESTS.labels(status=str(response.status_code)).inc()

        # The body is JSON on success and failure alike
        data = response.json()

        if response.is_success:
            record_usage(data)
            return data

        logger.error("HTTP error from OpenAI: %s - %s", response.status_code, response.text)
        raise UpstreamError(response.status_code, data)
