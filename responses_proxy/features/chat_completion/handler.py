# responses_proxy/features/chat_completion/handler.py
import json
from typing import Any, Dict

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from responses_proxy.dependencies import get_api_key_source, get_responses_client
from responses_proxy.services.credentials import ApiKeySource
from responses_proxy.shared.config import logger
from responses_proxy.shared.errors import (
    ConfigurationError,
    InternalProxyError,
    InvalidRequestError,
    MethodNotAllowedError,
    MissingFieldsError,
    ProxyError,
)

from .client import ResponsesClient, extract_output_text
from .command import CompletionRequest, CompletionResponse, ConversationTurn


async def read_json_body(request: Request) -> Dict[str, Any]:
    """An empty body or a non-object JSON body reads as an empty object."""
    raw = await request.body()
    if not raw.strip():
        return {}
    body = json.loads(raw)
    return body if isinstance(body, dict) else {}


def validate_body(body: Dict[str, Any]) -> CompletionRequest:
    if not body.get("system") or not body.get("input"):
        raise MissingFieldsError()
    try:
        return CompletionRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError([
            {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]) from e


class ChatCompletionHandler:
    def __init__(
        self,
        api_keys: ApiKeySource = Depends(get_api_key_source),
        responses_client: ResponsesClient = Depends(get_responses_client),
    ):
        self._api_keys = api_keys
        self._client = responses_client

    async def handle(self, request: Request) -> JSONResponse:
        if request.method == "GET" and "ping" in request.query_params:
            return JSONResponse(content={"ok": self._api_keys.is_configured()})

        if request.method != "POST":
            raise MethodNotAllowedError()

        api_key = self._api_keys.get_key()
        if not api_key:
            raise ConfigurationError(self._api_keys.env_var)

        try:
            body = await read_json_body(request)
            completion_request = validate_body(body)
            # Forward the caller's turns as received, validation only gates them
            payload = self._client.build_payload(completion_request.system, body["input"])
            data = await self._client.create_response(api_key, payload)
        except ProxyError:
            raise
        except Exception as e:
            logger.exception("Completion request failed")
            raise InternalProxyError(str(e)) from e

        text = extract_output_text(data)
        if not text:
            response_id = data.get("id") if isinstance(data, dict) else None
            logger.warning("Upstream reply %s carried no output text", response_id or "<no id>")

        completion = CompletionResponse(text=text, assistant_message=ConversationTurn.assistant_text(text))
        return JSONResponse(content=completion.model_dump())
