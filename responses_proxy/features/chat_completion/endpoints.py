from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from .handler import ChatCompletionHandler

router = APIRouter()

# Every method lands here so the handler can answer 405 in its own error shape
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "TRACE", "CONNECT"]


@router.api_route("/openai", methods=ALL_METHODS, response_model=None)
async def openai_proxy(
    request: Request,
    handler: ChatCompletionHandler = Depends(ChatCompletionHandler),
) -> JSONResponse:
    """
    Status probe on ``GET ?ping``, chat completion on ``POST``.
    The caller resends its full history every turn and appends the returned
    ``assistant_message`` to it.
    """
    return await handler.handle(request)
