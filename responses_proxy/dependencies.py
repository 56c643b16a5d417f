#!/usr/bin/env python3
"""
Dependency provider functions for the application.
"""

from fastapi import Depends, Request
import httpx

from responses_proxy.services.credentials import ApiKeySource
from responses_proxy.shared.config import config
from responses_proxy.features.chat_completion.client import ResponsesClient

def get_http_client(request: Request) -> httpx.AsyncClient:
    """Returns the shared httpx.AsyncClient instance."""
    return request.app.state.http_client

def get_api_key_source(request: Request) -> ApiKeySource:
    """Returns the shared ApiKeySource instance."""
    return request.app.state.api_key_source

def get_responses_client(http_client: httpx.AsyncClient = Depends(get_http_client)) -> ResponsesClient:
    """Builds a ResponsesClient over the shared HTTP client."""
    return ResponsesClient(
        http_client,
        base_url=config["openai"]["base_url"],
        model=config["openai"]["model"],
        max_output_tokens=config["openai"]["max_output_tokens"],
    )
