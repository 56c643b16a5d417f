#!/usr/bin/env python3
"""
OpenAI Responses Proxy
Forwards browser chat requests to the OpenAI Responses API, keeping the API key server-side.
"""

from contextlib import asynccontextmanager

import httpx
import uvicorn

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from responses_proxy.shared.config import config, logger
from responses_proxy.shared.error_handlers import register_error_handlers
from responses_proxy.shared.middleware import RequestContextMiddleware
from responses_proxy.shared.utils import get_local_ip
from responses_proxy.services.credentials import ApiKeySource
from responses_proxy.features.chat_completion.endpoints import router as chat_completion_router
from responses_proxy.features.health_check.endpoints import router as health_check_router
from responses_proxy.features.metrics.endpoints import router as metrics_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan resources."""
    client_kwargs = {"timeout": config["openai"]["timeout"]}
    if config["requestProxy"]["enabled"] and config["requestProxy"]["url"]:
        client_kwargs["proxy"] = config["requestProxy"]["url"]
        logger.info("Using proxy for httpx client: %s", config["requestProxy"]["url"])
    app.state.http_client = httpx.AsyncClient(**client_kwargs)

    app.state.api_key_source = ApiKeySource(config["openai"]["api_key_env"])
    if not app.state.api_key_source.is_configured():
        # Not fatal: each POST answers 500 until the variable is set
        logger.warning("%s is not set; completions will fail until it is.", config["openai"]["api_key_env"])

    logger.info("Application startup complete")
    yield
    await app.state.http_client.aclose()
    logger.info("Application shutdown complete")

app = FastAPI(
    title="OpenAI Responses Proxy",
    description="Proxies chat requests to the OpenAI Responses API with a server-side API key",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(chat_completion_router, prefix="/api", tags=["Proxy"])
app.include_router(health_check_router, tags=["Monitoring"])
app.include_router(metrics_router)

register_error_handlers(app)
app.add_middleware(RequestContextMiddleware)

if config["server"]["cors_origins"]:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config["server"]["cors_origins"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

if __name__ == "__main__":
    host = config["server"]["host"]
    port = config["server"]["port"]

    display_host = get_local_ip() if host == "0.0.0.0" else host
    logger.warning("Starting OpenAI Responses Proxy on %s:%s", host, port)
    logger.warning("API URL: http://%s:%s/api/openai", display_host, port)
    logger.warning("Metrics: http://%s:%s/metrics", display_host, port)

    log_config = uvicorn.config.LOGGING_CONFIG
    http_log_level = config["server"].get("http_log_level", "INFO").upper()
    log_config["loggers"]["uvicorn.access"]["level"] = http_log_level

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_config=log_config,
        timeout_graceful_shutdown=30,
        server_header=False
    )
