#!/usr/bin/env python3
"""
Metrics definitions for OpenAI Responses Proxy.
"""

import prometheus_client

UPSTREAM_REQUESTS = prometheus_client.Counter(
    'openai_upstream_requests', 'Requests sent to the OpenAI Responses API', ['status']
)
TOKENS_SENT = prometheus_client.Counter('openai_tokens_sent', 'Input tokens reported by the upstream API')
TOKENS_RECEIVED = prometheus_client.Counter('openai_tokens_received', 'Output tokens reported by the upstream API')
PROXY_ERRORS = prometheus_client.Counter('proxy_errors', 'Error responses returned by the proxy', ['kind'])
API_KEY_CONFIGURED = prometheus_client.Gauge('openai_api_key_configured', 'Whether the OpenAI API key is set (1) or not (0)')
