"""Health check and prometheus endpoints."""

from prometheus_client import REGISTRY


async def test_health_ok_with_key(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "services": {"api_key": "configured"}}


async def test_health_reports_missing_key(client, environ):
    environ.clear()
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "error", "services": {"api_key": "missing"}}


async def test_metrics_exposes_proxy_counters(client, upstream):
    await client.post("/api/openai", json={"system": "S", "input": [
        {"role": "user", "content": [{"type": "input_text", "text": "hi"}]},
    ]})

    res = await client.get("/metrics")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert 'openai_upstream_requests_total{status="200"}' in res.text
    assert "openai_api_key_configured 1.0" in res.text


async def test_error_responses_are_counted(client):
    before = REGISTRY.get_sample_value("proxy_errors_total", {"kind": "method"}) or 0
    await client.delete("/api/openai")
    assert REGISTRY.get_sample_value("proxy_errors_total", {"kind": "method"}) == before + 1
