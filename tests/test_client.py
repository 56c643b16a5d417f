"""ResponsesClient: payload construction, text extraction and usage accounting."""

import httpx
import pytest
from prometheus_client import REGISTRY

from responses_proxy.features.chat_completion.client import ResponsesClient, extract_output_text
from responses_proxy.shared.errors import InternalProxyError, UpstreamError


def make_client(handler, base_url="https://upstream.test/v1/"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ResponsesClient(http_client, base_url=base_url, model="gpt-test", max_output_tokens=10)


def test_build_payload_prepends_single_developer_turn():
    client = make_client(lambda request: httpx.Response(200, json={}))
    turns = [{"role": "user", "content": [{"type": "input_text", "text": "hi", "extra": 1}]}]

    payload = client.build_payload("be brief", turns)

    assert payload == {
        "model": "gpt-test",
        "input": [
            {"role": "developer", "content": [{"type": "input_text", "text": "be brief"}]},
            {"role": "user", "content": [{"type": "input_text", "text": "hi", "extra": 1}]},
        ],
        "max_output_tokens": 10,
    }
    # The caller's list is not modified in place
    assert len(turns) == 1


def test_extract_prefers_convenience_field():
    data = {
        "output_text": "short",
        "output": [{"type": "message", "content": [{"type": "output_text", "text": "long"}]}],
    }
    assert extract_output_text(data) == "short"


def test_extract_falls_back_to_output_items():
    data = {
        "output": [
            {"type": "reasoning", "summary": []},
            {
                "type": "message",
                "role": "assistant",
                "content": [
                    {"type": "output_text", "text": "Hello, "},
                    {"type": "refusal", "refusal": "no"},
                    {"type": "output_text", "text": "world"},
                ],
            },
        ],
    }
    assert extract_output_text(data) == "Hello, world"


@pytest.mark.parametrize("data", [
    {},
    {"output_text": None},
    {"output_text": 42},
    {"output": None},
    {"output": ["junk", {"type": "message", "content": None}]},
    [],
    "text",
])
def test_extract_fails_closed(data):
    assert extract_output_text(data) == ""


async def test_create_response_joins_base_url_and_records_usage():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"output_text": "ok", "usage": {"input_tokens": 7, "output_tokens": 3}})

    client = make_client(handler)
    before_sent = REGISTRY.get_sample_value("openai_tokens_sent_total") or 0
    before_received = REGISTRY.get_sample_value("openai_tokens_received_total") or 0

    data = await client.create_response("sk-abcdefghijkl", client.build_payload("S", []))

    assert data["output_text"] == "ok"
    assert str(seen[0].url) == "https://upstream.test/v1/responses"
    assert REGISTRY.get_sample_value("openai_tokens_sent_total") == before_sent + 7
    assert REGISTRY.get_sample_value("openai_tokens_received_total") == before_received + 3


async def test_create_response_raises_upstream_error():
    client = make_client(lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}))

    with pytest.raises(UpstreamError) as exc_info:
        await client.create_response("sk-abcdefghijkl", client.build_payload("S", []))

    assert exc_info.value.status_code == 401
    assert exc_info.value.to_response() == {"error": {"message": "bad key"}}


async def test_create_response_wraps_network_errors():
    def handler(request):
        raise httpx.ConnectTimeout("timed out connecting")

    client = make_client(handler)

    with pytest.raises(InternalProxyError) as exc_info:
        await client.create_response("sk-abcdefghijkl", client.build_payload("S", []))

    assert exc_info.value.status_code == 500
    assert exc_info.value.error == {"message": "timed out connecting"}
