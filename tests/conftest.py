"""Test fixtures: the FastAPI app wired to a fake upstream and a fake environment.

The lifespan never runs under ASGITransport, so both app.state dependencies
are replaced through dependency_overrides instead.
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from main import app
from responses_proxy.dependencies import get_api_key_source, get_http_client
from responses_proxy.services.credentials import ApiKeySource

TEST_API_KEY = "sk-test-0123456789abcdef"


class FakeUpstream:
    """Records outbound requests and answers with a canned reply or error."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.json = {"id": "resp_123", "output_text": "hello"}
        self.content = None
        self.error = None

    def reply(self, status_code, json=None, content=None):
        self.status_code = status_code
        self.json = json
        self.content = content

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def environ():
    """Mutable stand-in for os.environ; tests clear it to drop the key."""
    return {"OPENAI_API_KEY": TEST_API_KEY}


@pytest.fixture
async def client(upstream, environ):
    upstream_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    key_source = ApiKeySource("OPENAI_API_KEY", environ=environ)

    app.dependency_overrides[get_http_client] = lambda: upstream_client
    app.dependency_overrides[get_api_key_source] = lambda: key_source

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    await upstream_client.aclose()
