import httpx
import pytest
from fastapi.testclient import TestClient

from profile_viewer.api.proxycurl import ProxycurlClient
from profile_viewer.config import Settings
from profile_viewer.main import app, get_proxycurl_client, get_settings


class FakeUpstream:
    """Stands in for the Proxycurl API and records what it was sent."""

    def __init__(self):
        self.requests = []
        self.response = httpx.Response(200, json={"full_name": "Ada Lovelace"})
        self.error = None

    def respond(self, status_code=200, **kwargs):
        self.response = httpx.Response(status_code, **kwargs)

    def fail_with(self, error):
        self.error = error

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(settings, upstream):
    transport = httpx.MockTransport(upstream.handle)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_proxycurl_client] = lambda: ProxycurlClient(
        settings.proxycurl, api_key=settings.api_key, transport=transport
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
