from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from shorturl.services import ShortURLService
from shorturl.utils import AppConfig
from shorturl.web import create_app


@pytest.fixture
def service() -> ShortURLService:
    return MagicMock(spec=ShortURLService)


@pytest.fixture
def upstream():
    """Recorded upstream requests plus a swappable handler."""

    class Upstream:
        def __init__(self):
            self.requests = []
            self.response = httpx.Response(200, text='upstream body', headers={'X-Upstream': 'yes'})
            self.error = None

        def __call__(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if self.error is not None:
                raise self.error
            return self.response

    return Upstream()


@pytest.fixture
def client(service, upstream) -> TestClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app = create_app(AppConfig(domain='s.example.com'), service, http_client=http_client)
    return TestClient(app, raise_server_exceptions=False, follow_redirects=False)
