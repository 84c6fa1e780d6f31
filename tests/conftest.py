"""Pytest configuration and shared fixtures for catalog-client tests."""

import httpx
import pytest
from pydantic import BaseModel, ConfigDict

from catalog_client import get_api
from catalog_client.testing import RecordingTransport, make_catalog, mock_api_credentials

LAZY_LIST_LINKS = (
    '<http://fakeserver/lazy-list?size=25&page=0>; rel="first",'
    '<http://fakeserver/lazy-list?size=25&page=1>; rel="next",'
    '<http://fakeserver/lazy-list?size=25&page=1>; rel="last"'
)


class TestBody(BaseModel):
    __test__ = False

    model_config = ConfigDict(extra="forbid")

    test: str


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential resolution.
    """
    import os

    test_prefixes = ("TEST_", "API_", "CATALOG_API_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def credentials():
    return mock_api_credentials()


@pytest.fixture
def catalog():
    """The resource table the fake server below answers for."""
    return make_catalog(
        {
            "Test": {
                "action": {"method": "POST", "path": "/test", "body": TestBody, "bodyKeys": {"test"}},
                "action2": {"method": "GET", "path": "/test2"},
                "action3": {"method": "POST", "path": "/test3", "body": TestBody, "bodyKeys": {"test"}},
                "rateLimit": {"method": "GET", "path": "/rate-limit"},
                "error": {"method": "GET", "path": "/error"},
                "lazyList": {"method": "GET", "path": "/lazy-list"},
                "item": {"method": "GET", "path": "/items/{item_id}"},
            }
        },
        name="catalog-client-test",
        version="3.0.0-test",
    )


def fake_server(request: httpx.Request) -> httpx.Response:
    """Answers like the API the ``catalog`` fixture describes."""
    path = request.url.path

    if request.method == "POST" and path == "/test":
        return httpx.Response(201, headers={"Location": "http://localhost/id"})
    if request.method == "POST" and path == "/test3":
        return httpx.Response(201, json={"test3": True})
    if path == "/rate-limit":
        return httpx.Response(429, headers={"X-RateLimit-Reset": "1000"})
    if path == "/error":
        return httpx.Response(400)
    if path == "/test2":
        return httpx.Response(200, json={"result": True})
    if path == "/lazy-list":
        if request.url.params.get("page") == "1":
            return httpx.Response(200, json=[{"id": "3"}], headers={"Link": LAZY_LIST_LINKS})
        return httpx.Response(200, json=[{"id": "1"}, {"id": "2"}], headers={"Link": LAZY_LIST_LINKS})
    if path.startswith("/items/"):
        return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1]})
    return httpx.Response(404, json={"title": "Not Found", "status": 404})


@pytest.fixture
def transport():
    return RecordingTransport(fake_server)


@pytest.fixture
async def api(credentials, catalog, transport):
    client = get_api(credentials, catalog=catalog, transport=transport)
    yield client
    await client.aclose()
