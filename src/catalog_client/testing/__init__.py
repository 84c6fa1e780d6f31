"""Testing utilities for catalog clients.

Helpers for exercising a client without a server: fake credentials, a quick
catalog builder, and a mock transport that records what was sent.

Example:
    ```python
    import httpx

    from catalog_client import get_api
    from catalog_client.testing import RecordingTransport, make_catalog, mock_api_credentials


    async def test_lists_accounts():
        transport = RecordingTransport(lambda request: httpx.Response(200, json=[]))
        catalog = make_catalog({"Accounts": {"list": {"method": "GET", "path": "/accounts"}}})
        api = get_api(mock_api_credentials(), catalog=catalog, transport=transport)

        assert await api.Accounts.list() == []
        assert transport.requests[0].url.path.endswith("/accounts")
    ```
"""

import json
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from catalog_client.schema import SchemaCatalog, load_catalog


def mock_api_credentials(base_url: str = "http://fakeserver") -> dict[str, str]:
    """Construction arguments for a client pointed at a fake host."""
    return {"base_url": base_url, "api_token": "token", "api_secret": "secret"}


def make_catalog(resources: Mapping[str, Any], *, name: str = "test-api", version: str = "0.0.0-test") -> SchemaCatalog:
    """Build a catalog from a resource table."""
    return load_catalog({"name": name, "version": version, "resources": resources})


class RecordingTransport(httpx.MockTransport):
    """``httpx.MockTransport`` that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def request_json(self, index: int = -1) -> Any:
        """Decoded JSON body of a recorded request, or None without a body."""
        content = self.requests[index].content
        return json.loads(content) if content else None


__all__ = ["RecordingTransport", "make_catalog", "mock_api_credentials"]
