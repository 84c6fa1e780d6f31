"""Request/response logging transport.

Wraps another transport and logs what goes over the wire. It never changes a
request or a response and never retries: a failed request surfaces exactly
as the wrapped transport raised it.

```python
from catalog_client.transport.error_logging import LoggingTransport
import httpx

transport = LoggingTransport(wrapped_transport=httpx.AsyncHTTPTransport())

async with httpx.AsyncClient(transport=transport) as client:
    response = await client.get("https://api.example.com/v1/accounts")
```
"""

import json
import logging
import time

import httpx

from catalog_client.errors.handler import detect_null_fields

logger = logging.getLogger(__name__)


class LoggingTransport(httpx.AsyncBaseTransport):
    """Transport that logs requests, responses and transport failures.

    Successful exchanges are logged at debug level. 4xx/5xx responses are
    logged at warning level together with any null fields found in a JSON
    error body. The Authorization header is never logged.

    Args:
        wrapped_transport: The underlying transport to wrap
        log_bodies: Whether to include (truncated) error bodies in warnings
    """

    MAX_LOGGED_BODY = 500

    def __init__(self, *, wrapped_transport: httpx.AsyncBaseTransport, log_bodies: bool = True) -> None:
        self._wrapped_transport = wrapped_transport
        self.log_bodies = log_bodies

    async def __aenter__(self):
        """Enter async context, delegating to wrapped transport."""
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, delegating to wrapped transport."""
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request through the wrapped transport, logging the exchange."""
        started = time.monotonic()
        logger.debug(f"Request {request.method} {request.url}")

        try:
            response = await self._wrapped_transport.handle_async_request(request)
        except httpx.TransportError as e:
            logger.warning(f"Request {request.method} {request.url} failed: {e!r}")
            raise

        elapsed = time.monotonic() - started

        if response.status_code >= 400:
            await response.aread()
            logger.warning(
                f"Request {request.method} {request.url} returned {response.status_code} "
                f"in {elapsed:.3f}s{self._describe_body(response)}"
            )
        else:
            logger.debug(f"Request {request.method} {request.url} returned {response.status_code} in {elapsed:.3f}s")

        return response

    def _describe_body(self, response: httpx.Response) -> str:
        if not self.log_bodies or not response.content:
            return ""

        description = f": {response.text[: self.MAX_LOGGED_BODY]}"
        try:
            data = json.loads(response.content)
        except ValueError:
            return description

        if isinstance(data, (dict, list)):
            null_paths = detect_null_fields(data)
            if null_paths:
                description += f" (null fields: {', '.join(null_paths)})"
        return description
