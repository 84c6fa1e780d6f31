"""Transport layer for the catalog client.

Transports wrap httpx's AsyncHTTPTransport. The client carries
no retry layer: rate limits and server errors reach the caller, who decides
whether to try again.

Example:
    ```python
    from catalog_client.transport import create_transport

    transport = create_transport()  # logging around the default httpx transport
    ```
"""

import httpx

from catalog_client.transport.error_logging import LoggingTransport


def create_transport(
    wrapped_transport: httpx.AsyncBaseTransport | None = None,
    *,
    enable_logging: bool = True,
) -> httpx.AsyncBaseTransport:
    """Build the transport stack used by ``get_api``.

    Args:
        wrapped_transport: Innermost transport; defaults to ``httpx.AsyncHTTPTransport()``
        enable_logging: Wrap the transport in a ``LoggingTransport``
    """
    transport = wrapped_transport or httpx.AsyncHTTPTransport()
    if enable_logging:
        transport = LoggingTransport(wrapped_transport=transport)
    return transport


__all__ = ["LoggingTransport", "create_transport"]
