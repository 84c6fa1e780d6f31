"""Building a configured client from a catalog."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from catalog_client.client import ApiNamespace, ApiResource
from catalog_client.config import ApiConfig
from catalog_client.invoker import bind_action
from catalog_client.schema import SchemaCatalog
from catalog_client.transport import create_transport

logger = logging.getLogger(__name__)


def get_api(
    config: ApiConfig | Mapping[str, Any] | None = None,
    /,
    *,
    catalog: SchemaCatalog | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    enable_logging: bool = True,
    **config_fields: Any,
) -> ApiNamespace:
    """Create a client exposing every action of ``catalog``.

    Args:
        config: An ``ApiConfig``, or a mapping with ``api_token``/``apiToken``,
            ``api_secret``/``apiSecret`` and optionally ``base_url``/``baseUrl``.
            When omitted, ``config_fields`` are used instead.
        catalog: Resources and actions to expose; an empty catalog when omitted
        transport: Innermost httpx transport (tests pass ``httpx.MockTransport``)
        enable_logging: Wrap the transport in a ``LoggingTransport``
        **config_fields: Config values merged over a mapping ``config``

    Returns:
        A read-only ``ApiNamespace``

    Raises:
        ConfigError: If the token or secret is missing. Raised before the
            catalog is looked at or any HTTP client is created.

    Example:
        ```python
        api = get_api({"apiToken": "token", "apiSecret": "secret"}, catalog=catalog)
        async with api:
            account = await api.Accounts.get(account_id="42")
        ```
    """
    if not isinstance(config, ApiConfig):
        config = ApiConfig.from_mapping({**(config or {}), **config_fields})
    elif config_fields:
        config = ApiConfig.from_mapping({**vars(config), **config_fields})

    catalog = catalog if catalog is not None else SchemaCatalog()

    http_client = httpx.AsyncClient(
        transport=create_transport(transport, enable_logging=enable_logging),
        timeout=config.timeout,
    )

    resources = {
        resource_name: ApiResource(
            resource_name,
            {
                action_name: bind_action(resource_name, action_name, spec, config, http_client)
                for action_name, spec in resource.items()
            },
        )
        for resource_name, resource in catalog.items()
    }

    logger.debug(
        f"Built client for {catalog.name or 'catalog'} {catalog.version} at {config.base_url} "
        f"({len(resources)} resources)"
    )
    return ApiNamespace(config, catalog, resources, http_client)
