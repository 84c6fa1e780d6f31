"""Catalog Client - callable REST clients generated from a resource catalog.

A catalog describes resources and their actions (method, path, query and
body fields). ``get_api`` turns it into an object graph of awaitable actions
that validate input, send authenticated requests, classify responses and
page through ``Link``-header listings lazily.

Example:
    ```python
    from catalog_client import get_api, load_catalog

    catalog = load_catalog({"name": "accounts-api", "version": "1.0.0", "resources": {...}})
    api = get_api({"apiToken": "token", "apiSecret": "secret"}, catalog=catalog)

    async with api:
        created = await api.Accounts.create({"name": "Ada"})  # {"id": "..."}
        pages = await api.Accounts.list(size=25)
        async for accounts in pages:
            ...
    ```
"""

__version__ = "0.1.0"

from catalog_client.client import ApiNamespace, ApiResource  # noqa: E402
from catalog_client.config import ApiConfig  # noqa: E402
from catalog_client.errors import (  # noqa: E402
    APIError,
    CatalogClientError,
    ConfigError,
    NetworkError,
    RateLimitError,
    SchemaError,
    ValidationError,
)
from catalog_client.factory import get_api  # noqa: E402
from catalog_client.pagination import PageSequence  # noqa: E402
from catalog_client.schema import ActionSpec, ResourceSpec, SchemaCatalog, load_catalog  # noqa: E402

__all__ = [
    "APIError",
    "ActionSpec",
    "ApiConfig",
    "ApiNamespace",
    "ApiResource",
    "CatalogClientError",
    "ConfigError",
    "NetworkError",
    "PageSequence",
    "RateLimitError",
    "ResourceSpec",
    "SchemaCatalog",
    "SchemaError",
    "ValidationError",
    "__version__",
    "get_api",
    "load_catalog",
]
