"""The object graph handed to API consumers.

``ApiNamespace`` exposes one ``ApiResource`` per catalog resource, and each
resource exposes one bound action per declared action. Both are built once
and are read-only afterwards, so they can be shared between concurrent calls.
Undeclared names resolve to ``None`` rather than raising; names starting with
an underscore, and names shadowed by a namespace method, are reachable with
item access (``api["config"]``) only.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

import httpx

from catalog_client.config import ApiConfig
from catalog_client.invoker import Action
from catalog_client.schema import SchemaCatalog


class _ReadOnlyNamespace:
    """Attribute and item access over a fixed table of members."""

    __slots__ = ("_members",)

    def __init__(self, members: Mapping[str, Any]):
        object.__setattr__(self, "_members", MappingProxyType(dict(members)))

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._members.get(name)

    def __getitem__(self, name: str) -> Any:
        return self._members.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._members))


class ApiResource(_ReadOnlyNamespace):
    """The bound actions of one resource."""

    __slots__ = ("_name",)

    def __init__(self, name: str, actions: Mapping[str, Action]):
        super().__init__(actions)
        object.__setattr__(self, "_name", name)

    def __repr__(self) -> str:
        return f"ApiResource({self._name!r}, actions={list(self._members)})"


class ApiNamespace(_ReadOnlyNamespace):
    """A configured client: one attribute per resource of the catalog.

    Owns the ``httpx.AsyncClient`` every action sends through; close it with
    ``aclose()`` or by using the namespace as an async context manager.
    """

    __slots__ = ("_config", "_catalog", "_http_client")

    def __init__(
        self,
        config: ApiConfig,
        catalog: SchemaCatalog,
        resources: Mapping[str, ApiResource],
        http_client: httpx.AsyncClient,
    ):
        super().__init__(resources)
        object.__setattr__(self, "_config", config)
        object.__setattr__(self, "_catalog", catalog)
        object.__setattr__(self, "_http_client", http_client)

    @property
    def config(self) -> ApiConfig:
        return self._config

    @property
    def catalog(self) -> SchemaCatalog:
        return self._catalog

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def __aenter__(self) -> "ApiNamespace":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"ApiNamespace(base_url={self._config.base_url!r}, resources={list(self._members)})"
