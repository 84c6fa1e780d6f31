"""Declarative description of the API: resources, actions and their fields.

A catalog is plain data. Each action names its HTTP method and path, a
pydantic model for the query string, a pydantic model for the body, and the
set of input keys that belong to the body. ``None`` stands for a schema that
accepts anything.

Example:
    ```python
    from pydantic import BaseModel, ConfigDict

    from catalog_client.schema import ActionSpec, load_catalog


    class NewAccount(BaseModel):
        model_config = ConfigDict(extra="forbid")
        name: str


    catalog = load_catalog(
        {
            "name": "accounts-api",
            "version": "1.0.0",
            "resources": {
                "Accounts": {
                    "create": ActionSpec("POST", "/accounts", body_schema=NewAccount, body_keys={"name"}),
                    "get": {"method": "GET", "path": "/accounts/{account_id}"},
                }
            },
        }
    )
    ```
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel

from catalog_client.errors.exceptions import SchemaError

HTTP_METHODS = frozenset(["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])

_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

Validator = type[BaseModel] | None


def schema_fields(schema: Validator) -> frozenset[str]:
    """Input keys a schema declares, using aliases where the model defines them."""
    if schema is None:
        return frozenset()
    return frozenset(info.alias or name for name, info in schema.model_fields.items())


@dataclass(frozen=True)
class ActionSpec:
    """One API operation.

    Attributes:
        method: HTTP method, stored upper-case
        path: Path appended to the base URL; may hold ``{name}`` placeholders
        query_schema: Model validating the query part of the input
        body_schema: Model validating the body part of the input
        body_keys: Input keys sent in the body; everything else goes to the query.
            With a ``body_schema`` they must be exactly the schema's fields
        paginated: ``True`` to always page results carrying a Link header,
            ``False`` to never page, ``None`` to page JSON arrays carrying one
    """

    method: str
    path: str
    query_schema: Validator = None
    body_schema: Validator = None
    body_keys: frozenset[str] = field(default_factory=frozenset)
    paginated: bool | None = None

    def __post_init__(self):
        method = str(self.method).upper()
        if method not in HTTP_METHODS:
            raise SchemaError(f"Unsupported HTTP method {self.method!r} for path {self.path!r}")
        object.__setattr__(self, "method", method)

        if not isinstance(self.path, str) or not self.path.startswith("/"):
            raise SchemaError(f"Action path must start with '/': {self.path!r}")

        for label, schema in (("query_schema", self.query_schema), ("body_schema", self.body_schema)):
            if schema is not None and not (isinstance(schema, type) and issubclass(schema, BaseModel)):
                raise SchemaError(f"{label} for {self.method} {self.path} must be a pydantic model or None")

        if isinstance(self.body_keys, str):
            raise SchemaError(f"body_keys for {self.method} {self.path} must be a collection of names")
        body_keys = frozenset(self.body_keys)
        object.__setattr__(self, "body_keys", body_keys)

        if self.body_schema is not None:
            declared = schema_fields(self.body_schema)
            undeclared = declared - body_keys
            if undeclared:
                raise SchemaError(
                    f"Body fields {sorted(undeclared)} of {self.method} {self.path} are missing from body_keys"
                )
            unknown = body_keys - declared
            if unknown:
                raise SchemaError(
                    f"body_keys {sorted(unknown)} of {self.method} {self.path} are not fields of "
                    f"{self.body_schema.__name__}"
                )

        clashing = body_keys & self.placeholders
        if clashing:
            raise SchemaError(f"Path placeholders {sorted(clashing)} of {self.path} cannot also be body keys")

    @property
    def placeholders(self) -> frozenset[str]:
        return frozenset(_PLACEHOLDER_RE.findall(self.path))

    @property
    def has_body(self) -> bool:
        return bool(self.body_keys)

    def expand_path(self, values: Mapping[str, Any]) -> str:
        """Fill ``{name}`` placeholders; ``values`` must hold every placeholder."""
        return _PLACEHOLDER_RE.sub(lambda match: quote(str(values[match.group(1)]), safe=""), self.path)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ActionSpec":
        """Build an ActionSpec from a plain mapping.

        Accepts ``query``/``body``/``bodyKeys`` as aliases of
        ``query_schema``/``body_schema``/``body_keys``.
        """
        try:
            method = data["method"]
            path = data["path"]
        except KeyError as e:
            raise SchemaError(f"Action definition is missing {e.args[0]!r}") from None
        return cls(
            method=method,
            path=path,
            query_schema=data.get("query_schema", data.get("query")),
            body_schema=data.get("body_schema", data.get("body")),
            body_keys=frozenset(data.get("body_keys", data.get("bodyKeys", ()))),
            paginated=data.get("paginated"),
        )


class _ReadOnlyMapping(Mapping):
    _entries: Mapping

    def __getitem__(self, key):
        return self._entries[key]

    def __iter__(self) -> Iterator:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class ResourceSpec(_ReadOnlyMapping):
    """Read-only mapping of action name to ActionSpec."""

    def __init__(self, name: str, actions: Mapping[str, ActionSpec | Mapping[str, Any]]):
        self.name = name
        entries = {}
        for action_name, action in actions.items():
            if not isinstance(action, ActionSpec):
                action = ActionSpec.from_mapping(action)
            entries[action_name] = action
        self._entries = MappingProxyType(entries)

    def __repr__(self) -> str:
        return f"ResourceSpec({self.name!r}, actions={list(self._entries)})"


class SchemaCatalog(_ReadOnlyMapping):
    """Read-only mapping of resource name to ResourceSpec."""

    def __init__(
        self,
        resources: Mapping[str, ResourceSpec | Mapping[str, Any]] | None = None,
        *,
        name: str = "",
        version: str = "",
    ):
        self.name = name
        self.version = version
        entries = {}
        for resource_name, resource in (resources or {}).items():
            if not isinstance(resource, ResourceSpec):
                resource = ResourceSpec(resource_name, resource)
            entries[resource_name] = resource
        self._entries = MappingProxyType(entries)

    def actions(self) -> Iterable[tuple[str, str, ActionSpec]]:
        """Yield ``(resource, action, spec)`` for every declared action."""
        for resource_name, resource in self._entries.items():
            for action_name, spec in resource.items():
                yield resource_name, action_name, spec

    def __repr__(self) -> str:
        return f"SchemaCatalog(name={self.name!r}, version={self.version!r}, resources={list(self._entries)})"


def load_catalog(data: Mapping[str, Any]) -> SchemaCatalog:
    """Build a SchemaCatalog from a plain description.

    The description holds ``name``, ``version`` and the resource table under
    ``resources`` (or ``objects``).
    """
    resources = data.get("resources", data.get("objects"))
    if resources is None:
        raise SchemaError("Catalog description has no 'resources' table")
    return SchemaCatalog(resources, name=data.get("name", ""), version=data.get("version", ""))
